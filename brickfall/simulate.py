"""
Headless simulation: play games with a random command stream.

Stands in for the timer driver and the keyboard handler. Every step the
policy sends one command (move, rotate, soft drop or hard drop); a soft
drop that is blocked locks the brick, exactly like a gravity tick.

Per-game statistics are printed and, when `log_path` is set, appended
to a CSV file.
"""

from __future__ import annotations

import csv
import enum
import pathlib
import queue as queue_mod
import random
import threading
import time
from typing import Any

import numpy as np

from brickfall.game.board import Board, BoardConfig
from brickfall.game.supply import parse_mode, supply_for_mode


# ── CSV Logger ───────────────────────────────────────────────────────────────

CSV_FIELDNAMES = [
    "episode",
    "mode",
    "score",
    "lines",
    "bricks",
    "steps",
    "max_clear",
    "game_over",
]


class CSVLogger:
    """Thread-safe CSV logger that writes rows in a background thread."""

    def __init__(self, path: str | pathlib.Path, fieldnames: list[str]) -> None:
        self._path = pathlib.Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._fieldnames = fieldnames
        self._queue: queue_mod.Queue = queue_mod.Queue()
        self._thread = threading.Thread(target=self._writer, daemon=True)
        self._thread.start()

    def _writer(self) -> None:
        header_written = self._path.exists() and self._path.stat().st_size > 0
        while True:
            row = self._queue.get()
            if row is None:
                break
            try:
                with open(self._path, "a", newline="", encoding="utf-8") as f:
                    w = csv.DictWriter(f, fieldnames=self._fieldnames)
                    if not header_written:
                        w.writeheader()
                        header_written = True
                    w.writerow(row)
            except OSError as e:
                print(f"CSVLogger error: {e}", flush=True)

    def write(self, row: dict) -> None:
        self._queue.put_nowait(row)

    def shutdown(self) -> None:
        self._queue.put(None)
        self._thread.join(timeout=5)


# ── Random policy ────────────────────────────────────────────────────────────

class Command(enum.IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4


# Relative weights: mostly shuffle sideways and fall, drop now and then
COMMAND_WEIGHTS: dict[Command, float] = {
    Command.LEFT: 3.0,
    Command.RIGHT: 3.0,
    Command.ROTATE: 2.0,
    Command.SOFT_DROP: 4.0,
    Command.HARD_DROP: 1.0,
}


def play_episode(board: Board, rng: random.Random, max_steps: int = 0) -> dict[str, Any]:
    """Play one game to game over (or `max_steps` commands, 0 = no limit).

    Args:
        board: Board with a freshly started game.
        rng: Random source for the command stream.
        max_steps: Step cap.

    Returns:
        Dict with score, lines, bricks, steps, max_clear and game_over.
    """
    commands = list(COMMAND_WEIGHTS)
    weights = list(COMMAND_WEIGHTS.values())

    lines = 0
    bricks = 1
    steps = 0
    max_clear = 0
    while not board.game_over:
        if max_steps and steps >= max_steps:
            break
        command = rng.choices(commands, weights=weights)[0]
        steps += 1
        if command == Command.LEFT:
            board.move_left()
        elif command == Command.RIGHT:
            board.move_right()
        elif command == Command.ROTATE:
            board.rotate()
        else:
            if command == Command.SOFT_DROP:
                result = board.soft_drop()
            else:
                result = board.hard_drop()
            if result.clear is not None:
                lines += result.clear.lines_removed
                max_clear = max(max_clear, result.clear.lines_removed)
                if not result.game_over:
                    bricks += 1

    return {
        "score": board.score.value,
        "lines": lines,
        "bricks": bricks,
        "steps": steps,
        "max_clear": max_clear,
        "game_over": board.game_over,
    }


def simulate(config: dict[str, Any]) -> list[dict[str, Any]]:
    """Play `episodes` games and report per-game statistics.

    Args:
        config: Config dict loaded from game.yaml. Board keys go to
            BoardConfig; `mode`, `seed`, `episodes`, `max_steps` and
            `log_path` control the run.

    Returns:
        One record per game.
    """
    mode = parse_mode(config.get("mode", "classic"))
    episodes = int(config.get("episodes", 10))
    max_steps = int(config.get("max_steps", 0))
    seed = config.get("seed")
    log_path = config.get("log_path")

    rng = random.Random(seed)
    board = Board(BoardConfig.from_dict(config))
    csv_logger = CSVLogger(log_path, CSV_FIELDNAMES) if log_path else None

    print(f"Simulating {episodes} games in {mode.value} mode...", flush=True)
    start_time = time.time()

    records: list[dict[str, Any]] = []
    try:
        for ep in range(1, episodes + 1):
            board.new_game(supply_for_mode(mode, rng.randrange(2**32)))
            stats = play_episode(board, rng, max_steps=max_steps)
            record = {"episode": ep, "mode": mode.value, **stats}
            records.append(record)
            if csv_logger is not None:
                csv_logger.write(record)
            print(
                f"Game {ep}/{episodes} | Score: {stats['score']} | Lines: {stats['lines']}"
                f" | Bricks: {stats['bricks']} | Steps: {stats['steps']}",
                flush=True,
            )
    finally:
        if csv_logger is not None:
            csv_logger.shutdown()

    if records:
        scores = np.array([r["score"] for r in records])
        lines = np.array([r["lines"] for r in records])
        print(
            f"\nDone in {time.time() - start_time:.1f}s"
            f" | Score mean {scores.mean():.1f} (max {scores.max()})"
            f" | Lines mean {lines.mean():.2f} (max {lines.max()})",
            flush=True,
        )
    return records
