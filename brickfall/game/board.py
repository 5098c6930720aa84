"""
Board orchestrator: the falling brick, the grid, the supply and the score.

The board is a small state machine:

    EMPTY --new_game()--> ACTIVE --spawn collides--> GAME_OVER
                            ^                           |
                            +--------new_game()---------+

Rejected moves and rotations are ordinary results (False), not errors.
The only terminal condition is a spawn that collides, which spawn_next()
reports by returning True. The board does not lock itself after that;
the caller is expected to stop sending commands until new_game().

All arrays handed out (grid, view) are copies; the live grid is never
exposed.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, fields
from typing import Any, Protocol

import numpy as np

from brickfall.game import grid as grid_ops
from brickfall.game.grid import ClearResult
from brickfall.game.pieces import Brick, get_shape
from brickfall.game.rotation import BrickRotator
from brickfall.game.score import Score
from brickfall.game.supply import BrickSupply


class SupportsBricks(Protocol):
    def current(self) -> Brick: ...

    def peek_next(self) -> Brick: ...


class BoardState(enum.Enum):
    EMPTY = "empty"
    ACTIVE = "active"
    GAME_OVER = "game_over"


class Direction(enum.Enum):
    """Single-step moves with their (dx, dy) offsets."""
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


@dataclass(frozen=True)
class BoardConfig:
    rows: int = 25
    columns: int = 10
    hidden_rows: int = 2
    spawn_x: int = 4
    spawn_y: int = 0
    line_bonus: int = grid_ops.LINE_BONUS

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> BoardConfig:
        """Build a config from a loaded YAML dict.

        Unrelated keys and keys left empty (YAML null) are ignored, so the
        defaults apply.

        Raises:
            ValueError: If a value is not an integer.
        """
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in config.items():
            if key not in known or value is None:
                continue
            try:
                values[key] = int(value)
            except (TypeError, ValueError):
                raise ValueError(f"Config key {key!r} must be an integer, got {value!r}") from None
        return cls(**values)


@dataclass(frozen=True)
class ViewSnapshot:
    """What a renderer needs to draw the bricks. Arrays are private copies.

    Attributes:
        shape: Active brick in its current rotation.
        x: Column of the active brick's top-left corner.
        y: Row of the active brick's top-left corner.
        next_shape: Preview brick in its spawn rotation.
    """
    shape: np.ndarray
    x: int
    y: int
    next_shape: np.ndarray


@dataclass(frozen=True)
class DownResult:
    """Outcome of a downward step or a drop.

    Attributes:
        moved: True if the brick moved down instead of locking.
        clear: ClearResult if the brick locked, else None.
        game_over: True if the spawn after locking collided.
        view: Snapshot after the command.
    """
    moved: bool
    clear: ClearResult | None
    game_over: bool
    view: ViewSnapshot


class Board:
    """Falling-block board.

    Attributes:
        config: Board dimensions, spawn offset and scoring coefficient.
        supply: Brick supply of the current game.
        score: Score ledger; subscribe to it for change notifications.
        state: Current BoardState.
        x: Column of the active brick's top-left corner.
        y: Row of the active brick's top-left corner.
    """

    def __init__(
        self,
        config: BoardConfig | None = None,
        supply: SupportsBricks | None = None,
    ) -> None:
        """Create an empty board. Call new_game() to spawn the first brick.

        Args:
            config: Board settings (defaults to BoardConfig()).
            supply: Brick supply; defaults to an unrestricted supply.
        """
        self.config = config or BoardConfig()
        if not 0 <= self.config.hidden_rows < self.config.rows:
            raise ValueError(
                f"hidden_rows must be in [0, {self.config.rows}), got {self.config.hidden_rows}"
            )
        if self.config.spawn_y < 0 or (
            self.config.hidden_rows and self.config.spawn_y >= self.config.hidden_rows
        ):
            raise ValueError(
                f"spawn_y must lie in the hidden buffer [0, {self.config.hidden_rows}),"
                f" got {self.config.spawn_y}"
            )
        self._grid = grid_ops.new_grid(self.config.rows, self.config.columns)
        self.supply: SupportsBricks = supply or BrickSupply.unrestricted()
        self.score = Score()
        self.state = BoardState.EMPTY
        self.x: int = 0
        self.y: int = 0
        self._rotator = BrickRotator()

    # ── Game lifecycle ───────────────────────────────────────────────────

    def new_game(self, supply: SupportsBricks | None = None) -> bool:
        """Clear the grid, reset the score and spawn the first brick.

        Args:
            supply: Supply for this game; keeps the current one if None.

        Returns:
            True if the first spawn already collides (game over).
        """
        if supply is not None:
            self.supply = supply
        self._grid = grid_ops.new_grid(self.config.rows, self.config.columns)
        self.score.reset()
        return self.spawn_next()

    def spawn_next(self) -> bool:
        """Take a brick from the supply and place it at the spawn offset.

        Returns:
            True if the spawned brick collides (game over), False otherwise.
        """
        self._rotator.set_brick(self.supply.current())
        self.x = self.config.spawn_x
        self.y = self.config.spawn_y
        if grid_ops.overlaps(self._grid, self._rotator.current_shape(), self.x, self.y):
            self.state = BoardState.GAME_OVER
            return True
        self.state = BoardState.ACTIVE
        return False

    # ── Commands ─────────────────────────────────────────────────────────

    def move(self, direction: Direction) -> bool:
        """Move the active brick one cell.

        Returns:
            True if the brick moved, False if the move was blocked.
        """
        shape = self._current_shape()
        new_x = self.x + direction.dx
        new_y = self.y + direction.dy
        if grid_ops.overlaps(self._grid, shape, new_x, new_y):
            return False
        self.x = new_x
        self.y = new_y
        return True

    def move_down(self) -> bool:
        """Move the brick one row down. Returns False if blocked."""
        return self.move(Direction.DOWN)

    def move_left(self) -> bool:
        """Move the brick one column left. Returns False if blocked."""
        return self.move(Direction.LEFT)

    def move_right(self) -> bool:
        """Move the brick one column right. Returns False if blocked."""
        return self.move(Direction.RIGHT)

    def rotate(self) -> bool:
        """Rotate the active brick one step in place (no wall kicks).

        Returns:
            True if the rotation was applied, False if it would collide.
        """
        self._require_brick()
        candidate = self._rotator.peek_next_rotation()
        if grid_ops.overlaps(self._grid, candidate.shape, self.x, self.y):
            return False
        self._rotator.commit_rotation(candidate.index)
        return True

    def drop_to_bottom(self) -> bool:
        """Move the brick down until it rests on something.

        Returns:
            Always True once the brick rests on something.
        """
        while self.move_down():
            pass
        return True

    def merge_and_clear(self) -> ClearResult:
        """Write the active brick into the grid and clear full rows.

        The bonus is added to the score when rows were removed.
        """
        self._grid = grid_ops.stamp(self._grid, self._current_shape(), self.x, self.y)
        result = grid_ops.clear_full_rows(self._grid, self.config.line_bonus)
        self._grid = result.grid
        if result.lines_removed > 0:
            self.score.add(result.score_bonus)
        # The caller's copy must not alias the live grid
        return ClearResult(
            grid=grid_ops.copy_grid(result.grid),
            lines_removed=result.lines_removed,
            score_bonus=result.score_bonus,
            cleared_rows=result.cleared_rows,
        )

    def lock_and_advance(self) -> DownResult:
        """Lock the brick where it is, clear rows, then spawn the next brick."""
        clear = self.merge_and_clear()
        game_over = self.spawn_next()
        return DownResult(moved=False, clear=clear, game_over=game_over, view=self.get_view())

    def soft_drop(self) -> DownResult:
        """One downward step; locks the brick if it cannot move down."""
        if self.move_down():
            return DownResult(moved=True, clear=None, game_over=False, view=self.get_view())
        return self.lock_and_advance()

    def hard_drop(self) -> DownResult:
        """Drop the brick to the bottom and lock it immediately."""
        self.drop_to_bottom()
        return self.lock_and_advance()

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def game_over(self) -> bool:
        """True once a spawn has collided, until the next new_game()."""
        return self.state is BoardState.GAME_OVER

    @property
    def current_brick(self) -> Brick | None:
        """The active brick kind, or None before the first game."""
        return self._rotator.brick

    @property
    def rotation(self) -> int:
        """Rotation index (0-3) of the active brick."""
        return self._rotator.index

    def get_grid(self) -> np.ndarray:
        """Return a copy of the full grid, spawn buffer included."""
        return grid_ops.copy_grid(self._grid)

    def get_visible_grid(self) -> np.ndarray:
        """Return a copy of the grid without the hidden spawn buffer."""
        return grid_ops.visible_rows(self._grid, self.config.hidden_rows)

    def get_view(self) -> ViewSnapshot:
        """Return a fresh snapshot of the active and preview bricks."""
        return ViewSnapshot(
            shape=self._current_shape().copy(),
            x=self.x,
            y=self.y,
            next_shape=get_shape(self.supply.peek_next(), 0).copy(),
        )

    def _require_brick(self) -> None:
        if self.state is BoardState.EMPTY:
            raise RuntimeError("No active brick; call new_game() first.")

    def _current_shape(self) -> np.ndarray:
        self._require_brick()
        return self._rotator.current_shape()
