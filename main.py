"""
Entry point for the Brickfall engine.

Supports one mode:
  - simulate: Play headless games with a random command stream and
    report per-game statistics.

Usage:
    python main.py --mode simulate
    python main.py --mode simulate --config config/game.yaml --episodes 50
    python main.py --mode simulate --game-mode relax --seed 7 --log logs/relax.csv
"""

from __future__ import annotations

import argparse
import pathlib
import sys

import yaml


def load_config(config_path: str | pathlib.Path) -> dict:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Dict of configuration key-value pairs.

    Raises:
        FileNotFoundError: If the config file does not exist.
    """
    config_path = pathlib.Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Namespace with mode, config and run overrides.
    """
    parser = argparse.ArgumentParser(
        description="Brickfall: falling-block puzzle engine.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--mode",
        type=str,
        choices=["simulate"],
        default="simulate",
        help="Run mode: 'simulate' (headless random play).",
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config/game.yaml",
        help="Path to the YAML configuration file.",
    )
    parser.add_argument(
        "--game-mode",
        type=str,
        choices=["classic", "challenge", "relax"],
        default=None,
        help="Game mode; 'relax' only deals long bars and squares.",
    )
    parser.add_argument(
        "--episodes",
        type=int,
        default=None,
        help="Number of games to play (overrides the config).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible runs.",
    )
    parser.add_argument(
        "--log",
        type=str,
        default=None,
        help="CSV file to append per-game statistics to.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main entry point: parse args, load config, and dispatch to the selected mode."""
    args = parse_args(argv)
    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    overrides = {
        "mode": args.game_mode,
        "episodes": args.episodes,
        "seed": args.seed,
        "log_path": args.log,
    }
    config.update({k: v for k, v in overrides.items() if v is not None})

    if args.mode == "simulate":
        from brickfall.simulate import simulate
        try:
            simulate(config)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

    else:
        print(f"Unknown mode: {args.mode}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
