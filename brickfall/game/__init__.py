"""Game engine: brick catalog, supplies, grid operations, score and board."""

from brickfall.game.pieces import Brick, ALL_BRICKS, RESTRICTED_BRICKS, get_rotations
from brickfall.game.supply import BrickSupply, GameMode, SupplyKind, supply_for_mode
from brickfall.game.rotation import BrickRotator
from brickfall.game.grid import ClearResult, clear_full_rows, overlaps, stamp
from brickfall.game.score import Score
from brickfall.game.board import (
    Board,
    BoardConfig,
    BoardState,
    Direction,
    DownResult,
    ViewSnapshot,
)

__all__ = [
    "Brick",
    "ALL_BRICKS",
    "RESTRICTED_BRICKS",
    "get_rotations",
    "BrickSupply",
    "GameMode",
    "SupplyKind",
    "supply_for_mode",
    "BrickRotator",
    "ClearResult",
    "clear_full_rows",
    "overlaps",
    "stamp",
    "Score",
    "Board",
    "BoardConfig",
    "BoardState",
    "Direction",
    "DownResult",
    "ViewSnapshot",
]
