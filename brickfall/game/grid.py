"""
Grid operations for the playing field.

The grid is a 2D numpy array (rows x columns) of int8 values:
  - 0 = empty cell
  - 1-7 = material id of a placed block (the Brick value)

The top rows are a hidden spawn buffer. They are never drawn but take
part in collision and line clearing like any other row.

Every function here is pure: inputs are never modified and any grid
returned is a fresh array.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

# Base points per cleared line; a clear of n lines scores LINE_BONUS * n * n.
LINE_BONUS = 50


@dataclass(frozen=True)
class ClearResult:
    """Outcome of one clear attempt.

    Attributes:
        grid: Grid after full rows were removed.
        lines_removed: Number of rows removed (0 if none).
        score_bonus: Points earned by this clear.
        cleared_rows: Indices of the removed rows in the input grid.
    """
    grid: np.ndarray
    lines_removed: int = 0
    score_bonus: int = 0
    cleared_rows: tuple[int, ...] = field(default_factory=tuple)


def new_grid(rows: int, columns: int) -> np.ndarray:
    """Return an all-empty grid of the given size."""
    if rows <= 0 or columns <= 0:
        raise ValueError(f"Grid dimensions must be positive, got {rows}x{columns}")
    return np.zeros((rows, columns), dtype=np.int8)


def copy_grid(grid: np.ndarray) -> np.ndarray:
    """Return an independent snapshot of the grid."""
    return np.array(grid, dtype=np.int8, copy=True)


def overlaps(grid: np.ndarray, shape: np.ndarray, x: int, y: int) -> bool:
    """Check whether a shape placed at (x, y) collides.

    A collision happens when any occupied cell of the shape:
      - falls outside the grid (0 <= col < columns, 0 <= row < rows), or
      - lands on a non-zero grid cell.

    Empty shape cells are never checked, so a shape's blank margin may
    hang over the edge of the grid.

    Args:
        grid: Playing field.
        shape: Rotation state of a brick.
        x: Column of the shape's top-left corner.
        y: Row of the shape's top-left corner.

    Returns:
        True if the placement collides, False if it fits.
    """
    rows, columns = grid.shape
    for r, c in zip(*np.nonzero(shape)):
        grid_row = y + int(r)
        grid_col = x + int(c)
        # Bounds first: negative indices would wrap in numpy
        if grid_col < 0 or grid_col >= columns:
            return True
        if grid_row < 0 or grid_row >= rows:
            return True
        if grid[grid_row, grid_col] != 0:
            return True
    return False


def stamp(grid: np.ndarray, shape: np.ndarray, x: int, y: int) -> np.ndarray:
    """Return a copy of the grid with the shape written in at (x, y).

    Does NOT check for collisions first; the caller must ensure
    overlaps() is False, otherwise occupied cells are overwritten.
    """
    merged = copy_grid(grid)
    for r, c in zip(*np.nonzero(shape)):
        merged[y + int(r), x + int(c)] = shape[r, c]
    return merged


def line_score(lines_removed: int, line_bonus: int = LINE_BONUS) -> int:
    """Points for clearing `lines_removed` rows in a single pass.

    Grows with the square of the line count, so simultaneous clears are
    worth more than the same number of lines cleared one at a time.
    """
    if lines_removed <= 0:
        return 0
    return line_bonus * lines_removed * lines_removed


def clear_full_rows(grid: np.ndarray, line_bonus: int = LINE_BONUS) -> ClearResult:
    """Remove all full rows and shift everything above them down.

    A row is full when every cell in it is non-zero. One fresh empty row
    is inserted at the top for each removed row, so the grid keeps its
    size.

    Args:
        grid: Playing field.
        line_bonus: Base points per line, see line_score().

    Returns:
        ClearResult with the compacted grid, line count and bonus.
    """
    full = np.all(grid != 0, axis=1)
    cleared_rows = tuple(int(r) for r in np.flatnonzero(full))
    if not cleared_rows:
        return ClearResult(grid=copy_grid(grid))

    lines_removed = len(cleared_rows)
    remaining = grid[~full]
    empty_rows = np.zeros((lines_removed, grid.shape[1]), dtype=np.int8)
    compacted = np.vstack([empty_rows, remaining]).astype(np.int8)
    return ClearResult(
        grid=compacted,
        lines_removed=lines_removed,
        score_bonus=line_score(lines_removed, line_bonus),
        cleared_rows=cleared_rows,
    )


def visible_rows(grid: np.ndarray, hidden_rows: int) -> np.ndarray:
    """Return a copy of the grid without the hidden spawn buffer."""
    return copy_grid(grid[hidden_rows:])
