"""Rotation cursor for the active brick."""

from __future__ import annotations

from typing import NamedTuple

import numpy as np

from brickfall.game.pieces import NUM_ROTATIONS, Brick, get_rotations


class RotationCandidate(NamedTuple):
    """Shape and index the brick would have after one more rotation."""
    shape: np.ndarray
    index: int


class BrickRotator:
    """Tracks the active brick and its rotation index (0-3).

    peek_next_rotation() never mutates state, so the caller can test the
    candidate for collisions before committing it.
    """

    def __init__(self) -> None:
        self.brick: Brick | None = None
        self.index: int = 0

    def set_brick(self, brick: Brick) -> None:
        """Make `brick` the active brick in its spawn rotation."""
        self.brick = Brick(brick)
        self.index = 0

    def _rotations(self) -> tuple[np.ndarray, ...]:
        if self.brick is None:
            raise RuntimeError("No active brick; call set_brick() first.")
        return get_rotations(self.brick)

    def current_shape(self) -> np.ndarray:
        """Return the read-only grid of the active rotation.

        Raises:
            RuntimeError: If no brick has been set.
        """
        return self._rotations()[self.index]

    def peek_next_rotation(self) -> RotationCandidate:
        """Return the shape and index one rotation ahead, without applying it.

        Returns:
            RotationCandidate with index (current + 1) % 4.
        """
        rotations = self._rotations()
        next_index = (self.index + 1) % NUM_ROTATIONS
        return RotationCandidate(rotations[next_index], next_index)

    def commit_rotation(self, index: int) -> None:
        """Make `index` the active rotation.

        Args:
            index: Rotation index, normally taken from peek_next_rotation().
        """
        self.index = index % NUM_ROTATIONS
