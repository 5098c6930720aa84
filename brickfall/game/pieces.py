"""
Brick catalog: every brick kind and its 4 rotation states.

Coordinate convention:
  - Each rotation state is a small 2D numpy array, row 0 at the top.
  - Occupied cells hold the brick's material id (its Brick value),
    empty cells hold 0.
  - Within one kind, every rotation state shares the same bounding box,
    so the offset of the box origin means the same thing in every state.

Rotation order: [0=spawn, 1=CW, 2=180, 3=CCW]. One rotate command
advances one step; four steps return to the spawn state.
"""

from __future__ import annotations

import enum

import numpy as np


class Brick(enum.IntEnum):
    """Brick kinds. The value doubles as the material id stamped into the grid."""
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


NUM_ROTATIONS = 4

# =============================================================================
# Rotation states (1 = occupied; scaled to the material id below)
# =============================================================================

_LAYOUTS: dict[Brick, list[list[list[int]]]] = {
    Brick.I: [
        [[0, 0, 0, 0],
         [1, 1, 1, 1],
         [0, 0, 0, 0],
         [0, 0, 0, 0]],
        [[0, 0, 1, 0],
         [0, 0, 1, 0],
         [0, 0, 1, 0],
         [0, 0, 1, 0]],
        [[0, 0, 0, 0],
         [0, 0, 0, 0],
         [1, 1, 1, 1],
         [0, 0, 0, 0]],
        [[0, 1, 0, 0],
         [0, 1, 0, 0],
         [0, 1, 0, 0],
         [0, 1, 0, 0]],
    ],
    # All 4 rotations are identical for the square
    Brick.O: [
        [[1, 1],
         [1, 1]],
    ] * NUM_ROTATIONS,
    Brick.T: [
        [[0, 1, 0],
         [1, 1, 1],
         [0, 0, 0]],
        [[0, 1, 0],
         [0, 1, 1],
         [0, 1, 0]],
        [[0, 0, 0],
         [1, 1, 1],
         [0, 1, 0]],
        [[0, 1, 0],
         [1, 1, 0],
         [0, 1, 0]],
    ],
    Brick.S: [
        [[0, 1, 1],
         [1, 1, 0],
         [0, 0, 0]],
        [[0, 1, 0],
         [0, 1, 1],
         [0, 0, 1]],
        [[0, 0, 0],
         [0, 1, 1],
         [1, 1, 0]],
        [[1, 0, 0],
         [1, 1, 0],
         [0, 1, 0]],
    ],
    Brick.Z: [
        [[1, 1, 0],
         [0, 1, 1],
         [0, 0, 0]],
        [[0, 0, 1],
         [0, 1, 1],
         [0, 1, 0]],
        [[0, 0, 0],
         [1, 1, 0],
         [0, 1, 1]],
        [[0, 1, 0],
         [1, 1, 0],
         [1, 0, 0]],
    ],
    Brick.J: [
        [[1, 0, 0],
         [1, 1, 1],
         [0, 0, 0]],
        [[0, 1, 1],
         [0, 1, 0],
         [0, 1, 0]],
        [[0, 0, 0],
         [1, 1, 1],
         [0, 0, 1]],
        [[0, 1, 0],
         [0, 1, 0],
         [1, 1, 0]],
    ],
    Brick.L: [
        [[0, 0, 1],
         [1, 1, 1],
         [0, 0, 0]],
        [[0, 1, 0],
         [0, 1, 0],
         [0, 1, 1]],
        [[0, 0, 0],
         [1, 1, 1],
         [1, 0, 0]],
        [[1, 1, 0],
         [0, 1, 0],
         [0, 1, 0]],
    ],
}


def _build_rotations(brick: Brick) -> tuple[np.ndarray, ...]:
    states = []
    for layout in _LAYOUTS[brick]:
        shape = np.array(layout, dtype=np.int8) * np.int8(brick.value)
        shape.setflags(write=False)
        states.append(shape)
    return tuple(states)


SHAPES: dict[Brick, tuple[np.ndarray, ...]] = {
    brick: _build_rotations(brick) for brick in Brick
}

# =============================================================================
# Brick sets used by the supplies
# =============================================================================

ALL_BRICKS: tuple[Brick, ...] = tuple(Brick)

# Long bar and square only
RESTRICTED_BRICKS: tuple[Brick, ...] = (Brick.I, Brick.O)


def get_rotations(brick: Brick) -> tuple[np.ndarray, ...]:
    """Return the 4 read-only rotation states of a brick kind.

    Args:
        brick: Brick kind.

    Returns:
        Tuple of 4 int8 arrays in canonical rotation order.
    """
    return SHAPES[Brick(brick)]


def get_shape(brick: Brick, rotation: int) -> np.ndarray:
    """Return one read-only rotation state; the index wraps modulo 4."""
    return SHAPES[Brick(brick)][rotation % NUM_ROTATIONS]
