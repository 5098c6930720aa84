import numpy as np
import pytest

from brickfall.game.grid import (
    clear_full_rows,
    copy_grid,
    line_score,
    new_grid,
    overlaps,
    stamp,
    visible_rows,
)
from brickfall.game.pieces import Brick, get_shape


def _reference_overlaps(grid, shape, x, y):
    rows, columns = grid.shape
    for r in range(shape.shape[0]):
        for c in range(shape.shape[1]):
            if shape[r, c] == 0:
                continue
            gr, gc = y + r, x + c
            if not (0 <= gr < rows and 0 <= gc < columns):
                return True
            if grid[gr, gc] != 0:
                return True
    return False


def test_new_grid_is_empty():
    grid = new_grid(5, 4)
    assert grid.shape == (5, 4)
    assert grid.dtype == np.int8
    assert not grid.any()


def test_new_grid_rejects_bad_dimensions():
    with pytest.raises(ValueError):
        new_grid(0, 10)


def test_copy_is_independent():
    grid = new_grid(3, 3)
    snapshot = copy_grid(grid)
    grid[0, 0] = 1
    assert snapshot[0, 0] == 0


def test_overlaps_bounds():
    grid = new_grid(10, 6)
    o = get_shape(Brick.O, 0)
    assert not overlaps(grid, o, 0, 0)
    assert not overlaps(grid, o, 4, 8)
    assert overlaps(grid, o, -1, 0)
    assert overlaps(grid, o, 5, 0)
    assert overlaps(grid, o, 0, -1)
    assert overlaps(grid, o, 0, 9)


def test_empty_margin_may_hang_outside():
    grid = new_grid(10, 6)
    # Row 0 of the flat bar is blank, so y=-1 puts the bar on row 0
    assert not overlaps(grid, get_shape(Brick.I, 0), 0, -1)
    # Columns 0-1 of the upright bar are blank
    assert not overlaps(grid, get_shape(Brick.I, 1), -2, 0)
    assert overlaps(grid, get_shape(Brick.I, 1), -3, 0)


def test_negative_offsets_do_not_wrap_around():
    grid = new_grid(4, 4)
    # grid[-1, -1] is empty, so a wrapped index would report no collision
    assert overlaps(grid, get_shape(Brick.O, 0), -1, -1)
    assert overlaps(grid, get_shape(Brick.O, 0), 3, 3)


def test_overlaps_occupied_cell():
    grid = new_grid(6, 6)
    grid[3, 2] = 5
    t = get_shape(Brick.T, 0)
    assert overlaps(grid, t, 1, 2)
    assert not overlaps(grid, t, 3, 2)


def test_overlaps_matches_reference_on_random_boards():
    rng = np.random.default_rng(0)
    for _ in range(300):
        grid = (rng.random((8, 6)) < 0.3).astype(np.int8) * 3
        brick = Brick(int(rng.integers(1, 8)))
        shape = get_shape(brick, int(rng.integers(0, 4)))
        x = int(rng.integers(-4, 8))
        y = int(rng.integers(-4, 10))
        assert overlaps(grid, shape, x, y) == _reference_overlaps(grid, shape, x, y)


@pytest.mark.parametrize("brick", list(Brick))
def test_stamped_shape_always_collides_with_itself(brick):
    grid = new_grid(8, 8)
    for rotation in range(4):
        shape = get_shape(brick, rotation)
        assert not overlaps(grid, shape, 2, 2)
        merged = stamp(grid, shape, 2, 2)
        assert overlaps(merged, shape, 2, 2)


def test_stamp_writes_material_and_leaves_input_alone():
    grid = new_grid(5, 5)
    merged = stamp(grid, get_shape(Brick.Z, 0), 1, 2)
    assert not grid.any()
    expected = new_grid(5, 5)
    expected[2, 1:3] = int(Brick.Z)
    expected[3, 2:4] = int(Brick.Z)
    assert np.array_equal(merged, expected)


def test_clear_without_full_rows_is_a_no_op():
    grid = new_grid(6, 4)
    grid[5, :3] = 2
    grid[2, 1] = 4
    result = clear_full_rows(grid)
    assert np.array_equal(result.grid, grid)
    assert result.lines_removed == 0
    assert result.score_bonus == 0
    assert result.cleared_rows == ()
    assert result.grid is not grid


def test_filling_the_gap_clears_exactly_that_row():
    grid = new_grid(6, 4)
    grid[5, 1:] = 2
    grid[4, 3] = 5
    upright_bar = get_shape(Brick.I, 1)
    # Occupied column 2 of the shape lands in grid column 0, rows 2-5
    assert not overlaps(grid, upright_bar, -2, 2)
    merged = stamp(grid, upright_bar, -2, 2)

    result = clear_full_rows(merged)

    bar = int(Brick.I)
    expected = new_grid(6, 4)
    expected[3, 0] = bar
    expected[4, 0] = bar
    expected[5] = [bar, 0, 0, 5]
    assert result.lines_removed == 1
    assert result.cleared_rows == (5,)
    assert result.score_bonus == line_score(1)
    assert np.array_equal(result.grid, expected)
    assert not result.grid[0].any()


def test_non_adjacent_rows_clear_together():
    grid = new_grid(5, 3)
    grid[1, :] = 1
    grid[2, 0] = 6
    grid[3, :] = 2
    grid[4, 1] = 7
    result = clear_full_rows(grid)
    assert result.lines_removed == 2
    assert result.cleared_rows == (1, 3)
    expected = new_grid(5, 3)
    expected[3, 0] = 6
    expected[4, 1] = 7
    assert np.array_equal(result.grid, expected)
    assert result.grid.shape == grid.shape


def test_simultaneous_clears_score_more():
    assert line_score(0) == 0
    for n in range(1, 5):
        assert line_score(n + 1) > line_score(n)
        assert line_score(n) >= n * line_score(1)
    assert line_score(2) > 2 * line_score(1)


def test_two_row_clear_beats_two_single_clears():
    double = new_grid(4, 2)
    double[2:, :] = 1
    single = new_grid(4, 2)
    single[3, :] = 1
    assert clear_full_rows(double).score_bonus >= 2 * clear_full_rows(single).score_bonus


def test_custom_line_bonus():
    grid = new_grid(3, 2)
    grid[2, :] = 1
    assert clear_full_rows(grid, line_bonus=10).score_bonus == 10


def test_visible_rows_drops_buffer():
    grid = new_grid(6, 3)
    grid[0, 0] = 1
    grid[2, 1] = 2
    visible = visible_rows(grid, 2)
    assert visible.shape == (4, 3)
    assert visible[0, 1] == 2
    visible[0, 1] = 0
    assert grid[2, 1] == 2
