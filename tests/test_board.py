"""Board model: construction errors, bounds, swaps and content hashing."""

import pytest

from quadmatch.errors import InvalidGrid, OutOfBounds, QuadmatchError
from quadmatch.solver import BoardState
from quadmatch.solver.board import HASH_BASE, HASH_MODULUS

from tests.boards import ONE_MOVE, board


def test_empty_grid_rejected():
    with pytest.raises(InvalidGrid):
        BoardState.from_2d_list([])
    with pytest.raises(InvalidGrid):
        BoardState.from_2d_list([[]])


def test_ragged_grid_rejected():
    with pytest.raises(InvalidGrid):
        BoardState.from_2d_list([[0, 1], [2]])


@pytest.mark.parametrize("value", [-1, 1.5, "red", True])
def test_invalid_cell_values_rejected(value):
    with pytest.raises(InvalidGrid):
        BoardState.from_2d_list([[0, value], [1, 2]])


def test_invalid_grid_is_a_value_error():
    with pytest.raises(ValueError):
        BoardState.from_2d_list([[0, 1], [2]])


def test_layer_shape_must_match_grid():
    with pytest.raises(InvalidGrid):
        BoardState.from_2d_list([[0, 1], [2, 3]], heights=[[0, 0]])
    with pytest.raises(InvalidGrid):
        BoardState.from_2d_list([[0, 1], [2, 3]], locked=[[False], [False]])


def test_empty_cells_allowed():
    b = BoardState.from_2d_list([[None, 1], [2, None]])
    assert b.count_cells() == 2
    assert b.get_cell(0, 0) is None


def test_out_of_bounds_access():
    b = board(ONE_MOVE)
    with pytest.raises(OutOfBounds):
        b.get_cell(4, 0)
    with pytest.raises(IndexError):
        b.get_cell(0, -1)
    with pytest.raises(QuadmatchError):
        b.apply_swap((0, 3), (0, 4))


def test_equal_boards_hash_equal():
    a = board(ONE_MOVE)
    b = board(ONE_MOVE)
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1


def test_swap_hash_matches_full_recompute():
    start = board(ONE_MOVE)
    swapped = start.apply_swap((1, 2), (1, 3))
    expected = [row[:] for row in ONE_MOVE]
    expected[1][2], expected[1][3] = expected[1][3], expected[1][2]
    rebuilt = board(expected)
    assert swapped == rebuilt
    assert swapped.content_hash() == rebuilt.content_hash()


def test_vertical_swap_hash_with_layers():
    heights = [[0, 1, 0, 0], [2, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 1]]
    locked = [[False] * 4 for _ in range(4)]
    locked[3][3] = True
    start = BoardState.from_2d_list(ONE_MOVE, heights=heights, locked=locked)

    swapped = start.apply_swap((0, 1), (1, 1))
    rebuilt = BoardState(grid=swapped.grid, heights=swapped.heights, locked=swapped.locked)
    assert swapped.digest == rebuilt.digest
    assert swapped.get_height(1, 1) == 1
    assert swapped.get_height(0, 1) == 0


def test_swap_twice_restores_board():
    start = board(ONE_MOVE)
    back = start.apply_swap((2, 0), (2, 1)).apply_swap((2, 0), (2, 1))
    assert back == start
    assert back.digest == start.digest


def test_digest_is_polynomial_over_cells():
    b = BoardState.from_2d_list([[0, None]])
    # Cell codes: colour 0 -> ((0+1)*256+0)*2 = 512, empty -> 0
    assert b.digest == (512 * HASH_BASE + 0) % HASH_MODULUS


def test_has_any_match_does_not_mutate():
    b = BoardState.from_2d_list([[0, 0], [0, 0]])
    before = b.to_list()
    assert b.has_any_match()
    assert b.count_matches() == 1
    assert b.to_list() == before


def test_same_colours_different_heights_differ():
    a = BoardState.from_2d_list([[0, 0], [0, 0]], heights=[[0, 0], [0, 1]])
    b = BoardState.from_2d_list([[0, 0], [0, 0]], heights=[[0, 0], [0, 0]])
    assert a != b
    assert a.diff(b) == [(1, 1)]


def test_with_cells_adds_lock_layer():
    b = board(ONE_MOVE).with_cells({(0, 0): (1, 0, True)})
    assert b.is_locked(0, 0)
    assert not b.is_locked(0, 1)
    assert b.locked is not None and b.heights is None


def test_diff_rejects_other_shapes():
    with pytest.raises(ValueError):
        board(ONE_MOVE).diff(BoardState.from_2d_list([[0]]))
