"""Swap enumeration and shortest-path search."""

import pytest

from quadmatch.errors import OutOfBounds
from quadmatch.solver import (
    BoardState,
    Move,
    SolutionContext,
    SolveOutcome,
    create_strategy,
    enumerate_legal_swaps,
    enumerate_valid_swaps,
    get_strategy_names,
    is_valid_swap,
    replay,
    solve,
    verify_solution,
)
from quadmatch.solver.path import SearchNode, reconstruct_path

from tests.boards import DIAGONAL, ONE_MOVE, SIX_MOVES, TEMPLATE_MOVES, TEMPLATE_START, UNIFORM, board


def test_move_normalises_order():
    assert Move(0, 1, 0, 0) == Move(0, 0, 0, 1)
    assert Move.create((1, 0), (0, 0)).first == (0, 0)
    assert str(Move(2, 1, 1, 1)) == "(1,1)<->(2,1)"
    assert Move(0, 0, 0, 1).is_horizontal
    assert not Move(0, 0, 1, 0).is_horizontal


def test_move_requires_adjacency():
    with pytest.raises(ValueError):
        Move(0, 0, 1, 1)
    with pytest.raises(ValueError):
        Move(0, 0, 0, 0)


def test_legal_swaps_skip_equal_empty_and_locked_cells():
    b = BoardState.from_2d_list(
        [[0, 0, 1], [None, 2, 1]],
        locked=[[False, False, False], [False, False, True]],
    )
    moves = [m for m, _ in enumerate_legal_swaps(b)]
    assert moves == [Move(0, 1, 0, 2), Move(0, 1, 1, 1)]


def test_valid_swaps_create_squares():
    start = board(ONE_MOVE)
    valid = enumerate_valid_swaps(start)
    assert Move(1, 2, 1, 3) in [m for m, _ in valid]
    for move, after in valid:
        assert after.has_any_match()
        assert after == start.apply_move(move)


def test_is_valid_swap_gate():
    start = board(ONE_MOVE)
    assert is_valid_swap(start, (1, 2), (1, 3))
    assert is_valid_swap(start, (1, 3), (1, 2))
    assert not is_valid_swap(start, (0, 0), (0, 1))
    assert not is_valid_swap(start, (0, 0), (1, 1))
    with pytest.raises(OutOfBounds):
        is_valid_swap(start, (0, 3), (0, 4))


def test_already_matched_board_solves_with_no_moves():
    result = solve(board(UNIFORM))
    assert result.outcome == SolveOutcome.SOLVED
    assert result.moves == []
    assert result.shortest_length == 0


def test_one_move_board():
    result = solve(board(ONE_MOVE), move_ceiling=5, state_budget=10000)
    assert result.solvable
    assert result.shortest_length == 1
    assert verify_solution(board(ONE_MOVE), result.moves)
    assert result.final_board.has_any_match()


def test_six_move_board_depth():
    result = solve(board(SIX_MOVES), move_ceiling=6)
    assert result.solvable
    assert result.shortest_length == 6


def test_budget_exceeded_is_not_unsolvable():
    result = solve(board(SIX_MOVES), move_ceiling=10, state_budget=100)
    assert result.outcome == SolveOutcome.BUDGET_EXCEEDED
    assert result.budget_exceeded
    assert not result.solvable
    assert result.states_explored == 101


def test_ceiling_exhausted_is_unsolvable():
    result = solve(board(DIAGONAL), move_ceiling=1, state_budget=20000)
    assert result.outcome == SolveOutcome.UNSOLVABLE
    # Start board plus every depth-1 board; nodes at the ceiling are not expanded
    assert result.states_explored == 1 + len(enumerate_legal_swaps(board(DIAGONAL)))


def test_two_move_board_solution_is_replayable():
    start = board(TEMPLATE_START)
    result = solve(start, move_ceiling=3)
    assert result.shortest_length == 2
    boards = replay(start, result.moves)
    assert not any(b.has_any_match() for b in boards[:-1])
    assert boards[-1].has_any_match()
    assert result.board_states == boards
    assert result.get_board_after_move(1) == boards[2]
    assert result.get_move(0) == result.moves[0]


@pytest.mark.parametrize("rows", [ONE_MOVE, TEMPLATE_START])
def test_bfs_agrees_with_exhaustive(rows):
    start = board(rows)
    bfs = create_strategy("bfs").solve(SolutionContext(board=start, move_ceiling=3, count_openings=True))
    reference = create_strategy("exhaustive").solve(
        SolutionContext(board=start, move_ceiling=3, count_openings=True)
    )
    assert bfs.shortest_length == reference.shortest_length
    assert bfs.openings == reference.openings


def test_opening_count_for_one_move_board_is_valid_swap_count():
    start = board(ONE_MOVE)
    result = solve(start, count_openings=True)
    assert result.opening_count == len(enumerate_valid_swaps(start))


def test_openings_are_first_moves_of_shortest_solutions():
    start = board(TEMPLATE_START)
    result = solve(start, move_ceiling=3, count_openings=True)
    assert result.moves[0] in result.openings
    for opening in result.openings:
        follow_up = solve(start.apply_move(opening), move_ceiling=1)
        assert follow_up.shortest_length == 1


def test_reconstruct_path_follows_parents():
    start = board(ONE_MOVE)
    first = Move(0, 0, 0, 1)
    second = Move(1, 2, 1, 3)
    mid = start.apply_move(first)
    arena = [
        SearchNode(start, 0),
        SearchNode(mid, 1, 0, first),
        SearchNode(mid.apply_move(second), 2, 1, second),
    ]
    assert reconstruct_path(arena, 2) == [first, second]


def test_verify_solution_rejects_wrong_path():
    assert not verify_solution(board(ONE_MOVE), [Move(0, 0, 0, 1)])


def test_progress_callback_and_registry():
    updates = []
    # Shortest solution is four moves, so a ceiling of three drains the whole space
    result = solve(board(DIAGONAL), move_ceiling=3, progress_interval=50,
                   progress_callback=lambda pct, msg: updates.append(pct))
    assert result.outcome == SolveOutcome.UNSOLVABLE
    assert len(updates) == result.states_explored // 50
    assert updates
    assert all(0.0 <= pct < 1.0 for pct in updates)
    assert {"bfs", "exhaustive"} <= set(get_strategy_names())
    with pytest.raises(ValueError):
        create_strategy("missing")


def test_template_solution_length_is_an_upper_bound():
    start = board(TEMPLATE_START)
    result = solve(start, move_ceiling=5)
    assert result.shortest_length <= len(TEMPLATE_MOVES)
    assert verify_solution(start, TEMPLATE_MOVES)


def test_strategy_move_helpers_match_enumerator():
    start = board(ONE_MOVE)
    strategy = create_strategy("bfs")
    assert strategy.find_all_valid_moves(start) == enumerate_valid_swaps(start)
    assert strategy.find_all_legal_moves(start) == enumerate_legal_swaps(start)
