"""Level validation: rejections, flags and report consistency."""

from quadmatch.solver import enumerate_valid_swaps
from quadmatch.validator import Flag, Rejection, validate_level

from tests.boards import DIAGONAL, ONE_MOVE, SIX_MOVES, TEMPLATE_START, UNIFORM, board, small_config


def test_uniform_board_rejected_as_starting_match():
    report = validate_level(board(UNIFORM), small_config(color_count=1))
    assert report.rejections == [Rejection.STARTING_MATCH]
    assert report.starting_match
    assert not report.passed
    assert report.solve_result is None


def test_one_move_board_is_trivial():
    report = validate_level(board(ONE_MOVE), small_config(min_solution_depth=2))
    assert report.solvable
    assert report.trivial
    assert Rejection.TRIVIAL_SOLUTION in report.rejections
    assert report.shortest_length == 1


def test_depth_one_opening_count_matches_valid_swaps():
    start = board(ONE_MOVE)
    report = validate_level(start, small_config(min_solution_depth=1))
    assert report.opening_count == len(enumerate_valid_swaps(start))


def test_two_move_board_passes():
    report = validate_level(board(TEMPLATE_START), small_config(), seed=5)
    assert report.passed, report.summary()
    assert report.shortest_length == 2
    assert report.goal_reachable
    assert report.goal_squares >= 1


def test_forced_solution_is_only_a_flag():
    report = validate_level(board(TEMPLATE_START), small_config(min_initial_moves=100), seed=5)
    assert report.forced
    assert report.flags == [Flag.FORCED_SOLUTION]
    assert report.passed


def test_budget_exceeded_rejection():
    report = validate_level(board(SIX_MOVES), small_config(move_ceiling=10, state_budget=100))
    assert report.rejections == [Rejection.BUDGET_EXCEEDED]
    assert not report.solvable


def test_unsolvable_within_ceiling():
    report = validate_level(board(DIAGONAL), small_config(move_ceiling=1))
    assert report.rejections == [Rejection.UNSOLVABLE]


def test_goal_unreachable_without_cascade_credit():
    config = small_config(squares_goal=5, count_cascade_squares=False)
    report = validate_level(board(TEMPLATE_START), config, seed=5)
    assert Rejection.GOAL_UNREACHABLE in report.rejections
    assert not report.goal_reachable
    assert report.goal_squares == report.resolve_result.first_pass_squares


def test_keyword_overrides_take_precedence():
    config = small_config(min_solution_depth=3)
    assert validate_level(board(TEMPLATE_START), config, seed=5).trivial
    assert not validate_level(board(TEMPLATE_START), config, seed=5, min_solution_depth=2).trivial


def test_same_seed_same_report():
    first = validate_level(board(TEMPLATE_START), small_config(), seed=9)
    second = validate_level(board(TEMPLATE_START), small_config(), seed=9)
    assert first.summary() == second.summary()


def test_summary_is_plain_data():
    summary = validate_level(board(ONE_MOVE), small_config()).summary()
    assert summary["rejections"] == ["trivial_solution"]
    assert len(summary["solution"]) == 1
    assert summary["shortest_length"] == 1
