"""Puzzle generation: templates, procedural boards and fallback tagging."""

import numpy as np

from quadmatch.generator import (
    GenerationStatus,
    PuzzleGenerator,
    Template,
    derive_start,
    generate_batch,
    generate_puzzle,
    protected_cells,
    randomize_template,
    synthesize_board,
    validate_template,
)
from quadmatch.rules import RuleConfig
from quadmatch.solver import Move, verify_solution
from quadmatch.validator import validate_level

from tests.boards import TEMPLATE_GOAL, TEMPLATE_START, board, small_config, two_move_template

QUICK = dict(move_ceiling=3, state_budget=600, generation_attempts=4, template_retries=2)


def test_derive_start_reverses_moves():
    template = two_move_template()
    assert derive_start(template).to_list() == TEMPLATE_START
    assert validate_template(template) == (True, "")


def test_template_round_trip_through_dict():
    template = Template.from_dict({
        "goal": TEMPLATE_GOAL,
        "moves": [[[1, 1], [2, 1]], [[0, 1], [0, 2]]],
        "name": "authored",
    })
    assert template == two_move_template("authored")


def test_template_without_goal_square_is_invalid():
    template = Template(goal=board(TEMPLATE_START), moves=(Move(0, 0, 0, 1),))
    ok, reason = validate_template(template)
    assert not ok
    assert "no square" in reason


def test_protected_cells_cover_moves_and_goal_squares():
    cells = protected_cells(two_move_template())
    assert {(1, 1), (2, 1), (0, 1), (0, 2)} <= cells
    assert {(0, 0), (1, 0)} <= cells
    assert (3, 3) not in cells


def test_randomized_template_keeps_solution():
    template = two_move_template()
    config = small_config()
    rng = np.random.default_rng(4)
    for _ in range(5):
        variant = randomize_template(template, config, rng)
        start = derive_start(template)
        for cell in protected_cells(template):
            assert variant.get_cell(*cell) == start.get_cell(*cell)
        assert verify_solution(variant, template.moves)


def test_template_puzzle_is_validated():
    config = small_config(**QUICK)
    puzzle = generate_puzzle(config, template=two_move_template(), seed=3)
    assert puzzle.status == GenerationStatus.VALIDATED
    assert puzzle.validated
    assert puzzle.strategy == "template"
    assert puzzle.attempts == 1
    assert puzzle.board.to_list() == TEMPLATE_START


def test_validated_puzzle_revalidates_with_its_seed():
    config = small_config(**QUICK)
    puzzle = generate_puzzle(config, template=two_move_template(), seed=8)
    report = validate_level(puzzle.board, config, seed=puzzle.seed)
    assert report.passed


def test_seed_is_recorded_when_not_given():
    puzzle = generate_puzzle(small_config(**QUICK), template=two_move_template())
    assert isinstance(puzzle.seed, int)


def test_procedural_boards_have_no_squares():
    config = RuleConfig(width=5, height=5, color_count=2)
    rng = np.random.default_rng(0)
    for _ in range(10):
        assert not synthesize_board(config, rng).has_any_match()


def test_procedural_generation_is_reproducible():
    config = small_config(color_count=3, **QUICK)
    first = generate_puzzle(config, seed=11)
    second = generate_puzzle(config, seed=11)
    assert first.status == second.status
    assert first.board == second.board
    assert first.attempts == second.attempts


def test_fallback_returns_unvalidated_board():
    # A single colour always produces a pre-matched board
    config = small_config(color_count=1, generation_attempts=3)
    puzzle = generate_puzzle(config, seed=1)
    assert puzzle.status == GenerationStatus.UNVALIDATED
    assert puzzle.board is not None
    assert puzzle.strategy == "procedural"
    assert puzzle.attempts == 3
    assert puzzle.report.starting_match


def test_invalid_template_falls_back_to_procedural():
    config = small_config(color_count=1, generation_attempts=2)
    template = Template(goal=board(TEMPLATE_START), moves=(Move(0, 0, 0, 1),))
    puzzle = generate_puzzle(config, template=template, seed=1)
    assert puzzle.strategy == "procedural"
    assert puzzle.status == GenerationStatus.UNVALIDATED


def test_no_attempts_fails():
    puzzle = generate_puzzle(small_config(generation_attempts=0), seed=1)
    assert puzzle.status == GenerationStatus.FAILED
    assert puzzle.board is None
    assert not puzzle.validated


def test_batch_gives_each_puzzle_its_seed():
    config = small_config(**QUICK)
    puzzles = generate_batch(config, 2, templates=[two_move_template()], seed=21)
    assert len(puzzles) == 2
    assert puzzles[0].seed != puzzles[1].seed
    assert all(p.validated for p in puzzles)
    again = generate_batch(config, 2, templates=[two_move_template()], seed=21)
    assert [p.seed for p in again] == [p.seed for p in puzzles]


def test_forward_moves_rebuild_goal():
    template = two_move_template()
    current = derive_start(template)
    for move in template.moves:
        current = current.apply_move(move)
    assert current == template.goal


def test_generator_instance_can_run_twice():
    config = small_config(color_count=1, generation_attempts=2)
    generator = PuzzleGenerator(config, seed=1)
    first = generator.generate()
    second = generator.generate()
    assert first.attempts == 2
    assert second.attempts == 2
    assert second is not first
    assert second.status == GenerationStatus.UNVALIDATED
