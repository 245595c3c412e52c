"""
Generator Package - Produces validated start boards.

Usage:
    from quadmatch.generator import generate_puzzle
    from quadmatch.rules import RuleConfig

    puzzle = generate_puzzle(RuleConfig(width=4, height=4), seed=7)
    if puzzle.validated:
        print(puzzle.board.to_list())
"""

from .base import GenerationStrategy
from .procedural import ProceduralStrategy, completes_square, synthesize_board
from .template import (
    Template,
    TemplateStrategy,
    derive_start,
    protected_cells,
    randomize_template,
    validate_template,
)
from .pipeline import (
    GeneratedPuzzle,
    GenerationStage,
    GenerationStatus,
    PuzzleGenerator,
    generate_batch,
    generate_puzzle,
)

__all__ = [
    "GenerationStrategy",
    "ProceduralStrategy",
    "TemplateStrategy",
    "Template",
    "completes_square",
    "synthesize_board",
    "derive_start",
    "protected_cells",
    "randomize_template",
    "validate_template",
    "GeneratedPuzzle",
    "GenerationStage",
    "GenerationStatus",
    "PuzzleGenerator",
    "generate_batch",
    "generate_puzzle",
]
