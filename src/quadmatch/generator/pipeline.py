"""
Generation Pipeline - Template first, procedural fallback, bounded retries.

The pipeline is a small state machine:

    TRY_TEMPLATE --(validated)--------------> DONE
         |  (invalid template / retries spent)
         v
    TRY_PROCEDURAL --(validated)------------> DONE
         |  (attempts spent, candidate exists) -> DONE (unvalidated)
         +--(no candidate produced)----------> FAILED

Every stage is bounded by attempt counts and each validation by the state
budget, so a call always returns in predictable time.
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional

import numpy as np

from ..rules import RuleConfig
from ..solver import BoardState
from ..validator import ValidationReport, validate_level
from .base import GenerationStrategy
from .procedural import ProceduralStrategy
from .template import Template, TemplateStrategy, validate_template

logger = logging.getLogger(__name__)


class GenerationStatus(str, Enum):
    VALIDATED = "validated"
    UNVALIDATED = "unvalidated"
    FAILED = "failed"


class GenerationStage(Enum):
    TRY_TEMPLATE = auto()
    TRY_PROCEDURAL = auto()
    DONE = auto()
    FAILED = auto()


@dataclass
class GeneratedPuzzle:
    """
    Result of a generation call.

    Attributes:
        board: Start board (None only when status is FAILED)
        status: VALIDATED, UNVALIDATED fallback, or FAILED
        strategy: Name of the strategy that produced the board
        attempts: Candidates validated across all stages
        seed: Seed of the random stream; also the refill seed used when
              validating, so validate_level(board, config, seed=seed)
              reproduces the report
        report: Validation report of the returned board
    """
    board: Optional[BoardState]
    status: GenerationStatus
    strategy: str = ""
    attempts: int = 0
    seed: Optional[int] = None
    report: Optional[ValidationReport] = None

    @property
    def validated(self) -> bool:
        return self.status == GenerationStatus.VALIDATED


class PuzzleGenerator:
    """
    Produces start boards meeting the config's quality constraints.

    Args:
        config: Rules, budgets and thresholds
        template: Optional authored template tried before procedural
        seed: Seed for every random choice; drawn once if not given
    """

    def __init__(self, config: RuleConfig, template: Optional[Template] = None,
                 seed: Optional[int] = None):
        self.config = config
        self.template = template
        if seed is None:
            seed = int(np.random.default_rng().integers(2 ** 31))
        self.seed = seed
        self.rng = np.random.default_rng(seed)
        self.attempts = 0
        self._last: Optional[GeneratedPuzzle] = None

    def generate(self) -> GeneratedPuzzle:
        """Run the state machine to a terminal stage."""
        self.attempts = 0
        self._last = None
        if self.template is not None:
            stage = GenerationStage.TRY_TEMPLATE
        else:
            stage = GenerationStage.TRY_PROCEDURAL
        puzzle: Optional[GeneratedPuzzle] = None

        while stage not in (GenerationStage.DONE, GenerationStage.FAILED):
            if stage is GenerationStage.TRY_TEMPLATE:
                puzzle = self._try_template()
                stage = GenerationStage.DONE if puzzle is not None else GenerationStage.TRY_PROCEDURAL
            else:
                puzzle = self._run(ProceduralStrategy())
                if puzzle is None:
                    puzzle = self._fallback()
                stage = GenerationStage.DONE if puzzle.board is not None else GenerationStage.FAILED

        logger.info(
            f"[Generator] {puzzle.status.value} board from {puzzle.strategy or 'nothing'} "
            f"after {puzzle.attempts} attempts (seed {self.seed})"
        )
        return puzzle

    def _try_template(self) -> Optional[GeneratedPuzzle]:
        ok, reason = validate_template(self.template, self.config.match_heights)
        if not ok:
            logger.warning(f"[Generator] Template {self.template.name!r} unusable: {reason}")
            return None
        puzzle = self._run(TemplateStrategy(self.template))
        if puzzle is None:
            logger.warning("[Generator] Template retries exhausted, falling back to procedural")
        return puzzle

    def _run(self, strategy: GenerationStrategy) -> Optional[GeneratedPuzzle]:
        """Validate candidates until one passes; None if none did."""
        for attempt in range(strategy.max_attempts(self.config)):
            board = strategy.candidate(attempt, self.config, self.rng)
            report = validate_level(board, self.config, seed=self.seed)
            self.attempts += 1

            puzzle = GeneratedPuzzle(
                board=board,
                status=GenerationStatus.VALIDATED if report.passed else GenerationStatus.UNVALIDATED,
                strategy=strategy.name,
                attempts=self.attempts,
                seed=self.seed,
                report=report,
            )
            if report.passed:
                return puzzle
            logger.debug(
                f"[Generator] {strategy.name} attempt {attempt + 1} rejected: "
                f"{', '.join(r.value for r in report.rejections)}"
            )
            self._last = puzzle
        return None

    def _fallback(self) -> GeneratedPuzzle:
        if self._last is None:
            logger.warning("[Generator] No candidate board was produced")
            return GeneratedPuzzle(
                board=None, status=GenerationStatus.FAILED, attempts=self.attempts, seed=self.seed
            )
        logger.warning("[Generator] Attempt budget exhausted, returning last board unvalidated")
        self._last.attempts = self.attempts
        return self._last


def generate_puzzle(config: RuleConfig, template: Optional[Template] = None,
                    seed: Optional[int] = None) -> GeneratedPuzzle:
    """
    Generate one start board.

    Args:
        config: Rules, budgets and thresholds
        template: Optional authored template tried first
        seed: Seed for reproducible output

    Returns:
        GeneratedPuzzle tagged validated, unvalidated or failed
    """
    return PuzzleGenerator(config, template=template, seed=seed).generate()


def generate_batch(config: RuleConfig, count: int, templates: Optional[List[Template]] = None,
                   seed: Optional[int] = None) -> List[GeneratedPuzzle]:
    """
    Generate several puzzles from one seed.

    Templates are used round-robin when given. Each puzzle gets its own
    seed drawn from the batch stream, recorded on the result.
    """
    seeds = np.random.default_rng(seed).integers(2 ** 31, size=count)
    puzzles = []
    for index, puzzle_seed in enumerate(seeds):
        template = templates[index % len(templates)] if templates else None
        puzzles.append(generate_puzzle(config, template=template, seed=int(puzzle_seed)))
    return puzzles
