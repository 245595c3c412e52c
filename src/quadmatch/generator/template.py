"""
Template Strategy - Start boards derived from an authored solution.

Reversing an authored forward solution against its goal board yields a
start board solvable by exactly that path. Cells no move touches and no
goal square covers can be recoloured for variety without breaking the
path.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Set, Tuple

import numpy as np

from ..rules import RuleConfig
from ..solver import BoardState, Move, verify_solution
from ..solver.board import Cell
from .base import GenerationStrategy
from .procedural import completes_square

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Template:
    """
    An authored goal board and the forward solution that reaches it.

    Attributes:
        goal: Matched board the solution ends on
        moves: Forward solution in play order
        name: Optional identifier used in logs
    """
    goal: BoardState
    moves: Tuple[Move, ...]
    name: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Template':
        """
        Build a template from plain data.

        Expected keys: "goal" (2D colour list), "moves" (list of
        [[r1, c1], [r2, c2]]), optional "name".
        """
        return cls(
            goal=BoardState.from_2d_list(data["goal"]),
            moves=tuple(Move.from_list(m) for m in data["moves"]),
            name=data.get("name", ""),
        )


def derive_start(template: Template) -> BoardState:
    """Apply the template's moves in reverse order to its goal board."""
    board = template.goal
    for move in reversed(template.moves):
        board = board.apply_move(move)
    return board


def validate_template(template: Template, match_heights: bool = True) -> Tuple[bool, str]:
    """
    Check that a template can produce puzzles.

    Returns:
        (ok, reason) - reason is empty when ok
    """
    if not template.moves:
        return False, "template has no moves"
    if not template.goal.has_any_match(match_heights):
        return False, "goal board has no square"
    start = derive_start(template)
    if start.has_any_match(match_heights):
        return False, "derived start board is already matched"
    if not verify_solution(start, template.moves, match_heights):
        return False, "forward solution does not reach a matched board"
    return True, ""


def protected_cells(template: Template) -> Set[Cell]:
    """Cells touched by any move or covered by any goal square."""
    cells: Set[Cell] = set()
    for move in template.moves:
        cells.update(move.cells)
    for square in template.goal.find_squares(include_locked=True):
        cells.update(square.cells)
    return cells


def randomize_template(template: Template, config: RuleConfig, rng: np.random.Generator) -> BoardState:
    """
    Recolour unprotected cells of the derived start board.

    Colours are drawn from range(config.color_count), skipping any that
    would complete a square with the current neighbours. A cell with no
    safe colour keeps its authored colour.
    """
    start = derive_start(template)
    protected = protected_cells(template)
    grid = start.to_list()

    for r in range(start.rows):
        for c in range(start.cols):
            if (r, c) in protected or grid[r][c] is None or start.is_locked(r, c):
                continue
            original = grid[r][c]
            choices = [k for k in range(config.color_count) if not completes_square(grid, r, c, k)]
            grid[r][c] = choices[int(rng.integers(len(choices)))] if choices else original

    return BoardState(
        grid=tuple(tuple(row) for row in grid),
        heights=start.heights,
        locked=start.locked,
    )


class TemplateStrategy(GenerationStrategy):
    """
    Offers the derived start board first, then randomized variants.

    Attempt 0 is the authored start; attempts 1.. recolour free cells.
    """
    name = "template"

    def __init__(self, template: Template):
        self.template = template

    def max_attempts(self, config: RuleConfig) -> int:
        return config.template_retries

    def candidate(self, attempt: int, config: RuleConfig, rng: np.random.Generator) -> BoardState:
        if attempt == 0:
            return derive_start(self.template)
        board = randomize_template(self.template, config, rng)
        logger.debug(f"[Template] Attempt {attempt + 1}: randomized {len(board.diff(derive_start(self.template)))} cells")
        return board
