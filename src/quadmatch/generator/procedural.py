"""
Procedural Strategy - Random boards built without accidental squares.
"""

import logging
from typing import List, Optional, Sequence

import numpy as np

from ..rules import RuleConfig
from ..solver import BoardState
from .base import GenerationStrategy

logger = logging.getLogger(__name__)


def completes_square(grid: Sequence[Sequence[Optional[int]]], row: int, col: int, color: int) -> bool:
    """
    Check whether placing a colour would complete a 2x2 square.

    Looks at the (up to four) windows containing the cell; unassigned
    (None) neighbours never complete a square.
    """
    rows = len(grid)
    cols = len(grid[0])
    for top in (row - 1, row):
        for left in (col - 1, col):
            if not (0 <= top < rows - 1 and 0 <= left < cols - 1):
                continue
            others = [
                grid[r][c]
                for r in (top, top + 1)
                for c in (left, left + 1)
                if (r, c) != (row, col)
            ]
            if all(value == color for value in others):
                return True
    return False


def synthesize_board(config: RuleConfig, rng: np.random.Generator) -> BoardState:
    """
    Fill a config-sized board cell by cell, row-major.

    Each cell picks uniformly among the colours that do not complete a
    square at assignment time. With a single colour no choice avoids a
    square and the board is returned matched (the validator rejects it).
    """
    grid: List[List[Optional[int]]] = [[None] * config.width for _ in range(config.height)]
    for r in range(config.height):
        for c in range(config.width):
            choices = [k for k in range(config.color_count) if not completes_square(grid, r, c, k)]
            if not choices:
                choices = list(range(config.color_count))
            grid[r][c] = choices[int(rng.integers(len(choices)))]
    return BoardState.from_2d_list(grid)


class ProceduralStrategy(GenerationStrategy):
    """Synthesizes a fresh random board for every attempt."""
    name = "procedural"

    def max_attempts(self, config: RuleConfig) -> int:
        return config.generation_attempts

    def candidate(self, attempt: int, config: RuleConfig, rng: np.random.Generator) -> BoardState:
        board = synthesize_board(config, rng)
        logger.debug(f"[Procedural] Attempt {attempt + 1}: synthesized {board.rows}x{board.cols} board")
        return board
