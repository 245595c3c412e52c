"""
Exhaustive Strategy - Iterative deepening without deduplication.

A deliberately simple reference search used to cross-check the BFS at
small depths. Revisits boards freely, so its cost grows with the full
branching factor; keep the ceiling low.
"""

import logging
import time
from typing import List

from ..base import SolverStrategy
from ..board import BoardState
from ..context import SolutionContext
from ..enumerator import creates_square, iter_legal_swaps
from ..factory import register_strategy
from ..move import Move
from ..solution import SolveOutcome, SolveResult

logger = logging.getLogger(__name__)


@register_strategy
class ExhaustiveStrategy(SolverStrategy):
    """
    Depth-limited DFS repeated with limits 1, 2, ... up to the move ceiling.

    The first limit that yields a matched board is the shortest solution
    length. Every expanded node counts against the state budget.
    """
    name = "exhaustive"
    description = "Iterative deepening (reference) - No deduplication, small depths only"

    def solve(self, context: SolutionContext) -> SolveResult:
        start_time = time.perf_counter()
        start = context.board

        if start.has_any_match(context.match_heights):
            return self._build_result(context, SolveOutcome.SOLVED, [], 0, start_time)

        self._explored = 0
        for limit in range(1, context.move_ceiling + 1):
            found: List[List[Move]] = []
            exceeded = self._search(context, start, [], limit, found)

            if found:
                openings = frozenset(path[0] for path in found)
                logger.info(
                    f"[Exhaustive] Solved in {limit} moves, {self._explored} states, "
                    f"{len(openings)} openings"
                )
                return self._build_result(
                    context, SolveOutcome.SOLVED, found[0], self._explored, start_time,
                    openings=openings
                )
            if exceeded:
                logger.info(f"[Exhaustive] Budget exceeded at depth limit {limit}")
                return self._build_result(
                    context, SolveOutcome.BUDGET_EXCEEDED, [], self._explored, start_time
                )

        return self._build_result(context, SolveOutcome.UNSOLVABLE, [], self._explored, start_time)

    def _search(self, context: SolutionContext, board: BoardState, path: List[Move],
                limit: int, found: List[List[Move]]) -> bool:
        """Returns True when the budget ran out."""
        self._explored += 1
        if context.budget_exhausted(self._explored):
            return True

        last_step = len(path) + 1 == limit
        for move, child in iter_legal_swaps(board):
            matched = creates_square(child, move, context.match_heights)
            if last_step:
                if matched:
                    found.append(path + [move])
                    if not context.count_openings:
                        return False
                continue
            # A matched board above the limit would have ended an earlier pass
            if matched:
                continue
            if self._search(context, child, path + [move], limit, found):
                return True
            if found and not context.count_openings:
                return False
        return False
