"""
Base Strategy Module - Abstract base class for solving strategies.
"""

import time
from abc import ABC, abstractmethod
from typing import FrozenSet, List, Optional

from .board import BoardState
from .context import SolutionContext
from .enumerator import SwapResult, enumerate_legal_swaps, enumerate_valid_swaps
from .move import Move
from .path import replay
from .solution import SolutionMetrics, SolveOutcome, SolveResult


class SolverStrategy(ABC):
    """
    Abstract base class for all solving strategies.

    Subclasses must implement the solve() method and define
    name and description class attributes.

    Attributes:
        name: Short identifier for the strategy
        description: Human-readable description for tooling
    """
    name: str = "base"
    description: str = "Base strategy"

    @abstractmethod
    def solve(self, context: SolutionContext) -> SolveResult:
        """
        Search for the shortest sequence of swaps reaching a matched board.

        Must stop once context.budget_exhausted() reports True and return
        a BUDGET_EXCEEDED result.

        Args:
            context: Solution context with board, ceiling and budget

        Returns:
            SolveResult with outcome, moves and metrics
        """

    def find_all_valid_moves(self, board: BoardState, match_heights: bool = True) -> List[SwapResult]:
        """
        Find all swaps that immediately create a square.

        Args:
            board: Current board state

        Returns:
            List of (Move, resulting board) pairs
        """
        return enumerate_valid_swaps(board, match_heights)

    def find_all_legal_moves(self, board: BoardState) -> List[SwapResult]:
        """Find every board-changing adjacent swap."""
        return enumerate_legal_swaps(board)

    def _build_result(
        self,
        context: SolutionContext,
        outcome: SolveOutcome,
        moves: List[Move],
        states_explored: int,
        start_time: float,
        pruned: int = 0,
        openings: Optional[FrozenSet[Move]] = None,
    ) -> SolveResult:
        """Build SolveResult object from computation results."""
        elapsed_ms = (time.perf_counter() - start_time) * 1000

        return SolveResult(
            outcome=outcome,
            moves=moves,
            states_explored=states_explored,
            openings=openings or frozenset(),
            board_states=replay(context.board, moves),
            metrics=SolutionMetrics(
                computation_time_ms=elapsed_ms,
                states_explored=states_explored,
                pruned_branches=pruned,
                strategy_name=self.name
            )
        )
