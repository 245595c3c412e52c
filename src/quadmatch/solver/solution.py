"""
Solution Module - Result of a solver run.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Optional

from .board import BoardState
from .move import Move


class SolveOutcome(str, Enum):
    """Terminal outcome of a search."""
    SOLVED = "solved"
    UNSOLVABLE = "unsolvable"
    BUDGET_EXCEEDED = "budget_exceeded"


@dataclass
class SolutionMetrics:
    """
    Performance metrics for solution computation.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        states_explored: Number of board states dequeued
        pruned_branches: Duplicate states skipped by deduplication
        strategy_name: Name of strategy that computed this solution
    """
    computation_time_ms: float = 0.0
    states_explored: int = 0
    pruned_branches: int = 0
    strategy_name: str = ""


@dataclass
class SolveResult:
    """
    Result of a strategy computation.

    UNSOLVABLE means the search space under the move ceiling was exhausted.
    BUDGET_EXCEEDED means the answer is unknown.

    Attributes:
        outcome: Terminal outcome
        moves: Shortest move sequence in play order (empty unless solved)
        states_explored: Number of states dequeued
        openings: Distinct first moves of shortest solutions (if counted)
        board_states: Board after each move (first is the start board)
        metrics: Performance statistics
    """
    outcome: SolveOutcome
    moves: List[Move] = field(default_factory=list)
    states_explored: int = 0
    openings: FrozenSet[Move] = frozenset()
    board_states: List[BoardState] = field(default_factory=list)
    metrics: SolutionMetrics = field(default_factory=SolutionMetrics)

    @property
    def solvable(self) -> bool:
        return self.outcome == SolveOutcome.SOLVED

    @property
    def budget_exceeded(self) -> bool:
        return self.outcome == SolveOutcome.BUDGET_EXCEEDED

    @property
    def shortest_length(self) -> Optional[int]:
        """Number of moves in the shortest solution, or None if not solved."""
        return len(self.moves) if self.solvable else None

    @property
    def opening_count(self) -> int:
        return len(self.openings)

    @property
    def final_board(self) -> Optional[BoardState]:
        """Board after the last move, or None when no boards were recorded."""
        return self.board_states[-1] if self.board_states else None

    def get_move(self, index: int) -> Move:
        """
        Get move at specific index.

        Raises:
            IndexError: If index out of range
        """
        return self.moves[index]

    def get_board_after_move(self, index: int) -> BoardState:
        """
        Get board state after executing move at index.

        Raises:
            IndexError: If index out of range
        """
        return self.board_states[index + 1]
