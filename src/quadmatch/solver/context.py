"""
Solution Context Module - Shared context for strategy execution.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..rules import RuleConfig
from .board import BoardState


@dataclass
class SolutionContext:
    """
    Context passed to strategies containing the board, search bounds,
    and progress reporting.

    The move ceiling and state budget are the only ways a search stops
    early; there is no cancellation.

    Attributes:
        board: Start board to solve
        move_ceiling: Maximum solution length searched
        state_budget: Maximum dequeued states before giving up
        count_openings: Finish the solution layer to count distinct openings
        match_heights: Squares also require equal stack heights
        progress_interval: Dequeued states between progress reports
        progress_callback: Optional callback for progress updates
    """
    board: BoardState
    move_ceiling: int = 5
    state_budget: int = 20000
    count_openings: bool = False
    match_heights: bool = True
    progress_interval: int = 1000
    progress_callback: Optional[Callable[[float, str], None]] = None

    @classmethod
    def from_config(cls, board: BoardState, config: RuleConfig, **overrides: Any) -> 'SolutionContext':
        """Build a context using the config's ceiling, budget and height rule."""
        params = {
            "move_ceiling": config.move_ceiling,
            "state_budget": config.state_budget,
            "match_heights": config.match_heights,
        }
        params.update(overrides)
        return cls(board=board, **params)

    def budget_exhausted(self, states_explored: int) -> bool:
        """True once the dequeued-state count exceeds the budget."""
        return states_explored > self.state_budget

    def report_progress(self, percent: float, message: str = "") -> None:
        """
        Report progress to the caller.

        Args:
            percent: Share of the state budget used, 0.0 to 1.0
            message: Optional status message
        """
        if self.progress_callback:
            self.progress_callback(percent, message)
