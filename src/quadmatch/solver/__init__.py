"""
Solver Package - Board model, square detection and shortest-path search.

Public API:
    - BoardState: Immutable board representation with content hashing
    - Square: A matched 2x2 region
    - Move: Swap of two 4-adjacent cells
    - SolveResult / SolveOutcome / SolutionMetrics: Search results
    - SolutionContext: Board, ceiling and budget for a search
    - SolverStrategy: Abstract base for strategies
    - create_strategy(): Factory function
    - solve(): One-call convenience wrapper

Usage:
    from quadmatch.solver import BoardState, solve

    board = BoardState.from_2d_list([[1, 0, 1, 0], [0, 0, 1, 0],
                                     [1, 0, 0, 1], [0, 1, 1, 0]])
    result = solve(board, move_ceiling=5, state_budget=10000)

    if result.solvable:
        for move in result.moves:
            print(f"Swap {move}")
"""

from typing import Any, Optional

# Core data structures
from .board import BoardState
from .squares import Square, find_squares, count_squares, has_square, squares_touching
from .move import Move
from .solution import SolveOutcome, SolveResult, SolutionMetrics
from .context import SolutionContext
from .enumerator import (
    enumerate_legal_swaps,
    enumerate_valid_swaps,
    is_valid_swap,
)
from .path import SearchNode, reconstruct_path, replay, verify_solution

# Strategy framework
from .base import SolverStrategy
from .factory import (
    create_strategy,
    get_strategy_names,
    get_default_strategy_name,
    register_strategy,
)

# Import strategies to register them
from . import strategies


def solve(board: BoardState, move_ceiling: int = 5, state_budget: int = 20000,
          strategy: Optional[str] = None, **context_options: Any) -> SolveResult:
    """
    Run a strategy (BFS by default) on a board.

    Args:
        board: Start board
        move_ceiling: Maximum solution length
        state_budget: Maximum dequeued states
        strategy: Registered strategy name
        **context_options: Extra SolutionContext fields

    Returns:
        SolveResult
    """
    context = SolutionContext(
        board=board, move_ceiling=move_ceiling, state_budget=state_budget, **context_options
    )
    return create_strategy(strategy or get_default_strategy_name()).solve(context)


__all__ = [
    # Data structures
    "BoardState",
    "Square",
    "Move",
    "SolveOutcome",
    "SolveResult",
    "SolutionMetrics",
    "SolutionContext",
    "SearchNode",
    # Detection and enumeration
    "find_squares",
    "count_squares",
    "has_square",
    "squares_touching",
    "enumerate_legal_swaps",
    "enumerate_valid_swaps",
    "is_valid_swap",
    # Paths
    "reconstruct_path",
    "replay",
    "verify_solution",
    # Strategy framework
    "SolverStrategy",
    "create_strategy",
    "get_strategy_names",
    "get_default_strategy_name",
    "register_strategy",
    "solve",
]
