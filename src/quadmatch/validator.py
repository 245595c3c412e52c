"""
Level Validator - Decides whether a start board makes a fair puzzle.

Checks, in order:
    1. Starting match: a board that already holds a square is pre-solved
    2. Solvability within the move ceiling (BFS)
    3. Triviality: shortest solution shorter than the minimum depth
    4. Forced solution: too few distinct opening moves (flag only)
    5. Goal reachability: resolving the board after the found solution
       yields at least the required number of goal squares
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .cascade import ResolveResult, resolve
from .rules import RuleConfig
from .solver import BoardState, SolutionContext, SolveResult, create_strategy, get_default_strategy_name
from .solver.solution import SolveOutcome

logger = logging.getLogger(__name__)


class Rejection(str, Enum):
    """Content-quality failures; any one makes the level invalid."""
    STARTING_MATCH = "starting_match"
    UNSOLVABLE = "unsolvable"
    BUDGET_EXCEEDED = "budget_exceeded"
    TRIVIAL_SOLUTION = "trivial_solution"
    GOAL_UNREACHABLE = "goal_unreachable"


class Flag(str, Enum):
    """Findings left to caller policy."""
    FORCED_SOLUTION = "forced_solution"


@dataclass
class ValidationReport:
    """
    Outcome of validating one start board.

    Attributes:
        rejections: Failures, in check order
        flags: Non-fatal findings
        shortest_length: Moves in the shortest solution, if one was found
        states_explored: States the solver dequeued
        opening_count: Distinct first moves of shortest solutions
        goal_squares: Goal squares earned by playing the found solution
        squares_goal: Goal squares required
        solve_result: Raw solver result
        resolve_result: Cascade result at the end of the found solution
    """
    rejections: List[Rejection] = field(default_factory=list)
    flags: List[Flag] = field(default_factory=list)
    shortest_length: Optional[int] = None
    states_explored: int = 0
    opening_count: int = 0
    goal_squares: int = 0
    squares_goal: int = 1
    solve_result: Optional[SolveResult] = None
    resolve_result: Optional[ResolveResult] = None

    @property
    def passed(self) -> bool:
        return not self.rejections

    @property
    def starting_match(self) -> bool:
        return Rejection.STARTING_MATCH in self.rejections

    @property
    def solvable(self) -> bool:
        return self.solve_result is not None and self.solve_result.solvable

    @property
    def trivial(self) -> bool:
        return Rejection.TRIVIAL_SOLUTION in self.rejections

    @property
    def forced(self) -> bool:
        return Flag.FORCED_SOLUTION in self.flags

    @property
    def goal_reachable(self) -> bool:
        return self.solvable and self.goal_squares >= self.squares_goal

    def summary(self) -> Dict[str, Any]:
        """Plain-data view for logs and tooling output."""
        return {
            "passed": self.passed,
            "rejections": [r.value for r in self.rejections],
            "flags": [f.value for f in self.flags],
            "shortest_length": self.shortest_length,
            "states_explored": self.states_explored,
            "opening_count": self.opening_count,
            "goal_squares": self.goal_squares,
            "squares_goal": self.squares_goal,
            "solution": [m.to_list() for m in self.solve_result.moves] if self.solvable else [],
        }


def validate_level(
    board: BoardState,
    config: RuleConfig,
    *,
    move_ceiling: Optional[int] = None,
    min_solution_depth: Optional[int] = None,
    min_initial_moves: Optional[int] = None,
    squares_goal: Optional[int] = None,
    seed: Optional[int] = None,
    strategy: Optional[str] = None,
) -> ValidationReport:
    """
    Validate a start board against the rules.

    Unset keyword arguments fall back to the matching RuleConfig field.

    Args:
        board: Candidate start board
        config: Rules, budgets and quality thresholds
        move_ceiling: Maximum solution length
        min_solution_depth: Shortest solutions below this are trivial
        min_initial_moves: Fewer openings than this flags a forced puzzle
        squares_goal: Goal squares required to win
        seed: Refill seed used when resolving the final swap
        strategy: Solver strategy name (BFS by default)

    Returns:
        ValidationReport
    """
    ceiling = config.move_ceiling if move_ceiling is None else move_ceiling
    min_depth = config.min_solution_depth if min_solution_depth is None else min_solution_depth
    min_openings = config.min_initial_moves if min_initial_moves is None else min_initial_moves
    goal = config.squares_goal if squares_goal is None else squares_goal

    report = ValidationReport(squares_goal=goal)

    if (board.rows, board.cols) != (config.height, config.width):
        logger.debug(
            f"[Validator] Board is {board.rows}x{board.cols}, rules expect {config.height}x{config.width}"
        )

    if board.has_any_match(config.match_heights):
        report.rejections.append(Rejection.STARTING_MATCH)
        logger.debug("[Validator] Rejected: board starts with a square")
        return report

    context = SolutionContext.from_config(board, config, move_ceiling=ceiling, count_openings=True)
    result = create_strategy(strategy or get_default_strategy_name()).solve(context)
    report.solve_result = result
    report.states_explored = result.states_explored

    if not result.solvable:
        if result.outcome == SolveOutcome.BUDGET_EXCEEDED:
            report.rejections.append(Rejection.BUDGET_EXCEEDED)
        else:
            report.rejections.append(Rejection.UNSOLVABLE)
        logger.debug(f"[Validator] Rejected: {result.outcome.value} within {ceiling} moves")
        return report

    report.shortest_length = result.shortest_length
    report.opening_count = result.opening_count

    if report.shortest_length < min_depth:
        report.rejections.append(Rejection.TRIVIAL_SOLUTION)
        logger.debug(f"[Validator] Rejected: solution of {report.shortest_length} < {min_depth} moves")

    if report.opening_count < min_openings:
        report.flags.append(Flag.FORCED_SOLUTION)
        logger.debug(f"[Validator] Flagged: only {report.opening_count} opening moves")

    resolved = resolve(result.final_board, config, seed=seed)
    report.resolve_result = resolved
    report.goal_squares = resolved.goal_squares
    if resolved.goal_squares < goal:
        report.rejections.append(Rejection.GOAL_UNREACHABLE)
        logger.debug(f"[Validator] Rejected: {resolved.goal_squares}/{goal} goal squares")

    logger.info(
        f"[Validator] {'Passed' if report.passed else 'Rejected'}: "
        f"shortest={report.shortest_length}, openings={report.opening_count}, "
        f"states={report.states_explored}"
    )
    return report
