"""
Breadth-First Strategy - Shortest swap sequence to any matched board.

Explores boards in non-decreasing move count, so the first matched board
generated is reached by a shortest path. Every legal swap is a successor;
the swap that completes a solution is by construction a valid swap.

Bounded by two controls:
    - move ceiling: nodes at the ceiling depth are not expanded
    - state budget: the search stops once more states were dequeued
      than the budget allows, reporting BUDGET_EXCEEDED
"""

import logging
import time
from collections import deque
from typing import Deque, List, Optional, Set

from ..base import SolverStrategy
from ..context import SolutionContext
from ..enumerator import creates_square, iter_legal_swaps
from ..factory import register_strategy
from ..move import Move
from ..path import SearchNode, reconstruct_path, verify_solution
from ..solution import SolveOutcome, SolveResult
from ..visited import StateIndex

logger = logging.getLogger(__name__)


@register_strategy
class BreadthFirstStrategy(SolverStrategy):
    """
    Hash-deduplicated breadth-first search over swaps.

    Algorithm:
        1. Seed the queue with the start board (depth 0, no parent)
        2. Pop the front node; count it against the state budget
        3. Skip expansion if its depth equals the move ceiling
        4. For each legal swap: a matched result is a solution; an
           unmatched, unseen result is enqueued with a parent link
        5. Stop on the first solution, an empty queue, or the budget

    With context.count_openings the remaining nodes of the solution's
    parent layer are still checked (nothing new is enqueued) so that every
    distinct opening move of a shortest solution is collected.
    """
    name = "bfs"
    description = "Breadth-first search (optimal) - Hash-deduplicated shortest path"

    def solve(self, context: SolutionContext) -> SolveResult:
        start_time = time.perf_counter()
        start = context.board
        match_heights = context.match_heights

        if start.has_any_match(match_heights):
            logger.info("[BFS] Start board already matched")
            return self._build_result(context, SolveOutcome.SOLVED, [], 0, start_time)

        arena: List[SearchNode] = [SearchNode(board=start, depth=0)]
        index = StateIndex()
        index.add(start, 0)
        queue: Deque[int] = deque([0])

        states_explored = 0
        pruned = 0
        solution_index: Optional[int] = None
        solution_depth: Optional[int] = None
        openings: Set[Move] = set()
        budget_hit = False

        while queue:
            node_index = queue.popleft()
            node = arena[node_index]

            # Draining the solution's parent layer is finished
            if solution_depth is not None and node.depth + 1 > solution_depth:
                break

            states_explored += 1
            if context.budget_exhausted(states_explored):
                budget_hit = True
                break

            if states_explored % context.progress_interval == 0:
                context.report_progress(
                    min(0.99, states_explored / max(1, context.state_budget)),
                    f"{states_explored} states, depth {node.depth}"
                )

            if node.depth >= context.move_ceiling:
                continue

            child_depth = node.depth + 1
            for move, child in iter_legal_swaps(node.board):
                child_openings = node.openings if node.depth > 0 else frozenset((move,))

                if creates_square(child, move, match_heights):
                    if solution_index is None:
                        arena.append(SearchNode(child, child_depth, node_index, move, child_openings))
                        solution_index = len(arena) - 1
                        solution_depth = child_depth
                        logger.debug(f"[BFS] First solution at depth {child_depth} after {states_explored} states")
                    openings |= child_openings
                    if not context.count_openings:
                        break
                    continue

                if solution_depth is not None:
                    continue

                seen = index.lookup(child)
                if seen is not None:
                    pruned += 1
                    other = arena[seen]
                    # Same board reached at the same depth through another opening
                    if other.depth == child_depth and not child_openings <= other.openings:
                        other.openings = other.openings | child_openings
                    continue

                arena.append(SearchNode(child, child_depth, node_index, move, child_openings))
                index.add(child, len(arena) - 1)
                queue.append(len(arena) - 1)

            if solution_index is not None and not context.count_openings:
                break

        if solution_index is not None:
            moves = reconstruct_path(arena, solution_index)
            if not verify_solution(start, moves, match_heights):
                logger.error(f"[BFS] Reconstructed path failed forward verification: {moves}")
                raise RuntimeError("BFS produced a path that does not reach a matched board")
            if budget_hit:
                logger.debug("[BFS] Budget reached while counting openings; count is a lower bound")
            logger.info(
                f"[BFS] Solved in {len(moves)} moves, {states_explored} states explored, "
                f"{pruned} duplicates pruned, {len(openings)} openings"
            )
            return self._build_result(
                context, SolveOutcome.SOLVED, moves, states_explored, start_time,
                pruned=pruned, openings=frozenset(openings)
            )

        outcome = SolveOutcome.BUDGET_EXCEEDED if budget_hit else SolveOutcome.UNSOLVABLE
        logger.info(
            f"[BFS] {outcome.value}: {states_explored} states explored, "
            f"{len(index)} distinct boards, {index.collisions} hash collisions"
        )
        return self._build_result(context, outcome, [], states_explored, start_time, pruned=pruned)
