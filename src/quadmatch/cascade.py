"""
Cascade Resolver - Applies match, lock, clear, gravity and refill rules
until the board is stable.

Each pass:
    1. Find outstanding squares; stop if there are none
    2. Lock the matched cells (lock_on_match)
    3. Clear matched squares whose cells are all locked (clear_locked_squares)
    4. If anything was cleared: compact columns (enable_gravity), then fill
       the empty cells at the top of each column (refill_from_top)

Resolution stops when a pass neither locks nor clears a cell, or after
max_cascade_depth passes. Refill colours come from a seeded numpy
Generator, so the same board, rules and seed always give the same result.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from .rules import RuleConfig
from .solver.board import BoardState, Cell
from .solver.squares import Square, find_squares

logger = logging.getLogger(__name__)

GravityMove = Tuple[Cell, Cell]
RefillCell = Tuple[Cell, int]


class EventKind(str, Enum):
    SQUARE_MATCHED = "square_matched"
    GRAVITY_APPLIED = "gravity_applied"
    REFILL_APPLIED = "refill_applied"


@dataclass(frozen=True)
class CascadeEvent:
    """
    One entry of the replay log consumed by the presentation layer.

    Attributes:
        kind: Event type
        pass_index: 1-based cascade pass that produced the event
        square: Matched square (SQUARE_MATCHED)
        moves: (from, to) cell pairs, bottom-up per column (GRAVITY_APPLIED)
        cells: (cell, colour) pairs in fill order (REFILL_APPLIED)
    """
    kind: EventKind
    pass_index: int
    square: Optional[Square] = None
    moves: Tuple[GravityMove, ...] = ()
    cells: Tuple[RefillCell, ...] = ()


@dataclass
class ResolveResult:
    """
    Outcome of resolving a board.

    Attributes:
        board: Final stable board
        squares_matched: Squares matched across all passes
        cascade_depth: Number of passes that matched at least one square
        events: Ordered event log
        first_pass_squares: Squares matched by the first pass alone
        goal_squares: Squares that count toward the level goal
        capped: True if max_cascade_depth stopped resolution early
    """
    board: BoardState
    squares_matched: int = 0
    cascade_depth: int = 0
    events: List[CascadeEvent] = field(default_factory=list)
    first_pass_squares: int = 0
    goal_squares: int = 0
    capped: bool = False


def _layers(board: BoardState):
    grid = [list(row) for row in board.grid]
    heights = [list(row) for row in board.heights] if board.heights is not None else None
    locked = [list(row) for row in board.locked] if board.locked is not None else None
    return grid, heights, locked


def _rebuild(grid, heights, locked) -> BoardState:
    return BoardState(
        grid=tuple(tuple(row) for row in grid),
        heights=tuple(tuple(row) for row in heights) if heights is not None else None,
        locked=tuple(tuple(row) for row in locked) if locked is not None else None,
    )


def apply_gravity(board: BoardState) -> Tuple[BoardState, List[GravityMove]]:
    """
    Compact each column downward over empty cells.

    Locked cells never move; they split a column into segments that are
    compacted independently.

    Returns:
        (new board, list of (from, to) moves)
    """
    grid, heights, locked = _layers(board)
    rows, cols = board.rows, board.cols
    moves: List[GravityMove] = []

    def is_locked(r: int, c: int) -> bool:
        return locked is not None and locked[r][c]

    for c in range(cols):
        r = rows - 1
        while r >= 0:
            if is_locked(r, c):
                r -= 1
                continue
            bottom = r
            while r >= 0 and not is_locked(r, c):
                r -= 1
            top = r + 1

            target = bottom
            for src in range(bottom, top - 1, -1):
                if grid[src][c] is None:
                    continue
                if src != target:
                    grid[target][c] = grid[src][c]
                    grid[src][c] = None
                    if heights is not None:
                        heights[target][c] = heights[src][c]
                        heights[src][c] = 0
                    moves.append(((src, c), (target, c)))
                target -= 1

    if not moves:
        return board, moves
    return _rebuild(grid, heights, locked), moves


def refill_from_top(board: BoardState, color_count: int,
                    rng: np.random.Generator) -> Tuple[BoardState, List[RefillCell]]:
    """
    Fill the run of empty cells at the top of each column.

    Columns are filled left to right, each from the top down. Empty cells
    below a filled or locked cell are left alone.

    Returns:
        (new board, list of (cell, colour) in fill order)
    """
    grid, heights, locked = _layers(board)
    filled: List[RefillCell] = []

    for c in range(board.cols):
        for r in range(board.rows):
            if grid[r][c] is not None or (locked is not None and locked[r][c]):
                break
            color = int(rng.integers(color_count))
            grid[r][c] = color
            if heights is not None:
                heights[r][c] = 0
            filled.append(((r, c), color))

    if not filled:
        return board, filled
    return _rebuild(grid, heights, locked), filled


def _run_pass(board: BoardState, squares: List[Square], config: RuleConfig,
              rng: np.random.Generator, pass_index: int,
              events: List[CascadeEvent]) -> Tuple[BoardState, bool]:
    """Run one pass; the flag is False when nothing was locked or cleared."""
    matched_cells = sorted({cell for square in squares for cell in square.cells})
    changed = False

    if config.lock_on_match:
        to_lock = [cell for cell in matched_cells if not board.is_locked(*cell)]
        if to_lock:
            board = board.with_cells({
                cell: board.cell_contents(*cell)[:2] + (True,) for cell in to_lock
            })
            changed = True

    cleared: List[Cell] = []
    if config.clear_locked_squares:
        cleared = sorted({
            cell
            for square in squares
            if all(board.is_locked(*cell) for cell in square.cells)
            for cell in square.cells
        })
        if cleared:
            board = board.with_cells({cell: (None, 0, False) for cell in cleared})

    # Gravity and refill only follow a clear
    if not cleared:
        return board, changed

    if config.enable_gravity:
        board, moves = apply_gravity(board)
        if moves:
            events.append(CascadeEvent(EventKind.GRAVITY_APPLIED, pass_index, moves=tuple(moves)))

    if config.refill_from_top:
        board, cells = refill_from_top(board, config.color_count, rng)
        if cells:
            events.append(CascadeEvent(EventKind.REFILL_APPLIED, pass_index, cells=tuple(cells)))

    return board, True


def resolve(board: BoardState, config: RuleConfig, seed: Optional[int] = None,
            rng: Optional[np.random.Generator] = None) -> ResolveResult:
    """
    Resolve all squares on a board until it is stable.

    Args:
        board: Board right after a valid swap (or any board)
        config: Rule flags and colour count
        seed: Seed for the refill stream (ignored when rng is given)
        rng: Explicit random stream, for callers threading one generator

    Returns:
        ResolveResult with the final board, counts and event log
    """
    if rng is None:
        rng = np.random.default_rng(seed)

    result = ResolveResult(board=board)
    events = result.events

    while True:
        squares = find_squares(board, match_heights=config.match_heights)
        if not squares:
            break
        if result.cascade_depth >= config.max_cascade_depth:
            result.capped = True
            logger.warning(
                f"[Cascade] Stopped after {config.max_cascade_depth} passes with "
                f"{len(squares)} squares outstanding"
            )
            break

        result.cascade_depth += 1
        pass_index = result.cascade_depth
        result.squares_matched += len(squares)
        if pass_index == 1:
            result.first_pass_squares = len(squares)

        events.extend(
            CascadeEvent(EventKind.SQUARE_MATCHED, pass_index, square=square) for square in squares
        )
        board, changed = _run_pass(board, squares, config, rng, pass_index, events)
        logger.debug(f"[Cascade] Pass {pass_index}: {len(squares)} squares")

        if not changed:
            break

    result.board = board
    result.goal_squares = (
        result.squares_matched if config.count_cascade_squares else result.first_pass_squares
    )
    return result
