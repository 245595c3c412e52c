"""
Swap Enumerator Module - Lists the swaps a player can make on a board.

Terminology:
    legal swap: 4-adjacent, both cells non-empty and unlocked, and the
                contents differ (the swap changes the board). Costs a move.
    valid swap: a legal swap whose result contains a square before any
                cascade runs. Only valid swaps are resolved in play.
"""

from typing import Iterator, List, Tuple

from .board import BoardState, Cell
from .move import Move
from .squares import squares_touching

SwapResult = Tuple[Move, BoardState]


def _swappable(board: BoardState, row: int, col: int) -> bool:
    if board.grid[row][col] is None:
        return False
    return not (board.locked is not None and board.locked[row][col])


def _is_legal(board: BoardState, a: Cell, b: Cell) -> bool:
    if not (_swappable(board, *a) and _swappable(board, *b)):
        return False
    return board.cell_contents(*a) != board.cell_contents(*b)


def iter_legal_swaps(board: BoardState) -> Iterator[SwapResult]:
    """
    Yield every legal swap with its resulting board.

    Order is row-major over the first cell, right neighbour before the
    neighbour below.
    """
    rows, cols = board.rows, board.cols
    for r in range(rows):
        for c in range(cols):
            for nr, nc in ((r, c + 1), (r + 1, c)):
                if nr < rows and nc < cols and _is_legal(board, (r, c), (nr, nc)):
                    yield Move(r, c, nr, nc), board.apply_swap((r, c), (nr, nc))


def enumerate_legal_swaps(board: BoardState) -> List[SwapResult]:
    return list(iter_legal_swaps(board))


def creates_square(after: BoardState, move: Move, match_heights: bool = True) -> bool:
    """
    Check whether a swap produced a square around its two cells.

    Only valid as a full "has any square" test when the board before the
    swap had no outstanding squares.
    """
    return bool(squares_touching(after, move.cells, match_heights=match_heights))


def iter_valid_swaps(board: BoardState, match_heights: bool = True) -> Iterator[SwapResult]:
    """Yield legal swaps whose resulting board contains a square."""
    already_matched = board.has_any_match(match_heights)
    for move, after in iter_legal_swaps(board):
        if already_matched or creates_square(after, move, match_heights):
            yield move, after


def enumerate_valid_swaps(board: BoardState, match_heights: bool = True) -> List[SwapResult]:
    """
    Find all valid swaps on the board.

    Args:
        board: Current board state
        match_heights: Squares also require equal stack heights

    Returns:
        List of (Move, pre-cascade board) pairs
    """
    return list(iter_valid_swaps(board, match_heights))


def is_valid_swap(board: BoardState, a: Cell, b: Cell, match_heights: bool = True) -> bool:
    """
    Gate a player-initiated swap.

    Returns False for non-adjacent or illegal pairs.

    Raises:
        OutOfBounds: If either coordinate is outside the board
    """
    board.get_cell(*a)
    board.get_cell(*b)
    if abs(a[0] - b[0]) + abs(a[1] - b[1]) != 1:
        return False
    if not _is_legal(board, a, b):
        return False
    after = board.apply_swap(a, b)
    if board.has_any_match(match_heights):
        return True
    return creates_square(after, Move.create(a, b), match_heights)
