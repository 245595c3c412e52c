"""
Square Detector Module - Finds 2x2 regions of matching cells.

A square is four cells in a 2x2 window sharing one colour (and, when the
board carries stack heights, one height). Squares whose four cells are all
locked have already been scored and are skipped unless asked for.

Two scan flavours are provided:
    - find_squares()/count_squares()/has_square(): full vectorised scan
    - squares_touching(): local scan of the windows around given cells,
      used on the search hot path where only two cells changed
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

import numpy as np

if TYPE_CHECKING:
    from .board import BoardState

Cell = Tuple[int, int]


@dataclass(frozen=True)
class Square:
    """
    A matched 2x2 region.

    Attributes:
        row: Top row of the window
        col: Left column of the window
        color: Shared colour id
        height: Shared stack height, or None when the board has no heights
    """
    row: int
    col: int
    color: int
    height: Optional[int] = None

    @property
    def cells(self) -> Tuple[Cell, ...]:
        """The four covered cells, in scan order."""
        r, c = self.row, self.col
        return ((r, c), (r, c + 1), (r + 1, c), (r + 1, c + 1))


def _corners(layer: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    return layer[:-1, :-1], layer[:-1, 1:], layer[1:, :-1], layer[1:, 1:]


def square_mask(board: 'BoardState', include_locked: bool = False,
                match_heights: bool = True) -> np.ndarray:
    """
    Boolean mask of shape (rows-1, cols-1); True where a square's top-left is.

    Args:
        board: Board to scan
        include_locked: Also report squares whose cells are all locked
        match_heights: Require equal stack heights when the board has them

    Returns:
        Mask array (empty when the board is a single row or column)
    """
    colors = np.array(
        [[-1 if value is None else value for value in row] for row in board.grid],
        dtype=np.int64,
    )
    tl, tr, bl, br = _corners(colors)
    mask = (tl >= 0) & (tl == tr) & (tl == bl) & (tl == br)

    if match_heights and board.heights is not None:
        h_tl, h_tr, h_bl, h_br = _corners(np.array(board.heights, dtype=np.int64))
        mask &= (h_tl == h_tr) & (h_tl == h_bl) & (h_tl == h_br)

    if not include_locked and board.locked is not None:
        l_tl, l_tr, l_bl, l_br = _corners(np.array(board.locked, dtype=bool))
        mask &= ~(l_tl & l_tr & l_bl & l_br)

    return mask


def _make_square(board: 'BoardState', row: int, col: int) -> Square:
    height = board.heights[row][col] if board.heights is not None else None
    return Square(row=row, col=col, color=board.grid[row][col], height=height)


def find_squares(board: 'BoardState', include_locked: bool = False,
                 match_heights: bool = True) -> List[Square]:
    """
    Enumerate all squares top-to-bottom, left-to-right.

    The order is stable so that event logs replay identically.
    """
    mask = square_mask(board, include_locked, match_heights)
    # argwhere walks the mask in row-major order
    return [_make_square(board, int(r), int(c)) for r, c in np.argwhere(mask)]


def count_squares(board: 'BoardState', include_locked: bool = False,
                  match_heights: bool = True) -> int:
    return int(square_mask(board, include_locked, match_heights).sum())


def has_square(board: 'BoardState', include_locked: bool = False,
               match_heights: bool = True) -> bool:
    return bool(square_mask(board, include_locked, match_heights).any())


def _window_is_square(board: 'BoardState', row: int, col: int,
                      include_locked: bool, match_heights: bool) -> bool:
    grid = board.grid
    color = grid[row][col]
    if color is None:
        return False
    if grid[row][col + 1] != color or grid[row + 1][col] != color or grid[row + 1][col + 1] != color:
        return False

    if match_heights and board.heights is not None:
        h = board.heights
        height = h[row][col]
        if h[row][col + 1] != height or h[row + 1][col] != height or h[row + 1][col + 1] != height:
            return False

    if not include_locked and board.locked is not None:
        lk = board.locked
        if lk[row][col] and lk[row][col + 1] and lk[row + 1][col] and lk[row + 1][col + 1]:
            return False

    return True


def squares_touching(board: 'BoardState', cells: Iterable[Cell],
                     include_locked: bool = False,
                     match_heights: bool = True) -> List[Square]:
    """
    Find squares whose window covers at least one of the given cells.

    Each cell belongs to at most four windows, so this is constant time per
    cell regardless of board size.

    Args:
        board: Board to inspect
        cells: Cells of interest (e.g. the two cells of a swap)

    Returns:
        Squares in scan order, without duplicates
    """
    max_row = board.rows - 1
    max_col = board.cols - 1
    windows = set()
    for row, col in cells:
        for top in (row - 1, row):
            for left in (col - 1, col):
                if 0 <= top < max_row and 0 <= left < max_col:
                    windows.add((top, left))

    return [
        _make_square(board, top, left)
        for top, left in sorted(windows)
        if _window_is_square(board, top, left, include_locked, match_heights)
    ]
