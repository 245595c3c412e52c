"""
Board State Module - Immutable board representation for the square-match puzzle.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, TYPE_CHECKING

from ..errors import InvalidGrid, OutOfBounds
from .squares import Square, count_squares, find_squares, has_square

if TYPE_CHECKING:
    from .move import Move

Cell = Tuple[int, int]
Grid = Tuple[Tuple[Optional[int], ...], ...]
CellContents = Tuple[Optional[int], int, bool]

# Polynomial content hash over the flattened cells, mod the Mersenne prime 2^61-1
HASH_BASE = 1_000_003
HASH_MODULUS = (1 << 61) - 1


def _check_layer(layer, name: str, rows: Optional[int] = None, cols: Optional[int] = None) -> None:
    if not layer:
        raise InvalidGrid(f"{name} must have at least one row")
    expected = cols if cols is not None else len(layer[0])
    if expected == 0:
        raise InvalidGrid(f"{name} rows must not be empty")
    if rows is not None and len(layer) != rows:
        raise InvalidGrid(f"{name} has {len(layer)} rows, expected {rows}")
    for index, row in enumerate(layer):
        if len(row) != expected:
            raise InvalidGrid(
                f"{name} is ragged: row {index} has {len(row)} cells, expected {expected}"
            )


@dataclass(frozen=True)
class BoardState:
    """
    Immutable board state representation.

    Uses tuple-of-tuples for hashability and immutability. Cells hold a
    small non-negative colour id, or None once cleared and not refilled.

    Attributes:
        grid: Colour ids, row 0 at the top
        heights: Optional per-cell stack heights (extended ruleset)
        locked: Optional per-cell lock flags (extended ruleset)
        digest: Content hash; computed on construction when not supplied
    """
    grid: Grid
    heights: Optional[Tuple[Tuple[int, ...], ...]] = None
    locked: Optional[Tuple[Tuple[bool, ...], ...]] = None
    digest: Optional[int] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        _check_layer(self.grid, "grid")
        rows, cols = len(self.grid), len(self.grid[0])
        if self.heights is not None:
            _check_layer(self.heights, "heights", rows, cols)
        if self.locked is not None:
            _check_layer(self.locked, "locked", rows, cols)
        if self.digest is None:
            object.__setattr__(self, "digest", self._compute_digest())

    @classmethod
    def from_2d_list(cls, grid: Sequence[Sequence[Optional[int]]],
                     heights: Optional[Sequence[Sequence[int]]] = None,
                     locked: Optional[Sequence[Sequence[bool]]] = None) -> 'BoardState':
        """
        Create BoardState from nested lists, validating every cell.

        Args:
            grid: 2D list of colour ids (non-negative ints) or None
            heights: Optional 2D list of stack heights, same shape
            locked: Optional 2D list of lock flags, same shape

        Returns:
            BoardState instance

        Raises:
            InvalidGrid: Empty, ragged, or invalid cell values
        """
        try:
            rows = tuple(tuple(row) for row in grid)
        except TypeError as exc:
            raise InvalidGrid(f"grid must be a sequence of rows: {exc}") from exc
        _check_layer(rows, "grid")
        for r, row in enumerate(rows):
            for c, value in enumerate(row):
                if value is None:
                    continue
                if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                    raise InvalidGrid(f"cell ({r}, {c}) holds {value!r}, expected a colour id >= 0")

        height_rows = None
        if heights is not None:
            height_rows = tuple(tuple(int(h) for h in row) for row in heights)
            _check_layer(height_rows, "heights", len(rows), len(rows[0]))
            if any(h < 0 for row in height_rows for h in row):
                raise InvalidGrid("stack heights must be non-negative")

        lock_rows = None
        if locked is not None:
            lock_rows = tuple(tuple(bool(flag) for flag in row) for row in locked)

        return cls(grid=rows, heights=height_rows, locked=lock_rows)

    @property
    def rows(self) -> int:
        """Get number of rows in board."""
        return len(self.grid)

    @property
    def cols(self) -> int:
        """Get number of columns in board."""
        return len(self.grid[0])

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < len(self.grid) and 0 <= col < len(self.grid[0])

    def _require(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise OutOfBounds(row, col, self.rows, self.cols)

    def get_cell(self, row: int, col: int) -> Optional[int]:
        """
        Get colour at a specific cell.

        Raises:
            OutOfBounds: If the coordinate is outside the board
        """
        self._require(row, col)
        return self.grid[row][col]

    def get_height(self, row: int, col: int) -> int:
        self._require(row, col)
        return self.heights[row][col] if self.heights is not None else 0

    def is_locked(self, row: int, col: int) -> bool:
        self._require(row, col)
        return bool(self.locked[row][col]) if self.locked is not None else False

    def cell_contents(self, row: int, col: int) -> CellContents:
        """(colour, height, locked) triple for a cell."""
        return (
            self.grid[row][col],
            self.heights[row][col] if self.heights is not None else 0,
            bool(self.locked[row][col]) if self.locked is not None else False,
        )

    def _cell_code(self, row: int, col: int) -> int:
        color, height, locked = self.cell_contents(row, col)
        if color is None:
            return 0
        return ((color + 1) * 256 + height) * 2 + (1 if locked else 0)

    def _compute_digest(self) -> int:
        value = 0
        for r in range(self.rows):
            for c in range(self.cols):
                value = (value * HASH_BASE + self._cell_code(r, c)) % HASH_MODULUS
        return value

    def content_hash(self) -> int:
        """
        Polynomial hash of the board contents.

        Used only to deduplicate search states; two different boards may
        share a hash.
        """
        return self.digest

    @staticmethod
    def _swap_layer(layer, a: Cell, b: Cell):
        rows = list(layer)
        (r1, c1), (r2, c2) = a, b
        first = list(rows[r1])
        if r1 == r2:
            first[c1], first[c2] = first[c2], first[c1]
            rows[r1] = tuple(first)
        else:
            second = list(rows[r2])
            first[c1], second[c2] = second[c2], first[c1]
            rows[r1] = tuple(first)
            rows[r2] = tuple(second)
        return tuple(rows)

    def apply_swap(self, a: Cell, b: Cell) -> 'BoardState':
        """
        Exchange the contents of two cells.

        Adjacency is not checked here; the swap enumerator and Move enforce it.
        The content hash is updated incrementally from the two changed cells.

        Args:
            a: First (row, col)
            b: Second (row, col)

        Returns:
            New BoardState with the cells exchanged

        Raises:
            OutOfBounds: If either coordinate is outside the board
        """
        self._require(*a)
        self._require(*b)
        if a == b:
            return self

        cols = self.cols
        n = self.rows * cols
        i = a[0] * cols + a[1]
        j = b[0] * cols + b[1]
        code_i = self._cell_code(*a)
        code_j = self._cell_code(*b)
        delta = (code_j - code_i) * (
            pow(HASH_BASE, n - 1 - i, HASH_MODULUS) - pow(HASH_BASE, n - 1 - j, HASH_MODULUS)
        )

        return BoardState(
            grid=self._swap_layer(self.grid, a, b),
            heights=self._swap_layer(self.heights, a, b) if self.heights is not None else None,
            locked=self._swap_layer(self.locked, a, b) if self.locked is not None else None,
            digest=(self.digest + delta) % HASH_MODULUS,
        )

    def apply_move(self, move: 'Move') -> 'BoardState':
        """Apply a swap move to create a new board state."""
        return self.apply_swap(move.first, move.second)

    def with_cells(self, updates: Dict[Cell, CellContents]) -> 'BoardState':
        """
        Return a board with the given cells replaced.

        Args:
            updates: Mapping of (row, col) -> (colour, height, locked)
        """
        grid = [list(row) for row in self.grid]
        has_heights = self.heights is not None or any(h for _, h, _ in updates.values())
        has_locks = self.locked is not None or any(lk for _, _, lk in updates.values())
        heights = [list(row) for row in self.heights] if self.heights is not None else (
            [[0] * self.cols for _ in range(self.rows)] if has_heights else None
        )
        locked = [list(row) for row in self.locked] if self.locked is not None else (
            [[False] * self.cols for _ in range(self.rows)] if has_locks else None
        )

        for (r, c), (color, height, lock) in updates.items():
            self._require(r, c)
            grid[r][c] = color
            if heights is not None:
                heights[r][c] = height
            if locked is not None:
                locked[r][c] = lock

        return BoardState(
            grid=tuple(tuple(row) for row in grid),
            heights=tuple(tuple(row) for row in heights) if heights is not None else None,
            locked=tuple(tuple(row) for row in locked) if locked is not None else None,
        )

    def find_squares(self, include_locked: bool = False, match_heights: bool = True) -> List[Square]:
        return find_squares(self, include_locked, match_heights)

    def has_any_match(self, match_heights: bool = True) -> bool:
        """True if any outstanding square exists. Never mutates the board."""
        return has_square(self, match_heights=match_heights)

    def count_matches(self, match_heights: bool = True) -> int:
        """Number of outstanding squares. Never mutates the board."""
        return count_squares(self, match_heights=match_heights)

    def count_cells(self) -> int:
        """Count non-empty cells on the board."""
        return sum(1 for row in self.grid for cell in row if cell is not None)

    def diff(self, other: 'BoardState') -> List[Cell]:
        """
        Find cells that differ between this board and another.

        Args:
            other: Another BoardState to compare against

        Returns:
            List of (row, col) tuples where cell contents differ
        """
        if not isinstance(other, BoardState):
            raise TypeError("Can only diff against another BoardState")
        if (self.rows, self.cols) != (other.rows, other.cols):
            raise ValueError(
                f"Cannot diff a {self.rows}x{self.cols} board against {other.rows}x{other.cols}"
            )

        return [
            (r, c)
            for r in range(self.rows)
            for c in range(self.cols)
            if self.cell_contents(r, c) != other.cell_contents(r, c)
        ]

    def __hash__(self):
        """Enable using BoardState as dict key or in sets."""
        return self.digest

    def __eq__(self, other):
        """Enable board equality comparison."""
        if not isinstance(other, BoardState):
            return False
        if self.digest != other.digest:
            return False
        return (self.grid == other.grid
                and self.heights == other.heights
                and self.locked == other.locked)

    def to_list(self) -> List[List[Optional[int]]]:
        """
        Convert to mutable 2D list representation.

        Returns:
            2D list of colour ids
        """
        return [list(row) for row in self.grid]
