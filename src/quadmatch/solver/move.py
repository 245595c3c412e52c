"""
Move Module - Represents a swap of two 4-adjacent cells.
"""

from dataclasses import dataclass
from typing import List, Tuple

Cell = Tuple[int, int]


@dataclass(frozen=True, order=True)
class Move:
    """
    Represents a swap of two orthogonally adjacent cells.

    Stored normalised so that (r1, c1) is the lexicographically smaller
    cell; Move(0, 1, 0, 0) and Move(0, 0, 0, 1) are the same swap.

    Attributes:
        r1: Row of the first cell
        c1: Column of the first cell
        r2: Row of the second cell
        c2: Column of the second cell
    """
    r1: int
    c1: int
    r2: int
    c2: int

    def __post_init__(self):
        if abs(self.r1 - self.r2) + abs(self.c1 - self.c2) != 1:
            raise ValueError(
                f"Cells ({self.r1},{self.c1}) and ({self.r2},{self.c2}) are not 4-adjacent"
            )
        if (self.r1, self.c1) > (self.r2, self.c2):
            r1, c1 = self.r1, self.c1
            object.__setattr__(self, "r1", self.r2)
            object.__setattr__(self, "c1", self.c2)
            object.__setattr__(self, "r2", r1)
            object.__setattr__(self, "c2", c1)

    @classmethod
    def create(cls, a: Cell, b: Cell) -> 'Move':
        """
        Create a Move from two (row, col) cells.

        Raises:
            ValueError: If the cells are not 4-adjacent
        """
        return cls(r1=a[0], c1=a[1], r2=b[0], c2=b[1])

    @classmethod
    def from_list(cls, data: List[List[int]]) -> 'Move':
        """Create a Move from [[r1, c1], [r2, c2]] (JSON form)."""
        (r1, c1), (r2, c2) = data
        return cls(r1=int(r1), c1=int(c1), r2=int(r2), c2=int(c2))

    @property
    def first(self) -> Cell:
        return (self.r1, self.c1)

    @property
    def second(self) -> Cell:
        return (self.r2, self.c2)

    @property
    def cells(self) -> Tuple[Cell, Cell]:
        return (self.first, self.second)

    @property
    def is_horizontal(self) -> bool:
        """True for a left/right swap, False for up/down."""
        return self.r1 == self.r2

    def to_list(self) -> List[List[int]]:
        return [[self.r1, self.c1], [self.r2, self.c2]]

    def __str__(self) -> str:
        return f"({self.r1},{self.c1})<->({self.r2},{self.c2})"
