"""
Errors Module - Exceptions raised at construction and access time.

Only malformed input raises. Expected negative outcomes (no solution,
budget exhausted, rejected level) are reported through result types.
"""


class QuadmatchError(Exception):
    """Base class for all quadmatch errors."""


class InvalidGrid(QuadmatchError, ValueError):
    """Board grid is empty, ragged, or holds an invalid cell value."""


class OutOfBounds(QuadmatchError, IndexError):
    """Coordinate lies outside the board."""

    def __init__(self, row: int, col: int, rows: int, cols: int):
        self.row = row
        self.col = col
        super().__init__(f"({row}, {col}) is outside a {rows}x{cols} board")
