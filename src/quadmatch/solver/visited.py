"""
Visited Index Module - Deduplicates search states by content hash.

Boards are bucketed by their content hash and compared in full inside a
bucket, so a hash collision costs a comparison but never merges two
different boards.
"""

from typing import Dict, List, Optional

from .board import BoardState


class StateIndex:
    """
    Maps boards to arena indices.

    Attributes:
        collisions: Lookups that hit a bucket holding a different board
    """

    def __init__(self):
        self._buckets: Dict[int, List[int]] = {}
        self._boards: Dict[int, BoardState] = {}
        self.collisions = 0

    def __len__(self) -> int:
        return len(self._boards)

    def lookup(self, board: BoardState) -> Optional[int]:
        """Return the arena index of an identical board, or None."""
        bucket = self._buckets.get(board.content_hash())
        if not bucket:
            return None
        for index in bucket:
            if self._boards[index] == board:
                return index
        self.collisions += 1
        return None

    def add(self, board: BoardState, index: int) -> None:
        """Record a board; callers must lookup() first."""
        self._buckets.setdefault(board.content_hash(), []).append(index)
        self._boards[index] = board
