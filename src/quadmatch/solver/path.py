"""
Path Module - Search node arena, path reconstruction and forward verification.

Search nodes live in a flat list (the arena) and refer to their parent by
integer index rather than by reference.
"""

from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Sequence

from .board import BoardState
from .move import Move

ROOT_PARENT = -1


@dataclass
class SearchNode:
    """
    One explored board in the search arena.

    Attributes:
        board: Board reached
        depth: Number of moves from the start board
        parent: Arena index of the predecessor, ROOT_PARENT for the start
        move: Move that produced this board from its parent
        openings: First moves of the shortest paths reaching this board
    """
    board: BoardState
    depth: int
    parent: int = ROOT_PARENT
    move: Optional[Move] = None
    openings: FrozenSet[Move] = frozenset()


def reconstruct_path(arena: Sequence[SearchNode], index: int) -> List[Move]:
    """
    Follow parent links from a node back to the root.

    Args:
        arena: All search nodes
        index: Arena index of the solution node

    Returns:
        Moves in play order
    """
    moves: List[Move] = []
    while index != ROOT_PARENT:
        node = arena[index]
        if node.move is not None:
            moves.append(node.move)
        index = node.parent
    moves.reverse()
    return moves


def replay(board: BoardState, moves: Sequence[Move]) -> List[BoardState]:
    """
    Apply moves as plain swaps.

    Returns:
        Boards after each move, starting with the input board
    """
    boards = [board]
    for move in moves:
        board = board.apply_move(move)
        boards.append(board)
    return boards


def verify_solution(board: BoardState, moves: Sequence[Move], match_heights: bool = True) -> bool:
    """
    Independently check a claimed solution.

    Holds iff replaying the moves from the start board ends on a board
    with a square. No cascade is run.
    """
    return replay(board, moves)[-1].has_any_match(match_heights)
