"""Shared boards for the test suite."""

from quadmatch.generator import Template
from quadmatch.rules import RuleConfig
from quadmatch.solver import BoardState, Move

# No square; swapping (1,2)<->(1,3) completes a colour-0 square at (1,1)
ONE_MOVE = [
    [1, 0, 1, 0],
    [0, 0, 1, 0],
    [1, 0, 0, 1],
    [0, 1, 1, 0],
]

UNIFORM = [[0] * 4 for _ in range(4)]

# color = (r + 2c) mod 4: the shortest solution is four swaps
DIAGONAL = [[(r + 2 * c) % 4 for c in range(4)] for r in range(4)]

# Colour 9 sits in both end columns and needs six swaps to meet; colours 1 and 2
# have three tiles each and can never form a square
SIX_MOVES = [
    [9, 1, 2, 1, 9],
    [9, 2, 1, 2, 9],
]

# Goal of a two-move template; no single swap from its start board matches
TEMPLATE_GOAL = [
    [0, 0, 1, 2],
    [0, 0, 2, 1],
    [1, 2, 3, 3],
    [2, 1, 3, 0],
]
TEMPLATE_MOVES = [Move(1, 1, 2, 1), Move(0, 1, 0, 2)]
TEMPLATE_START = [
    [0, 1, 0, 2],
    [0, 2, 2, 1],
    [1, 0, 3, 3],
    [2, 1, 3, 0],
]


def board(rows):
    return BoardState.from_2d_list(rows)


def small_config(**overrides):
    params = dict(width=4, height=4, color_count=4, move_ceiling=3, state_budget=5000)
    params.update(overrides)
    return RuleConfig(**params)


def two_move_template(name="two-move"):
    return Template(goal=board(TEMPLATE_GOAL), moves=tuple(TEMPLATE_MOVES), name=name)
