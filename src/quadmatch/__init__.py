"""
quadmatch - Rule engine for a 2x2 square-matching tile puzzle.

Public API:
    - RuleConfig: Immutable rules, budgets and thresholds
    - BoardState / Move / Square: Board model (quadmatch.solver)
    - solve(): Shortest swap sequence to a matched board
    - resolve(): Deterministic cascade resolution with an event log
    - validate_level(): Puzzle-quality report for a start board
    - generate_puzzle(): Validated start boards with bounded fallback
"""

from .errors import InvalidGrid, OutOfBounds, QuadmatchError
from .rules import RuleConfig
from .solver import (
    BoardState,
    Move,
    Square,
    SolveOutcome,
    SolveResult,
    enumerate_valid_swaps,
    is_valid_swap,
    solve,
    verify_solution,
)
from .cascade import CascadeEvent, EventKind, ResolveResult, resolve
from .validator import Flag, Rejection, ValidationReport, validate_level
from .generator import GeneratedPuzzle, GenerationStatus, Template, generate_puzzle

__version__ = "0.1.0"

__all__ = [
    "InvalidGrid",
    "OutOfBounds",
    "QuadmatchError",
    "RuleConfig",
    "BoardState",
    "Move",
    "Square",
    "SolveOutcome",
    "SolveResult",
    "enumerate_valid_swaps",
    "is_valid_swap",
    "solve",
    "verify_solution",
    "CascadeEvent",
    "EventKind",
    "ResolveResult",
    "resolve",
    "Flag",
    "Rejection",
    "ValidationReport",
    "validate_level",
    "GeneratedPuzzle",
    "GenerationStatus",
    "Template",
    "generate_puzzle",
]
