"""
Strategies Package - Concrete strategy implementations.

Import this module to register all built-in strategies.
"""

from .bfs import BreadthFirstStrategy
from .exhaustive import ExhaustiveStrategy

__all__ = [
    "BreadthFirstStrategy",
    "ExhaustiveStrategy",
]
