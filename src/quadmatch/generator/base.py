"""
Generation Strategy Module - Abstract base for start-board sources.
"""

from abc import ABC, abstractmethod

import numpy as np

from ..rules import RuleConfig
from ..solver import BoardState


class GenerationStrategy(ABC):
    """
    Produces candidate start boards for the generation pipeline.

    The pipeline validates each candidate; a strategy only decides how
    many candidates it may offer and how each one is built.

    Attributes:
        name: Short identifier reported on generated puzzles
    """
    name: str = "base"

    @abstractmethod
    def max_attempts(self, config: RuleConfig) -> int:
        """Number of candidates this strategy may offer."""

    @abstractmethod
    def candidate(self, attempt: int, config: RuleConfig, rng: np.random.Generator) -> BoardState:
        """
        Build the candidate for a 0-based attempt number.

        Args:
            attempt: Attempt index
            config: Rules (dimensions, colour count)
            rng: Seeded random stream shared by the whole generation call
        """
