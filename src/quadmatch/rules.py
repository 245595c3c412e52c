"""
Rules Module - Immutable rule configuration shared by every operation.
"""

import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Dict

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleConfig:
    """
    Rule and budget configuration for a level.

    Supplied by the content layer and passed by value. No operation
    mutates it; use with_overrides() to derive a variant.

    Attributes:
        width: Board columns
        height: Board rows
        color_count: Colours used by refill and generation (ids 0..n-1)
        lock_on_match: Lock the cells of every matched square
        clear_locked_squares: Remove matched squares whose cells are locked
        enable_gravity: Compact columns downward after a clear
        refill_from_top: Fill emptied top cells from the seeded stream
        squares_goal: Squares needed to win the level
        move_ceiling: Maximum swaps searched or allowed
        min_solution_depth: Shortest solutions below this are trivial
        min_initial_moves: Fewer solution openings flag a forced puzzle
        generation_attempts: Procedural candidates tried before fallback
        state_budget: Search states dequeued before giving up
        template_retries: Template randomisations tried before procedural
        count_cascade_squares: Chain-reaction squares advance the goal
        max_cascade_depth: Hard cap on resolver passes
        match_heights: Squares also require equal stack heights
    """
    width: int = 5
    height: int = 5
    color_count: int = 4
    lock_on_match: bool = True
    clear_locked_squares: bool = True
    enable_gravity: bool = True
    refill_from_top: bool = True
    squares_goal: int = 1
    move_ceiling: int = 5
    min_solution_depth: int = 2
    min_initial_moves: int = 1
    generation_attempts: int = 50
    state_budget: int = 20000
    template_retries: int = 5
    count_cascade_squares: bool = True
    max_cascade_depth: int = 50
    match_heights: bool = True

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Board must be at least 1x1, got {self.width}x{self.height}")
        if self.color_count < 1:
            raise ValueError(f"color_count must be positive, got {self.color_count}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RuleConfig':
        """
        Build a config from a plain mapping (e.g. a settings file section).

        Unknown keys are ignored with a warning so that content files can
        carry metadata the engine does not understand.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown rule keys: {', '.join(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known})

    def with_overrides(self, **changes: Any) -> 'RuleConfig':
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
