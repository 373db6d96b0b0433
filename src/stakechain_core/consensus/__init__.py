"""Validator registry and stake-weighted selection."""

from stakechain_core.consensus.registry import ValidatorRegistry
from stakechain_core.consensus.selection import (
    RandomSource,
    WeightedSelector,
    draw_weighted,
    select_validator,
    selection_probabilities,
)

__all__ = [
    "RandomSource",
    "ValidatorRegistry",
    "WeightedSelector",
    "draw_weighted",
    "select_validator",
    "selection_probabilities",
]
