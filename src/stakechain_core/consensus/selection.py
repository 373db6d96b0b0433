"""Stake-weighted validator selection.

weight(v) = stake(v) × contribution_score(v)

A validator's chance of being drawn equals its share of the total weight.
Validators are walked in canonical identity order so that the outcome
depends only on the random draw, never on dict layout or the summation
order of the weights.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence

import numpy as np

from stakechain_core.consensus.registry import ValidatorRegistry
from stakechain_core.models.validator import Validator

logger = logging.getLogger(__name__)

# Zero-argument callable returning a uniform float in [0, 1).
RandomSource = Callable[[], float]


def system_random_source() -> RandomSource:
    """OS-backed randomness, the default for production selection."""
    return random.SystemRandom().random


def _cumulative_weights(validators: Sequence[Validator]) -> np.ndarray:
    weights = np.fromiter((v.weight for v in validators), dtype=np.float64, count=len(validators))
    return np.cumsum(weights)


def draw_weighted(validators: Sequence[Validator], rng: RandomSource) -> Validator | None:
    """Pick one validator from an already-ordered sequence.

    Draws ``u * total`` and returns the first validator whose cumulative
    weight reaches or exceeds it. Zero-weight validators are dropped
    first so they can never absorb a draw of exactly zero.

    Returns:
        The selected validator, or None if the sequence is empty or the
        total weight is zero.
    """
    candidates = [v for v in validators if v.weight > 0]
    if not candidates:
        return None

    cumulative = _cumulative_weights(candidates)
    total = float(cumulative[-1])
    if total <= 0.0:
        return None

    u = rng()
    if not 0.0 <= u < 1.0:
        msg = f"Random source returned {u!r}, expected a value in [0, 1)"
        raise ValueError(msg)

    point = u * total
    idx = int(np.searchsorted(cumulative, point, side="left"))
    # u * total may round up to total itself
    idx = min(idx, len(candidates) - 1)

    selected = candidates[idx]
    logger.debug(
        "Selected validator %s (draw %.6g of %.6g)",
        selected.identity_hex[:16], point, total,
    )
    return selected


def select_validator(
    registry: ValidatorRegistry,
    rng: RandomSource | None = None,
) -> Validator | None:
    """Pick a validator with probability proportional to its weight.

    Args:
        registry: Source of validators.
        rng: Uniform [0, 1) randomness source. Defaults to OS randomness.

    Returns:
        The selected validator, or None when nobody carries any weight.
    """
    rng = rng or system_random_source()
    return draw_weighted(registry.sorted_validators(), rng)


def selection_probabilities(
    registry: ValidatorRegistry,
    qualified_only: bool = False,
) -> dict[bytes, float]:
    """Each validator's expected share of selections.

    Returns:
        Dict mapping identity → weight / total weight. Empty if the total
        weight is zero.
    """
    validators = (
        registry.qualified_validators() if qualified_only else registry.sorted_validators()
    )
    if not validators:
        return {}

    weights = np.array([v.weight for v in validators], dtype=np.float64)
    total = weights.sum()
    if total <= 0.0:
        return {}

    shares = weights / total
    return {v.public_key: float(s) for v, s in zip(validators, shares)}


class WeightedSelector:
    """Selector bound to one randomness source.

    Holds the rng so a ledger (or a test) can inject a seeded source once
    and draw repeatedly.
    """

    def __init__(
        self,
        rng: RandomSource | None = None,
        qualified_only: bool = False,
    ) -> None:
        self._rng = rng or system_random_source()
        self.qualified_only = qualified_only

    @classmethod
    def seeded(cls, seed: int, qualified_only: bool = False) -> WeightedSelector:
        """Deterministic selector for simulations and tests."""
        return cls(random.Random(seed).random, qualified_only=qualified_only)

    def select(self, registry: ValidatorRegistry) -> Validator | None:
        if self.qualified_only:
            return draw_weighted(registry.qualified_validators(), self._rng)
        return draw_weighted(registry.sorted_validators(), self._rng)
