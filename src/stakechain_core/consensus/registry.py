"""Validator registry — stake, reputation and qualification rules.

Validators enter through registration and are never removed. Their
contribution score moves only through ``adjust_contribution`` and is
always clamped into the configured bounds, so selection weights can
never go negative or NaN.
"""

from __future__ import annotations

import logging
import math

from stakechain_core.config import LedgerConfig
from stakechain_core.errors import InsufficientStake, ValidatorAlreadyRegistered
from stakechain_core.models.validator import Validator

logger = logging.getLogger(__name__)


class ValidatorRegistry:
    """Owns the set of known validators, keyed by identity bytes."""

    def __init__(self, config: LedgerConfig | None = None) -> None:
        self.config = config or LedgerConfig()
        self._validators: dict[bytes, Validator] = {}

    def register(self, identity: bytes, initial_stake: int) -> Validator:
        """Add a validator with the default contribution score.

        Raises:
            ValidatorAlreadyRegistered: If the identity is already present.
            InsufficientStake: If the stake is below the registration minimum.
        """
        if identity in self._validators:
            msg = f"Validator {identity.hex()[:16]}... already registered"
            raise ValidatorAlreadyRegistered(msg)

        if initial_stake < self.config.min_registration_stake:
            msg = (
                f"Insufficient stake to become a validator: {initial_stake} "
                f"< {self.config.min_registration_stake}"
            )
            raise InsufficientStake(msg)

        validator = Validator(
            public_key=identity,
            stake=initial_stake,
            contribution_score=self.config.initial_contribution_score,
        )
        self._validators[identity] = validator
        logger.info("Registered validator %s with stake %d", identity.hex()[:16], initial_stake)
        return validator

    def adjust_contribution(self, identity: bytes, delta: float) -> float | None:
        """Shift a validator's contribution score, clamped to the bounds.

        Unknown identities are ignored. Returns the new score, or None if
        the identity is not registered.
        """
        validator = self._validators.get(identity)
        if validator is None:
            return None
        if math.isnan(delta):
            return validator.contribution_score

        validator.contribution_score = self.config.clamp_score(
            validator.contribution_score + delta
        )
        logger.debug(
            "Contribution score of %s adjusted by %+g to %g",
            identity.hex()[:16], delta, validator.contribution_score,
        )
        return validator.contribution_score

    def is_qualified(self, identity: bytes) -> bool:
        """Check stake and score thresholds for block production."""
        validator = self._validators.get(identity)
        if validator is None:
            return False
        return (
            validator.stake >= self.config.min_qualified_stake
            and validator.contribution_score >= self.config.min_contribution_score
        )

    def record_block(self, identity: bytes, index: int) -> None:
        """Remember the last block a validator produced."""
        validator = self._validators.get(identity)
        if validator is not None:
            validator.last_validated_block = index

    def get(self, identity: bytes) -> Validator | None:
        return self._validators.get(identity)

    def sorted_validators(self) -> list[Validator]:
        """Validators in canonical order (identity byte order)."""
        return [self._validators[k] for k in sorted(self._validators)]

    def qualified_validators(self) -> list[Validator]:
        """Qualified validators in canonical order."""
        return [v for v in self.sorted_validators() if self.is_qualified(v.public_key)]

    def __contains__(self, identity: object) -> bool:
        return identity in self._validators

    def __len__(self) -> int:
        return len(self._validators)
