"""Staked validators and their reputation state."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from stakechain_core.config import INITIAL_CONTRIBUTION_SCORE


class Validator(BaseModel):
    """A registered validator.

    Mutated only through the registry: contribution score adjustments and
    ``last_validated_block`` bookkeeping.
    """

    model_config = ConfigDict(validate_assignment=True)

    public_key: bytes
    stake: int = Field(ge=0, description="Committed stake")
    contribution_score: float = Field(
        default=INITIAL_CONTRIBUTION_SCORE,
        ge=0.0,
        allow_inf_nan=False,
        description="Reputation multiplier, clamped by the registry",
    )
    last_validated_block: int | None = Field(
        default=None,
        description="Index of the last block this validator produced",
    )

    @property
    def weight(self) -> float:
        """Selection weight: stake × contribution score."""
        return self.stake * self.contribution_score

    @property
    def identity_hex(self) -> str:
        return self.public_key.hex()
