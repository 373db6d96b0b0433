"""Ledger policy configuration.

The defaults reproduce the network's production thresholds. Tests and
embedding programs override them by passing their own ``LedgerConfig``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# ── Policy defaults ─────────────────────────────────────────────────

MIN_REGISTRATION_STAKE = 500
MIN_QUALIFIED_STAKE = 1000
MIN_CONTRIBUTION_SCORE = 0.5

INITIAL_CONTRIBUTION_SCORE = 1.0
CONTRIBUTION_SCORE_FLOOR = 0.0
CONTRIBUTION_SCORE_CEILING = 10.0

# Reserved for a future proof-of-work step; nothing reads it yet.
DEFAULT_DIFFICULTY = 4


@dataclass
class LedgerConfig:
    """Thresholds and bounds used by the registry and the assembler."""

    min_registration_stake: int = MIN_REGISTRATION_STAKE
    min_qualified_stake: int = MIN_QUALIFIED_STAKE
    min_contribution_score: float = MIN_CONTRIBUTION_SCORE
    initial_contribution_score: float = INITIAL_CONTRIBUTION_SCORE
    score_floor: float = CONTRIBUTION_SCORE_FLOOR
    score_ceiling: float = CONTRIBUTION_SCORE_CEILING
    difficulty: int = DEFAULT_DIFFICULTY
    verify_signatures: bool = True  # Check self-signed submissions before pooling

    def __post_init__(self) -> None:
        if self.min_registration_stake < 0 or self.min_qualified_stake < 0:
            msg = "Stake thresholds must be non-negative"
            raise ValueError(msg)
        if not (math.isfinite(self.score_floor) and math.isfinite(self.score_ceiling)):
            msg = "Contribution score bounds must be finite"
            raise ValueError(msg)
        if self.score_floor < 0:
            msg = "Contribution score floor must be non-negative"
            raise ValueError(msg)
        if self.score_floor > self.score_ceiling:
            msg = (
                f"Score floor {self.score_floor} exceeds ceiling {self.score_ceiling}"
            )
            raise ValueError(msg)
        if not self.score_floor <= self.initial_contribution_score <= self.score_ceiling:
            msg = (
                f"Initial contribution score {self.initial_contribution_score} "
                f"outside [{self.score_floor}, {self.score_ceiling}]"
            )
            raise ValueError(msg)

    def clamp_score(self, score: float) -> float:
        """Clamp a contribution score into the configured bounds."""
        return min(self.score_ceiling, max(self.score_floor, score))
