"""Tests for the validator registry and qualification rules."""

import math

import pytest

from stakechain_core.config import LedgerConfig
from stakechain_core.consensus import ValidatorRegistry
from stakechain_core.errors import InsufficientStake, ValidatorAlreadyRegistered

ALICE = b"\x0a" * 32
BOB = b"\x0b" * 32


class TestRegister:
    def test_register_defaults(self):
        reg = ValidatorRegistry()
        v = reg.register(ALICE, 1000)
        assert v.stake == 1000
        assert v.contribution_score == 1.0
        assert v.last_validated_block is None
        assert ALICE in reg
        assert len(reg) == 1

    def test_register_minimum_stake_accepted(self):
        reg = ValidatorRegistry()
        reg.register(ALICE, 500)
        assert ALICE in reg

    @pytest.mark.parametrize("stake", [0, 1, 499, -10])
    def test_insufficient_stake(self, stake):
        reg = ValidatorRegistry()
        with pytest.raises(InsufficientStake):
            reg.register(ALICE, stake)
        assert ALICE not in reg
        assert len(reg) == 0

    def test_duplicate_registration(self):
        reg = ValidatorRegistry()
        reg.register(ALICE, 1000)
        with pytest.raises(ValidatorAlreadyRegistered):
            reg.register(ALICE, 5000)
        # First registration untouched
        assert reg.get(ALICE).stake == 1000

    def test_duplicate_checked_before_stake(self):
        reg = ValidatorRegistry()
        reg.register(ALICE, 1000)
        with pytest.raises(ValidatorAlreadyRegistered):
            reg.register(ALICE, 10)

    def test_custom_threshold(self):
        reg = ValidatorRegistry(LedgerConfig(min_registration_stake=10))
        reg.register(ALICE, 10)
        assert ALICE in reg


class TestAdjustContribution:
    def test_unknown_identity_is_noop(self):
        reg = ValidatorRegistry()
        assert reg.adjust_contribution(ALICE, 5.0) is None
        assert len(reg) == 0

    def test_adjust(self):
        reg = ValidatorRegistry()
        reg.register(ALICE, 1000)
        assert reg.adjust_contribution(ALICE, 1.5) == 2.5
        assert reg.adjust_contribution(ALICE, -2.0) == 0.5

    @pytest.mark.parametrize("delta", [1e300, -1e300, math.inf, -math.inf, 11.0, -11.0])
    def test_clamped_for_extreme_deltas(self, delta):
        reg = ValidatorRegistry()
        reg.register(ALICE, 1000)
        score = reg.adjust_contribution(ALICE, delta)
        assert 0.0 <= score <= 10.0

    def test_repeated_adjustments_saturate(self):
        reg = ValidatorRegistry()
        reg.register(ALICE, 1000)
        for _ in range(100):
            reg.adjust_contribution(ALICE, 3.0)
        assert reg.get(ALICE).contribution_score == 10.0
        for _ in range(100):
            reg.adjust_contribution(ALICE, -0.7)
        assert reg.get(ALICE).contribution_score == 0.0

    def test_nan_delta_leaves_score(self):
        reg = ValidatorRegistry()
        reg.register(ALICE, 1000)
        assert reg.adjust_contribution(ALICE, math.nan) == 1.0

    def test_other_validators_unaffected(self):
        reg = ValidatorRegistry()
        reg.register(ALICE, 1000)
        reg.register(BOB, 1000)
        reg.adjust_contribution(ALICE, 4.0)
        assert reg.get(BOB).contribution_score == 1.0


class TestQualification:
    def test_unknown_not_qualified(self):
        assert not ValidatorRegistry().is_qualified(ALICE)

    def test_qualified_at_thresholds(self):
        reg = ValidatorRegistry()
        reg.register(ALICE, 1000)
        reg.adjust_contribution(ALICE, -0.5)  # score exactly 0.5
        assert reg.is_qualified(ALICE)

    def test_low_stake_not_qualified(self):
        reg = ValidatorRegistry()
        reg.register(ALICE, 999)
        assert not reg.is_qualified(ALICE)

    def test_low_score_not_qualified(self):
        reg = ValidatorRegistry()
        reg.register(ALICE, 5000)
        reg.adjust_contribution(ALICE, -0.6)
        assert not reg.is_qualified(ALICE)

    def test_configurable_thresholds(self):
        reg = ValidatorRegistry(LedgerConfig(min_qualified_stake=600, min_contribution_score=2.0))
        reg.register(ALICE, 600)
        assert not reg.is_qualified(ALICE)
        reg.adjust_contribution(ALICE, 1.0)
        assert reg.is_qualified(ALICE)

    def test_qualified_validators_sorted(self):
        reg = ValidatorRegistry()
        reg.register(BOB, 1000)
        reg.register(ALICE, 1000)
        reg.register(b"\x01" * 32, 600)
        assert [v.public_key for v in reg.qualified_validators()] == [ALICE, BOB]

    def test_record_block(self):
        reg = ValidatorRegistry()
        reg.register(ALICE, 1000)
        reg.record_block(ALICE, 7)
        assert reg.get(ALICE).last_validated_block == 7
        reg.record_block(BOB, 3)  # unknown, ignored
        assert BOB not in reg


class TestConfig:
    def test_defaults(self):
        config = LedgerConfig()
        assert config.min_registration_stake == 500
        assert config.min_qualified_stake == 1000
        assert config.min_contribution_score == 0.5
        assert config.difficulty == 4

    def test_inverted_bounds_rejected(self):
        with pytest.raises(ValueError):
            LedgerConfig(score_floor=5.0, score_ceiling=1.0)

    def test_negative_floor_rejected(self):
        with pytest.raises(ValueError):
            LedgerConfig(score_floor=-1.0, initial_contribution_score=0.0)

    def test_initial_score_outside_bounds_rejected(self):
        with pytest.raises(ValueError):
            LedgerConfig(initial_contribution_score=20.0)

    def test_clamp_score(self):
        config = LedgerConfig()
        assert config.clamp_score(-3.0) == 0.0
        assert config.clamp_score(42.0) == 10.0
        assert config.clamp_score(3.3) == 3.3
