"""Proof-of-stake validator selection and block chaining."""

from stakechain_core.chain import Ledger
from stakechain_core.config import LedgerConfig
from stakechain_core.crypto import ValidatorKey
from stakechain_core.errors import (
    ChainIntegrityError,
    InsufficientStake,
    InvalidAmount,
    InvalidSignature,
    LedgerError,
    ValidatorAlreadyRegistered,
    ValidatorNotQualified,
    ValidatorNotRegistered,
)

__version__ = "0.1.0"

__all__ = [
    "ChainIntegrityError",
    "InsufficientStake",
    "InvalidAmount",
    "InvalidSignature",
    "Ledger",
    "LedgerConfig",
    "LedgerError",
    "ValidatorAlreadyRegistered",
    "ValidatorKey",
    "ValidatorNotQualified",
    "ValidatorNotRegistered",
]
