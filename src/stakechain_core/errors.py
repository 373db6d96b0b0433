"""Exceptions raised by ledger operations.

All operations validate before they mutate, so catching any of these
leaves the ledger exactly as it was before the call.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base class for all recoverable ledger errors."""


class InvalidAmount(LedgerError):
    """Raised when a transfer amount is not strictly positive."""


class ValidatorAlreadyRegistered(LedgerError):
    """Raised when registering an identity that is already known."""


class InsufficientStake(LedgerError):
    """Raised when the initial stake is below the registration minimum."""


class ValidatorNotRegistered(LedgerError):
    """Raised when a block producer is not in the registry."""


class ValidatorNotQualified(LedgerError):
    """Raised when a block producer misses the stake or score threshold."""


class InvalidSignature(LedgerError):
    """Raised when a transaction signature does not verify against its sender."""


class ChainIntegrityError(LedgerError):
    """Raised when a chain fails hash-link or signature verification.

    Attributes:
        index: Index of the first offending block, if known.
    """

    def __init__(self, message: str, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index
