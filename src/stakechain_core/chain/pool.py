"""Transaction pool — signed transfers waiting for the next block.

Insertion order is significant: it becomes the transaction order inside
the block. There is no deduplication and no balance model.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator

from stakechain_core.crypto.hashing import transaction_payload
from stakechain_core.crypto.identity import ValidatorKey
from stakechain_core.crypto.provider import CryptoProvider, default_provider
from stakechain_core.errors import InvalidAmount, InvalidSignature
from stakechain_core.models.transaction import Transaction

logger = logging.getLogger(__name__)

# Zero-argument callable returning whole seconds since the Unix epoch.
Clock = Callable[[], int]


def system_clock() -> int:
    return int(time.time())


class TransactionPool:
    """Accumulates pending transactions in submission order."""

    def __init__(
        self,
        provider: CryptoProvider | None = None,
        clock: Clock | None = None,
        verify_signatures: bool = True,
    ) -> None:
        self._provider = provider or default_provider()
        self._clock = clock or system_clock
        self._verify_signatures = verify_signatures
        self._pending: list[Transaction] = []

    def submit(
        self,
        sender_key: ValidatorKey,
        recipient: bytes,
        amount: int,
        clock: Clock | None = None,
    ) -> Transaction:
        """Sign a transfer with the sender's key and queue it.

        Args:
            sender_key: The sender's key material.
            recipient: Recipient identity.
            amount: Amount to transfer, must be positive.
            clock: Overrides the pool's clock for this submission.

        Raises:
            InvalidAmount: If amount is not positive.
            InvalidSignature: If the provider produced a signature that does
                not verify (only checked when verification is enabled).
        """
        if amount <= 0:
            msg = f"Invalid transaction amount: {amount}"
            raise InvalidAmount(msg)

        timestamp = (clock or self._clock)()
        digest = self._provider.digest(
            transaction_payload(sender_key.public_key, recipient, amount, timestamp)
        )
        signature = self._provider.sign(sender_key, digest)
        tx = Transaction(
            sender=sender_key.public_key,
            recipient=recipient,
            amount=amount,
            signature=signature,
            timestamp=timestamp,
        )

        if self._verify_signatures and not tx.verify_signature(self._provider):
            msg = f"Signature from {sender_key.identity_hex[:16]}... does not verify"
            raise InvalidSignature(msg)

        self._pending.append(tx)
        logger.debug(
            "Queued transfer of %d from %s to %s (pool size %d)",
            amount, sender_key.identity_hex[:16], recipient.hex()[:16], len(self._pending),
        )
        return tx

    def add(self, tx: Transaction) -> None:
        """Queue a transaction signed elsewhere.

        Raises:
            InvalidSignature: If the signature does not verify against the sender.
        """
        if not tx.verify_signature(self._provider):
            msg = f"Rejected transaction from {tx.sender.hex()[:16]}...: bad signature"
            logger.warning(msg)
            raise InvalidSignature(msg)
        self._pending.append(tx)

    def drain(self) -> tuple[Transaction, ...]:
        """Move every pending transaction out, leaving the pool empty."""
        drained = tuple(self._pending)
        self._pending = []
        return drained

    def snapshot(self) -> tuple[Transaction, ...]:
        """Pending transactions in order, without removing them."""
        return tuple(self._pending)

    def __len__(self) -> int:
        return len(self._pending)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(tuple(self._pending))
