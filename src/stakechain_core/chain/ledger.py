"""Ledger — the single owner of chain, validator registry and pending pool.

Every public operation runs under one re-entrant lock. Block production
(read tail, read pool, append, drain pool) therefore happens as one
atomic step with respect to concurrent submissions and registrations.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence

from stakechain_core.chain.assembler import ChainAssembler
from stakechain_core.chain.pool import Clock, TransactionPool, system_clock
from stakechain_core.chain.validation import verify_chain
from stakechain_core.config import LedgerConfig
from stakechain_core.consensus.registry import ValidatorRegistry
from stakechain_core.consensus.selection import RandomSource, WeightedSelector
from stakechain_core.crypto.identity import ValidatorKey
from stakechain_core.crypto.provider import CryptoProvider, default_provider
from stakechain_core.models.block import Block
from stakechain_core.models.transaction import Transaction
from stakechain_core.models.validator import Validator

logger = logging.getLogger(__name__)


class Ledger:
    """Proof-of-stake ledger state and its public operations.

    Typical flow:
        ledger = Ledger()
        ledger.register_validator(key, 1000)
        ledger.submit_transaction(key, recipient, 50)
        block = ledger.produce_block(key)
    """

    def __init__(
        self,
        config: LedgerConfig | None = None,
        provider: CryptoProvider | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.config = config or LedgerConfig()
        self._provider = provider or default_provider()
        self._clock = clock or system_clock
        self._lock = threading.RLock()

        self._chain: list[Block] = []
        self.registry = ValidatorRegistry(self.config)
        self.pool = TransactionPool(
            provider=self._provider,
            clock=self._clock,
            verify_signatures=self.config.verify_signatures,
        )
        self._assembler = ChainAssembler(
            self.registry,
            self.pool,
            provider=self._provider,
            clock=self._clock,
        )

    # ── Validators ──────────────────────────────────────────────────

    def register_validator(self, key: ValidatorKey | bytes, initial_stake: int) -> Validator:
        """Register a validator by key material or raw identity.

        Returns a copy; later changes go through ``adjust_contribution``.
        """
        identity = key.public_key if isinstance(key, ValidatorKey) else key
        with self._lock:
            return self.registry.register(identity, initial_stake).model_copy()

    def get_validator(self, identity: bytes) -> Validator | None:
        """Copy of a registered validator, or None."""
        with self._lock:
            validator = self.registry.get(identity)
            return validator.model_copy() if validator is not None else None

    def adjust_contribution(self, identity: bytes, delta: float) -> float | None:
        """Shift a validator's contribution score; unknown identities are ignored."""
        with self._lock:
            return self.registry.adjust_contribution(identity, delta)

    def is_qualified(self, identity: bytes) -> bool:
        with self._lock:
            return self.registry.is_qualified(identity)

    def select_validator(
        self,
        rng: RandomSource | None = None,
        qualified_only: bool = False,
    ) -> Validator | None:
        """Stake-weighted draw over a consistent registry snapshot.

        Args:
            rng: Uniform [0, 1) randomness source. Defaults to OS randomness.
            qualified_only: Draw only among validators allowed to produce.

        Returns:
            A copy of the selected validator, or None when nobody carries
            any weight.
        """
        selector = WeightedSelector(rng, qualified_only=qualified_only)
        with self._lock:
            selected = selector.select(self.registry)
            return selected.model_copy() if selected is not None else None

    # ── Transactions ────────────────────────────────────────────────

    def submit_transaction(
        self,
        sender_key: ValidatorKey,
        recipient: bytes,
        amount: int,
    ) -> Transaction:
        """Sign and queue a transfer."""
        with self._lock:
            return self.pool.submit(sender_key, recipient, amount)

    def add_transaction(self, tx: Transaction) -> None:
        """Queue a transaction signed by another party, verifying it first."""
        with self._lock:
            self.pool.add(tx)

    @property
    def pending_transactions(self) -> tuple[Transaction, ...]:
        with self._lock:
            return self.pool.snapshot()

    # ── Blocks ──────────────────────────────────────────────────────

    def produce_block(self, producer_key: ValidatorKey) -> Block:
        """Assemble the pool into a new block signed by the producer."""
        with self._lock:
            return self._assembler.produce_block(self._chain, producer_key)

    @property
    def chain(self) -> tuple[Block, ...]:
        with self._lock:
            return tuple(self._chain)

    @property
    def height(self) -> int:
        with self._lock:
            return len(self._chain)

    @property
    def last_block(self) -> Block | None:
        with self._lock:
            return self._chain[-1] if self._chain else None

    @property
    def difficulty(self) -> int:
        """Reserved difficulty parameter; no proof-of-work step reads it."""
        return self.config.difficulty

    def verify(self) -> None:
        """Re-verify the whole chain.

        Raises:
            ChainIntegrityError: If any block breaks a link or signature.
        """
        with self._lock:
            verify_chain(self._chain, self._provider)

    @classmethod
    def from_blocks(
        cls,
        blocks: Sequence[Block],
        config: LedgerConfig | None = None,
        provider: CryptoProvider | None = None,
        clock: Clock | None = None,
    ) -> Ledger:
        """Rebuild a ledger around an existing chain after verifying it.

        Validators are not part of the chain and must be registered again.
        """
        ledger = cls(config=config, provider=provider, clock=clock)
        verify_chain(blocks, ledger._provider)
        ledger._chain = list(blocks)
        logger.info("Loaded chain with %d blocks", len(ledger._chain))
        return ledger
