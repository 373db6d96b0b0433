"""Chain assembler — seals the pending pool into a signed, hash-linked block.

Assembly steps:
1. Producer must be registered, then qualified.
2. previous_hash = tail's current_hash, or 32 zero bytes on an empty chain.
3. current_hash = digest(previous_hash ‖ digest(tx1) ‖ ... ‖ digest(txN)).
4. Producer signs current_hash.
5. Block is appended and the pool is drained into it.

Nothing is mutated until every check and every computation has
succeeded, so a failed call leaves chain and pool untouched.
"""

from __future__ import annotations

import logging

from stakechain_core.chain.pool import Clock, TransactionPool, system_clock
from stakechain_core.consensus.registry import ValidatorRegistry
from stakechain_core.crypto.hashing import ZERO_HASH
from stakechain_core.crypto.identity import ValidatorKey
from stakechain_core.crypto.provider import CryptoProvider, default_provider
from stakechain_core.errors import ValidatorNotQualified, ValidatorNotRegistered
from stakechain_core.models.block import Block, compute_block_hash

logger = logging.getLogger(__name__)


class ChainAssembler:
    """Builds blocks from a pool and appends them to a chain."""

    def __init__(
        self,
        registry: ValidatorRegistry,
        pool: TransactionPool,
        provider: CryptoProvider | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._registry = registry
        self._pool = pool
        self._provider = provider or default_provider()
        self._clock = clock or system_clock

    def previous_hash(self, chain: list[Block]) -> bytes:
        """Hash the next block must link to."""
        if not chain:
            return ZERO_HASH
        return chain[-1].current_hash

    def check_producer(self, identity: bytes) -> None:
        """Raise unless the identity may produce a block.

        Raises:
            ValidatorNotRegistered: Identity is not in the registry.
            ValidatorNotQualified: Stake or contribution score is too low.
        """
        validator = self._registry.get(identity)
        if validator is None:
            msg = f"Validator {identity.hex()[:16]}... not registered"
            raise ValidatorNotRegistered(msg)
        if not self._registry.is_qualified(identity):
            msg = (
                f"Validator {identity.hex()[:16]}... not qualified "
                f"(stake {validator.stake}, score {validator.contribution_score:g})"
            )
            raise ValidatorNotQualified(msg)

    def produce_block(self, chain: list[Block], producer_key: ValidatorKey) -> Block:
        """Assemble, sign and append the next block.

        Args:
            chain: The chain to extend, modified in place on success.
            producer_key: Key material of the producing validator.

        Returns:
            The appended block.
        """
        identity = producer_key.public_key
        try:
            self.check_producer(identity)
        except (ValidatorNotRegistered, ValidatorNotQualified) as exc:
            logger.warning("Block production refused: %s", exc)
            raise

        previous_hash = self.previous_hash(chain)
        transactions = self._pool.snapshot()
        current_hash = compute_block_hash(previous_hash, transactions, self._provider)
        signature = self._provider.sign(producer_key, current_hash)

        block = Block(
            index=len(chain),
            timestamp=self._clock(),
            transactions=transactions,
            previous_hash=previous_hash,
            current_hash=current_hash,
            validator_signature=signature,
            validator_pubkey=identity,
        )

        # Commit: everything below is infallible
        self._pool.drain()
        chain.append(block)
        self._registry.record_block(identity, block.index)

        logger.info(
            "Produced block %d by %s with %d transactions (hash %s)",
            block.index, producer_key.identity_hex[:16],
            len(block.transactions), current_hash.hex()[:16],
        )
        return block
