"""Block — the unit appended to the chain by an elected validator."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from stakechain_core.crypto.hashing import DIGEST_SIZE, block_payload
from stakechain_core.crypto.identity import PUBLIC_KEY_SIZE
from stakechain_core.crypto.provider import CryptoProvider, default_provider
from stakechain_core.models.transaction import Transaction


def compute_block_hash(
    previous_hash: bytes,
    transactions: Iterable[Transaction],
    provider: CryptoProvider | None = None,
) -> bytes:
    """digest(previous_hash ‖ digest(tx1) ‖ digest(tx2) ‖ ...).

    Transaction order matters; it is the pool insertion order.
    """
    provider = provider or default_provider()
    tx_digests = [tx.compute_digest(provider) for tx in transactions]
    return provider.digest(block_payload(previous_hash, tx_digests))


class Block(BaseModel):
    """A sealed block in the ledger.

    ``current_hash`` chains the block to its predecessor and commits to
    every contained transaction. The producing validator signs it.
    """

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0, description="Position in the chain (0 = genesis)")
    timestamp: int = Field(ge=0, description="Seconds since the Unix epoch at assembly")
    transactions: tuple[Transaction, ...] = Field(
        default=(),
        description="Transactions in pool insertion order",
    )
    previous_hash: bytes = Field(
        min_length=DIGEST_SIZE,
        max_length=DIGEST_SIZE,
        description="Predecessor's current hash, zeros for genesis",
    )
    current_hash: bytes = Field(
        min_length=DIGEST_SIZE,
        max_length=DIGEST_SIZE,
        description="Digest over previous hash and transaction digests",
    )
    validator_signature: bytes = Field(description="Producer's signature over current_hash")
    validator_pubkey: bytes = Field(
        min_length=PUBLIC_KEY_SIZE,
        max_length=PUBLIC_KEY_SIZE,
        description="Producer identity",
    )

    @property
    def is_genesis(self) -> bool:
        return self.index == 0

    def compute_hash(self, provider: CryptoProvider | None = None) -> bytes:
        """Recompute the current hash from this block's contents."""
        return compute_block_hash(self.previous_hash, self.transactions, provider)

    def verify_signature(self, provider: CryptoProvider | None = None) -> bool:
        """Check the producer's signature over the stored current hash."""
        provider = provider or default_provider()
        return provider.verify(self.validator_pubkey, self.current_hash, self.validator_signature)

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "timestamp": self.timestamp,
            "transactions": [tx.to_dict() for tx in self.transactions],
            "previous_hash": self.previous_hash.hex(),
            "current_hash": self.current_hash.hex(),
            "validator_signature": self.validator_signature.hex(),
            "validator_pubkey": self.validator_pubkey.hex(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Block:
        return cls(
            index=data["index"],
            timestamp=data["timestamp"],
            transactions=tuple(Transaction.from_dict(tx) for tx in data.get("transactions", [])),
            previous_hash=bytes.fromhex(data["previous_hash"]),
            current_hash=bytes.fromhex(data["current_hash"]),
            validator_signature=bytes.fromhex(data["validator_signature"]),
            validator_pubkey=bytes.fromhex(data["validator_pubkey"]),
        )
