"""Transactions — signed transfers waiting in the pool or sealed in a block."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from stakechain_core.crypto.hashing import transaction_payload
from stakechain_core.crypto.identity import PUBLIC_KEY_SIZE
from stakechain_core.crypto.provider import CryptoProvider, default_provider


class Transaction(BaseModel):
    """A transfer of ``amount`` from ``sender`` to ``recipient``.

    The signature covers the canonical digest of sender, recipient,
    amount and timestamp. Transactions are immutable once built.
    """

    model_config = ConfigDict(frozen=True)

    sender: bytes = Field(
        min_length=PUBLIC_KEY_SIZE,
        max_length=PUBLIC_KEY_SIZE,
        description="Sender identity (raw public key)",
    )
    recipient: bytes = Field(
        min_length=PUBLIC_KEY_SIZE,
        max_length=PUBLIC_KEY_SIZE,
        description="Recipient identity (raw public key)",
    )
    amount: int = Field(gt=0, lt=1 << 64, description="Transferred amount")
    signature: bytes = Field(description="Sender's signature over the canonical digest")
    timestamp: int = Field(ge=0, lt=1 << 64, description="Seconds since the Unix epoch")

    @property
    def payload(self) -> bytes:
        """Canonical bytes that are digested and signed."""
        return transaction_payload(self.sender, self.recipient, self.amount, self.timestamp)

    def compute_digest(self, provider: CryptoProvider | None = None) -> bytes:
        """Canonical digest, identical to the one signed at submission."""
        provider = provider or default_provider()
        return provider.digest(self.payload)

    def verify_signature(self, provider: CryptoProvider | None = None) -> bool:
        """Check the signature against the sender's identity."""
        provider = provider or default_provider()
        return provider.verify(self.sender, self.compute_digest(provider), self.signature)

    def to_dict(self) -> dict[str, Any]:
        return {
            "sender": self.sender.hex(),
            "recipient": self.recipient.hex(),
            "amount": self.amount,
            "signature": self.signature.hex(),
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Transaction:
        return cls(
            sender=bytes.fromhex(data["sender"]),
            recipient=bytes.fromhex(data["recipient"]),
            amount=data["amount"],
            signature=bytes.fromhex(data["signature"]),
            timestamp=data["timestamp"],
        )
