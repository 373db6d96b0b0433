"""Crypto provider interface consumed by the ledger core.

The core never touches signature primitives directly. It asks a
``CryptoProvider`` to sign, verify and digest byte payloads, so an
embedding program can swap in an HSM-backed or test provider.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from stakechain_core.crypto.hashing import sha3_256
from stakechain_core.crypto.identity import ValidatorKey, verify_with_public_key


class CryptoProvider(ABC):
    """Interface for signing, verification and digests."""

    @abstractmethod
    def sign(self, key: ValidatorKey, data: bytes) -> bytes:
        """Sign a byte payload with the given key material.

        Args:
            key: The signer's key material.
            data: Payload to sign (usually a digest).

        Returns:
            The signature bytes.
        """

    @abstractmethod
    def verify(self, public_key: bytes, data: bytes, signature: bytes) -> bool:
        """Check a signature over data against a public key.

        Returns:
            True if the signature is valid. Never raises for bad input.
        """

    @abstractmethod
    def digest(self, data: bytes) -> bytes:
        """Fixed-size digest of data (32 bytes)."""


class Ed25519CryptoProvider(CryptoProvider):
    """Default provider: Ed25519 signatures and SHA3-256 digests."""

    def sign(self, key: ValidatorKey, data: bytes) -> bytes:
        return key.sign(data)

    def verify(self, public_key: bytes, data: bytes, signature: bytes) -> bool:
        return verify_with_public_key(public_key, signature, data)

    def digest(self, data: bytes) -> bytes:
        return sha3_256(data)


_default_provider = Ed25519CryptoProvider()


def default_provider() -> CryptoProvider:
    """The shared stateless default provider."""
    return _default_provider
