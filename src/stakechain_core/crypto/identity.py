"""Validator key material — Ed25519 key pairs and their identities."""

from __future__ import annotations

from pathlib import Path

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

PUBLIC_KEY_SIZE = 32


def public_key_bytes(public_key: Ed25519PublicKey) -> bytes:
    """Raw 32-byte encoding of an Ed25519 public key."""
    return public_key.public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )


class ValidatorKey:
    """Holds an Ed25519 key pair for a ledger participant.

    The participant's identity is the raw 32-byte public key. The same
    type is used for validators and for transaction senders.
    """

    def __init__(self, private_key: Ed25519PrivateKey) -> None:
        self._private_key = private_key
        self._public_key = private_key.public_key()
        self._identity = public_key_bytes(self._public_key)

    @classmethod
    def generate(cls) -> ValidatorKey:
        """Generate a new random key pair."""
        return cls(Ed25519PrivateKey.generate())

    @classmethod
    def from_private_bytes(cls, data: bytes) -> ValidatorKey:
        """Build a key pair from a raw 32-byte private seed."""
        return cls(Ed25519PrivateKey.from_private_bytes(data))

    @classmethod
    def from_file(cls, path: str | Path) -> ValidatorKey:
        """Load a key pair from a PEM private key file."""
        path = Path(path)
        private_key = serialization.load_pem_private_key(path.read_bytes(), password=None)
        if not isinstance(private_key, Ed25519PrivateKey):
            msg = "Key file must contain an Ed25519 private key"
            raise TypeError(msg)
        return cls(private_key)

    @classmethod
    def load_or_generate(cls, path: str | Path) -> ValidatorKey:
        """Load the key pair from file if it exists, otherwise generate and save.

        Keeps a validator's identity stable across restarts.
        """
        path = Path(path)
        if path.exists():
            return cls.from_file(path)
        key = cls.generate()
        key.save(path)
        # Owner read/write only
        path.chmod(0o600)
        return key

    def save(self, path: str | Path) -> None:
        """Save the private key to a PEM file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        key_bytes = self._private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )
        path.write_bytes(key_bytes)

    @property
    def public_key(self) -> bytes:
        """The participant's identity (raw public key bytes)."""
        return self._identity

    @property
    def identity_hex(self) -> str:
        return self._identity.hex()

    def sign(self, data: bytes) -> bytes:
        """Sign data with the private key. Returns a 64-byte signature."""
        return self._private_key.sign(data)

    def verify(self, signature: bytes, data: bytes) -> bool:
        """Verify a signature against data using this key's public half."""
        return verify_with_public_key(self._identity, signature, data)

    def __repr__(self) -> str:
        return f"ValidatorKey({self.identity_hex[:16]}...)"


def verify_with_public_key(public_key: bytes, signature: bytes, data: bytes) -> bool:
    """Verify a signature using a raw 32-byte Ed25519 public key."""
    if len(public_key) != PUBLIC_KEY_SIZE:
        return False
    try:
        Ed25519PublicKey.from_public_bytes(public_key).verify(signature, data)
    except (InvalidSignature, ValueError):
        return False
    return True
