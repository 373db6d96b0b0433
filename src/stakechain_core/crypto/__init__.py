"""Cryptographic utilities — digests, signing providers, validator keys."""

from stakechain_core.crypto.hashing import DIGEST_SIZE, ZERO_HASH, sha3_256
from stakechain_core.crypto.identity import ValidatorKey, verify_with_public_key
from stakechain_core.crypto.provider import (
    CryptoProvider,
    Ed25519CryptoProvider,
    default_provider,
)

__all__ = [
    "DIGEST_SIZE",
    "ZERO_HASH",
    "CryptoProvider",
    "Ed25519CryptoProvider",
    "ValidatorKey",
    "default_provider",
    "sha3_256",
    "verify_with_public_key",
]
