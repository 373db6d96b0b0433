"""Canonical byte layouts and digests for transactions and blocks."""

from __future__ import annotations

import hashlib
import struct
from collections.abc import Iterable

DIGEST_SIZE = 32

# Previous-hash value carried by the genesis block.
ZERO_HASH = bytes(DIGEST_SIZE)

_U64 = struct.Struct(">Q")


def sha3_256(data: bytes) -> bytes:
    """Compute the SHA3-256 digest of data."""
    return hashlib.sha3_256(data).digest()


def encode_u64(value: int) -> bytes:
    """Encode an unsigned integer as 8 big-endian bytes.

    Raises:
        ValueError: If the value does not fit in 64 unsigned bits.
    """
    if not 0 <= value < 1 << 64:
        msg = f"Value {value} does not fit in an unsigned 64-bit field"
        raise ValueError(msg)
    return _U64.pack(value)


def transaction_payload(
    sender: bytes,
    recipient: bytes,
    amount: int,
    timestamp: int,
) -> bytes:
    """Canonical byte layout of a transfer: sender ‖ recipient ‖ amount ‖ timestamp."""
    return sender + recipient + encode_u64(amount) + encode_u64(timestamp)


def block_payload(previous_hash: bytes, tx_digests: Iterable[bytes]) -> bytes:
    """Canonical byte layout hashed into a block's current hash.

    Args:
        previous_hash: The predecessor's current hash (ZERO_HASH for genesis).
        tx_digests: Canonical transaction digests in block order.
    """
    if len(previous_hash) != DIGEST_SIZE:
        msg = f"previous_hash must be {DIGEST_SIZE} bytes, got {len(previous_hash)}"
        raise ValueError(msg)
    return previous_hash + b"".join(tx_digests)
