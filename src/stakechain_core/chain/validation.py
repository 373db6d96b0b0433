"""Chain verification — recheck hash links and signatures from scratch.

Used when a chain is loaded from storage or received from elsewhere;
blocks produced locally satisfy these rules by construction.
"""

from __future__ import annotations

from collections.abc import Sequence

from stakechain_core.crypto.hashing import ZERO_HASH
from stakechain_core.crypto.provider import CryptoProvider, default_provider
from stakechain_core.errors import ChainIntegrityError
from stakechain_core.models.block import Block


def verify_block(
    block: Block,
    previous: Block | None,
    provider: CryptoProvider | None = None,
) -> None:
    """Check one block against its predecessor.

    Raises:
        ChainIntegrityError: On the first rule the block breaks.
    """
    provider = provider or default_provider()

    if previous is None:
        if block.index != 0:
            msg = f"First block has index {block.index}, expected 0"
            raise ChainIntegrityError(msg, block.index)
        if block.previous_hash != ZERO_HASH:
            msg = "Genesis block must link to the zero hash"
            raise ChainIntegrityError(msg, block.index)
    else:
        if block.index != previous.index + 1:
            msg = f"Block index {block.index} does not follow {previous.index}"
            raise ChainIntegrityError(msg, block.index)
        if block.previous_hash != previous.current_hash:
            msg = f"Block {block.index} does not link to block {previous.index}"
            raise ChainIntegrityError(msg, block.index)

    for position, tx in enumerate(block.transactions):
        if not tx.verify_signature(provider):
            msg = f"Transaction {position} in block {block.index} has an invalid signature"
            raise ChainIntegrityError(msg, block.index)

    if block.compute_hash(provider) != block.current_hash:
        msg = f"Block {block.index} hash does not match its contents"
        raise ChainIntegrityError(msg, block.index)

    if not block.verify_signature(provider):
        msg = f"Block {block.index} producer signature is invalid"
        raise ChainIntegrityError(msg, block.index)


def verify_chain(blocks: Sequence[Block], provider: CryptoProvider | None = None) -> None:
    """Check every block in order.

    Raises:
        ChainIntegrityError: At the first offending block.
    """
    previous: Block | None = None
    for block in blocks:
        verify_block(block, previous, provider)
        previous = block


def is_valid_chain(blocks: Sequence[Block], provider: CryptoProvider | None = None) -> bool:
    try:
        verify_chain(blocks, provider)
    except ChainIntegrityError:
        return False
    return True
