"""Chain assembly — pending pool, block assembler, verification and the ledger."""

from stakechain_core.chain.assembler import ChainAssembler
from stakechain_core.chain.ledger import Ledger
from stakechain_core.chain.pool import TransactionPool
from stakechain_core.chain.validation import is_valid_chain, verify_block, verify_chain

__all__ = [
    "ChainAssembler",
    "Ledger",
    "TransactionPool",
    "is_valid_chain",
    "verify_block",
    "verify_chain",
]
