"""Data models — validators, transactions, blocks."""

from stakechain_core.models.block import Block, compute_block_hash
from stakechain_core.models.transaction import Transaction
from stakechain_core.models.validator import Validator

__all__ = [
    "Block",
    "Transaction",
    "Validator",
    "compute_block_hash",
]
