"""Blockchain infrastructure module."""

from dsc_api.infrastructure.blockchain.client import ChainClient
from dsc_api.infrastructure.blockchain.contracts import ABILoader, get_abi_loader
from dsc_api.infrastructure.blockchain.transaction import (
    TransactionService,
    derive_signer,
)

__all__ = [
    # Client
    "ChainClient",
    # Contracts
    "ABILoader",
    "get_abi_loader",
    # Transactions
    "TransactionService",
    "derive_signer",
]
