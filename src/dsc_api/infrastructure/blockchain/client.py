"""Blockchain client for a single JSON-RPC endpoint."""

import asyncio
import logging
from typing import Any

from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.contract import AsyncContract
from web3.exceptions import ContractLogicError, TransactionNotFound, Web3RPCError
from web3.types import TxParams, Wei

from dsc_api.core.config import get_settings
from dsc_api.core.exceptions import (
    ContractCallError,
    NetworkError,
    TransactionTimeoutError,
)

logger = logging.getLogger(__name__)

TRANSPORT_ERRORS = (ConnectionError, OSError, asyncio.TimeoutError)


class ChainClient:
    """Async client for the node hosting the DSC contracts.

    Calls are made once; there is no failover or retry.
    """

    def __init__(self, rpc_url: str | None = None):
        """Initialize client.

        Args:
            rpc_url: RPC endpoint. If None, uses BLOCKCHAIN_RPC_URL from settings.
        """
        settings = get_settings()
        self.rpc_url = rpc_url or settings.blockchain_rpc_url
        self._web3: AsyncWeb3 | None = None

    @property
    def web3(self) -> AsyncWeb3:
        """Get or create Web3 instance."""
        if self._web3 is None:
            self._web3 = AsyncWeb3(AsyncHTTPProvider(self.rpc_url))
        return self._web3

    def contract(self, address: str, abi: list[dict[str, Any]]) -> AsyncContract:
        """Create a contract handle bound to this client."""
        return self.web3.eth.contract(address=address, abi=abi)

    async def execute(self, awaitable: Any, description: str = "RPC call") -> Any:
        """Await a web3 call and translate its failures.

        Raises:
            ContractCallError: If the node rejects the call or the contract reverts
            NetworkError: If the node cannot be reached
        """
        try:
            return await awaitable
        except ContractLogicError as e:
            raise ContractCallError(f"{description} reverted: {e}") from e
        except Web3RPCError as e:
            raise ContractCallError(f"{description} failed: {e}") from e
        except TRANSPORT_ERRORS as e:
            logger.warning(f"RPC {self.rpc_url} unreachable during {description}: {e}")
            raise NetworkError(f"Blockchain node unreachable: {e}") from e

    async def call_function(self, function_call: Any, description: str = "Contract call") -> Any:
        """Execute a read-only contract function call."""
        return await self.execute(function_call.call(), description)

    async def get_block_number(self) -> int:
        """Get current block number."""
        return await self.execute(self.web3.eth.get_block_number(), "get_block_number")

    async def get_chain_id(self) -> int:
        """Get chain ID of the connected network."""
        return await self.execute(self.web3.eth.chain_id, "chain_id")

    async def get_balance(self, address: str) -> Wei:
        """Get native balance of address."""
        return await self.execute(self.web3.eth.get_balance(address), "get_balance")

    async def get_transaction_count(self, address: str) -> int:
        """Get transaction count (nonce) for address, including pending transactions."""
        return await self.execute(
            self.web3.eth.get_transaction_count(address, "pending"),
            "get_transaction_count",
        )

    async def get_gas_price(self) -> Wei:
        """Get current gas price."""
        return await self.execute(self.web3.eth.gas_price, "gas_price")

    async def build_transaction(self, function_call: Any, params: TxParams) -> TxParams:
        """Fill gas and fee fields of a contract transaction via the node."""
        return await self.execute(
            function_call.build_transaction(params), "Transaction estimation"
        )

    async def send_raw_transaction(self, signed_tx: bytes) -> str:
        """Send signed raw transaction.

        Args:
            signed_tx: Signed transaction bytes

        Returns:
            Transaction hash as 0x-prefixed hex string
        """
        tx_hash = await self.execute(
            self.web3.eth.send_raw_transaction(signed_tx), "send_raw_transaction"
        )
        return self.web3.to_hex(tx_hash)

    async def get_transaction_receipt(self, tx_hash: str) -> dict[str, Any] | None:
        """Get transaction receipt, or None if it is not mined yet."""
        try:
            receipt = await self.web3.eth.get_transaction_receipt(tx_hash)
        except TransactionNotFound:
            return None
        except TRANSPORT_ERRORS as e:
            raise NetworkError(f"Blockchain node unreachable: {e}") from e
        return dict(receipt) if receipt else None

    async def wait_for_transaction_receipt(
        self, tx_hash: str, timeout: float = 120, poll_latency: float = 2.0
    ) -> dict[str, Any]:
        """Wait for transaction receipt with timeout.

        Args:
            tx_hash: Transaction hash
            timeout: Maximum wait time in seconds
            poll_latency: Polling interval in seconds

        Returns:
            Transaction receipt

        Raises:
            TransactionTimeoutError: If transaction not mined within timeout
        """
        elapsed = 0.0
        while elapsed < timeout:
            receipt = await self.get_transaction_receipt(tx_hash)
            if receipt and receipt.get("blockNumber") is not None:
                return receipt
            await asyncio.sleep(poll_latency)
            elapsed += poll_latency

        raise TransactionTimeoutError(f"Transaction {tx_hash} not mined within {timeout}s")

    async def wait_for_confirmations(
        self,
        block_number: int,
        confirmations: int,
        timeout: float = 120,
        poll_latency: float = 2.0,
    ) -> int:
        """Wait until a block has the requested number of confirmations.

        The block containing the transaction counts as the first confirmation.

        Returns:
            Number of confirmations observed
        """
        elapsed = 0.0
        while True:
            current = await self.get_block_number()
            observed = current - block_number + 1
            if observed >= confirmations:
                return observed
            if elapsed >= timeout:
                raise TransactionTimeoutError(
                    f"Block {block_number} did not reach {confirmations} confirmations "
                    f"within {timeout}s"
                )
            await asyncio.sleep(poll_latency)
            elapsed += poll_latency

    async def health_check(self) -> bool:
        """Check if the RPC endpoint answers."""
        try:
            block_number = await self.get_block_number()
            return block_number >= 0
        except Exception:
            return False
