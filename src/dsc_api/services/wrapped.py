"""Wrapped native asset (wETH / wBTC) services."""

from typing import Any

from dsc_api.core.formatting import (
    TransactionResult,
    format_amount_from_wei,
    format_amount_to_wei,
)
from dsc_api.core.validation import format_address
from dsc_api.infrastructure.blockchain import ChainClient, TransactionService
from dsc_api.services.base import ERC20Service


class WrappedAssetService(ERC20Service):
    """Wrapper around a WETH9-style token.

    ``deposit`` wraps the chain's native coin 1:1 and ``withdraw`` unwraps it.
    """

    def __init__(
        self,
        client: ChainClient,
        address: str,
        abi: list[dict[str, Any]],
        asset_symbol: str,
        transactions: TransactionService | None = None,
    ):
        """Initialize wrapped asset service.

        Args:
            client: Blockchain client
            address: Wrapped token address
            abi: Wrapped token ABI
            asset_symbol: Symbol of the wrapped asset (e.g. "ETH", "BTC")
            transactions: Transaction sender
        """
        self.asset_symbol = asset_symbol
        self.label = f"w{asset_symbol}"
        super().__init__(client, address, abi, transactions)

    async def get_native_balance(self, address: str) -> str:
        """Native coin balance of an address in units."""
        return format_amount_from_wei(await self.client.get_balance(format_address(address)))

    async def get_token_info(self) -> dict[str, Any]:
        return await self.get_token_metadata()

    async def deposit(self, amount: Any) -> TransactionResult:
        """Wrap amount of the native coin."""
        return await self.transact(
            f"depositing {self.asset_symbol}",
            "deposit",
            value=format_amount_to_wei(amount),
        )

    async def withdraw(self, amount: Any) -> TransactionResult:
        """Unwrap amount tokens back to the native coin."""
        return await self.transact(
            f"withdrawing {self.asset_symbol}", "withdraw", format_amount_to_wei(amount)
        )

    async def deposit_and_approve(
        self, amount: Any, spender: str, approve_amount: Any = None
    ) -> dict[str, Any]:
        """Wrap amount, then approve spender for approve_amount (defaults to amount).

        The approval is only submitted after the deposit is confirmed.
        """
        self.require_signer("deposit and approve")
        amount_to_approve = approve_amount if approve_amount is not None else amount

        deposit_result = await self.deposit(amount)
        approve_result = await self.approve(spender, amount_to_approve)

        return {
            "deposit": deposit_result.to_dict(),
            "approve": approve_result.to_dict(),
            f"total{self.asset_symbol}Deposited": str(amount),
            f"totalW{self.asset_symbol}Approved": str(amount_to_approve),
            "spender": format_address(spender),
        }
