"""DSC stablecoin token service."""

import asyncio
from typing import Any

from dsc_api.core.formatting import TransactionResult, format_amount_to_wei
from dsc_api.core.validation import format_address
from dsc_api.services.base import ERC20Service


class TokenService(ERC20Service):
    """Wrapper around the DecentralizedStableCoin ERC20 contract.

    Minting and renouncing ownership are restricted to the contract owner
    on-chain; this service does not check ownership itself.
    """

    label = "DSC"

    async def get_owner(self) -> str:
        return await self.call("owner")

    async def get_token_info(self) -> dict[str, Any]:
        """Token metadata, supply and owner."""
        metadata, owner = await asyncio.gather(
            self.get_token_metadata(),
            self.get_owner(),
        )
        return {**metadata, "owner": owner}

    async def mint_tokens(self, to: str, amount: Any) -> TransactionResult:
        """Mint amount DSC to an address."""
        return await self.transact(
            "minting", "mint", format_address(to), format_amount_to_wei(amount)
        )

    async def burn_tokens(self, amount: Any) -> TransactionResult:
        """Burn amount DSC held by the signer."""
        return await self.transact("burning", "burn", format_amount_to_wei(amount))

    async def renounce_ownership(self) -> TransactionResult:
        """Give up ownership of the token contract."""
        return await self.transact("renouncing ownership", "renounceOwnership")
