"""DSCEngine collateral manager service."""

import asyncio
from typing import Any

from dsc_api.core.formatting import (
    TransactionResult,
    format_amount_from_wei,
    format_amount_to_wei,
)
from dsc_api.core.validation import format_address
from dsc_api.services.base import ContractService


class EngineService(ContractService):
    """Wrapper around the DSCEngine contract.

    Collateral ratios, health factor and liquidation rules are computed by
    the contract; values are only converted from wei here.
    """

    label = "DSCEngine"

    # =========================================================================
    # Read operations
    # =========================================================================

    async def get_account_information(self, user: str) -> dict[str, str]:
        """DSC minted by a user and the USD value of their collateral."""
        total_dsc_minted, collateral_value_in_usd = await self.call(
            "getAccountInformation", format_address(user)
        )
        return {
            "totalDscMinted": format_amount_from_wei(total_dsc_minted),
            "collateralValueInUsd": format_amount_from_wei(collateral_value_in_usd),
        }

    async def get_health_factor(self, user: str) -> str:
        return format_amount_from_wei(
            await self.call("getHealthFactor", format_address(user))
        )

    async def get_account_collateral_value(self, user: str) -> str:
        """Total USD value of all collateral deposited by a user."""
        return format_amount_from_wei(
            await self.call("getAccountCollateralValued", format_address(user))
        )

    async def get_account_overview(self, user: str) -> dict[str, str]:
        """Account information, health factor and collateral value in one call."""
        info, health_factor, collateral_value = await asyncio.gather(
            self.get_account_information(user),
            self.get_health_factor(user),
            self.get_account_collateral_value(user),
        )
        return {
            **info,
            "healthFactor": health_factor,
            "totalCollateralValueInUsd": collateral_value,
        }

    async def get_collateral_balance_of_user(self, user: str, token: str) -> str:
        balance = await self.call(
            "getCollateralBalanceOfUser", format_address(user), format_address(token)
        )
        return format_amount_from_wei(balance)

    async def get_collateral_tokens(self) -> list[str]:
        """Addresses of the tokens accepted as collateral."""
        return list(await self.call("getCollateralTokens"))

    async def get_collateral_token_price_feed(self, token: str) -> str:
        """Address of the price feed used for a collateral token."""
        return await self.call("getCollateralTokenPriceFeed", format_address(token))

    async def get_token_amount_from_usd(self, token: str, usd_amount: Any) -> str:
        """Amount of a collateral token worth usd_amount dollars."""
        amount = await self.call(
            "getTokenAmountFromUsd",
            format_address(token),
            format_amount_to_wei(usd_amount),
        )
        return format_amount_from_wei(amount)

    async def get_usd_value(self, token: str, amount: Any) -> str:
        """USD value of amount units of a collateral token."""
        usd_value = await self.call(
            "getUsdValue", format_address(token), format_amount_to_wei(amount)
        )
        return format_amount_from_wei(usd_value)

    # =========================================================================
    # Write operations
    # =========================================================================

    async def deposit_collateral(
        self, token_collateral_address: str, amount_collateral: Any
    ) -> TransactionResult:
        return await self.transact(
            "depositing collateral",
            "depositCollateral",
            format_address(token_collateral_address),
            format_amount_to_wei(amount_collateral),
        )

    async def mint_dsc(self, amount_dsc_to_mint: Any) -> TransactionResult:
        return await self.transact(
            "minting DSC", "mintDSC", format_amount_to_wei(amount_dsc_to_mint)
        )

    async def deposit_collateral_and_mint_dsc(
        self,
        token_collateral_address: str,
        amount_collateral: Any,
        amount_dsc_to_mint: Any,
    ) -> TransactionResult:
        return await self.transact(
            "deposit and mint",
            "depositCollateralAndMintDSC",
            format_address(token_collateral_address),
            format_amount_to_wei(amount_collateral),
            format_amount_to_wei(amount_dsc_to_mint),
        )

    async def redeem_collateral(
        self, token_collateral_address: str, amount_collateral: Any
    ) -> TransactionResult:
        return await self.transact(
            "redeeming collateral",
            "redeemCollateral",
            format_address(token_collateral_address),
            format_amount_to_wei(amount_collateral),
        )

    async def burn_dsc(self, amount: Any) -> TransactionResult:
        return await self.transact("burning DSC", "burnDSC", format_amount_to_wei(amount))

    async def redeem_collateral_for_dsc(
        self,
        token_collateral_address: str,
        amount_collateral: Any,
        amount_dsc_to_burn: Any,
    ) -> TransactionResult:
        return await self.transact(
            "redeem and burn",
            "redeemCollateralForDSC",
            format_address(token_collateral_address),
            format_amount_to_wei(amount_collateral),
            format_amount_to_wei(amount_dsc_to_burn),
        )

    async def liquidate(
        self, collateral: str, user: str, debt_to_cover: Any
    ) -> TransactionResult:
        """Cover part of an undercollateralized user's debt for their collateral."""
        return await self.transact(
            "liquidation",
            "liquidate",
            format_address(collateral),
            format_address(user),
            format_amount_to_wei(debt_to_cover),
        )
