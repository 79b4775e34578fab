"""Multi-transaction collateral workflows for wrapped assets.

A workflow submits several dependent transactions from one signer. Each
transaction is confirmed before the next is sent. When a step fails the
earlier steps remain on-chain and the failure is reported with the list of
completed steps.
"""

import asyncio
import logging
from decimal import Decimal
from typing import Any, Awaitable, Callable

from dsc_api.core.exceptions import (
    InsufficientBalanceError,
    InvalidPrivateKeyError,
    WorkflowStepError,
)
from dsc_api.core.formatting import TransactionResult
from dsc_api.core.validation import validate_private_key
from dsc_api.infrastructure.blockchain import derive_signer
from dsc_api.services.engine import EngineService
from dsc_api.services.token import TokenService
from dsc_api.services.wrapped import WrappedAssetService

logger = logging.getLogger(__name__)

WorkflowStep = tuple[str, str, Callable[[], Awaitable[TransactionResult]]]


def _difference(before: str, after: str) -> str:
    return f"{Decimal(before) - Decimal(after):.6f}"


class CollateralWorkflowService:
    """Wrap, approve and deposit a wrapped asset as DSCEngine collateral."""

    def __init__(
        self,
        asset: WrappedAssetService,
        engine: EngineService,
        token: TokenService,
    ):
        self.asset = asset
        self.engine = engine
        self.token = token

    @property
    def symbol(self) -> str:
        return self.asset.asset_symbol

    @property
    def user_address(self) -> str:
        return self.asset.require_signer("collateral workflow").address

    def connect(self, private_key: str) -> "CollateralWorkflowService":
        """Return a workflow whose services all sign with the given key."""
        if not validate_private_key(private_key):
            raise InvalidPrivateKeyError("Invalid private key format")
        signer = derive_signer(private_key)
        return CollateralWorkflowService(
            asset=self.asset.connect_account(signer),
            engine=self.engine.connect_account(signer),
            token=self.token.connect_account(signer),
        )

    def _ensure_balance(self, available: str, required: Any, unit: str) -> None:
        if Decimal(available) < Decimal(str(required)):
            raise InsufficientBalanceError(
                f"Insufficient {unit} balance. Available: {available} {unit}, "
                f"Required: {required} {unit}"
            )

    async def _run_steps(self, steps: list[WorkflowStep]) -> dict[str, dict[str, Any]]:
        """Run steps in order, stopping at the first failure."""
        completed: dict[str, dict[str, Any]] = {}
        for name, description, action in steps:
            logger.info(f"{self.symbol} workflow: {description}")
            try:
                result = await action()
            except Exception as e:
                logger.error(
                    f"{self.symbol} workflow step {name} failed after "
                    f"{len(completed)} completed steps: {e}"
                )
                raise WorkflowStepError(
                    name,
                    e,
                    [{"step": step, **info} for step, info in completed.items()],
                ) from e
            completed[name] = {
                "description": description,
                "transactionHash": result.transaction_hash,
                "gasUsed": result.gas_used,
            }
        return completed

    async def wrap(self, amount: Any) -> dict[str, Any]:
        """Wrap native coin after checking the signer can cover it."""
        user = self.user_address
        native_balance = await self.asset.get_native_balance(user)
        self._ensure_balance(native_balance, amount, self.symbol)

        result = await self.asset.deposit(amount)

        new_native, new_wrapped = await asyncio.gather(
            self.asset.get_native_balance(user),
            self.asset.get_balance(user),
        )
        return {
            f"{self.symbol.lower()}AmountWrapped": amount,
            **result.summary(),
            "userAddress": user,
            "balances": {
                f"new{self.symbol}Balance": new_native,
                f"newW{self.symbol}Balance": new_wrapped,
            },
        }

    async def unwrap(self, amount: Any) -> dict[str, Any]:
        """Unwrap tokens after checking the signer holds enough of them."""
        user = self.user_address
        wrapped_balance = await self.asset.get_balance(user)
        self._ensure_balance(wrapped_balance, amount, self.asset.label)

        result = await self.asset.withdraw(amount)

        new_native, new_wrapped = await asyncio.gather(
            self.asset.get_native_balance(user),
            self.asset.get_balance(user),
        )
        return {
            f"w{self.symbol.lower()}AmountUnwrapped": amount,
            **result.summary(),
            "userAddress": user,
            "balances": {
                f"new{self.symbol}Balance": new_native,
                f"newW{self.symbol}Balance": new_wrapped,
            },
        }

    async def deposit_as_collateral(self, amount: Any) -> dict[str, Any]:
        """Wrap, approve the engine, then deposit the wrapped tokens as collateral."""
        user = self.user_address
        sym = self.symbol
        native_before, wrapped_before = await asyncio.gather(
            self.asset.get_native_balance(user),
            self.asset.get_balance(user),
        )
        self._ensure_balance(native_before, amount, sym)

        steps = await self._run_steps([
            ("step1_wrap", f"Wrapped {sym} to w{sym}", lambda: self.asset.deposit(amount)),
            (
                "step2_approve",
                f"Approved DSC Engine to spend w{sym}",
                lambda: self.asset.approve(self.engine.address, amount),
            ),
            (
                "step3_deposit",
                f"Deposited w{sym} as collateral",
                lambda: self.engine.deposit_collateral(self.asset.address, amount),
            ),
        ])

        native_after, wrapped_after, account, collateral = await asyncio.gather(
            self.asset.get_native_balance(user),
            self.asset.get_balance(user),
            self.engine.get_account_information(user),
            self.engine.get_collateral_balance_of_user(user, self.asset.address),
        )
        return {
            "workflow": f"{sym} → w{sym} → Collateral Deposit",
            f"{sym.lower()}AmountProcessed": amount,
            "userAddress": user,
            "steps": steps,
            "balances": {
                "before": {sym.lower(): native_before, f"w{sym.lower()}": wrapped_before},
                "after": {sym.lower(): native_after, f"w{sym.lower()}": wrapped_after},
            },
            "dscAccount": {
                **account,
                f"w{sym.lower()}CollateralDeposited": collateral,
            },
            "contracts": {
                f"w{sym.lower()}Address": self.asset.address,
                "dscEngineAddress": self.engine.address,
            },
        }

    async def deposit_and_mint(self, amount: Any, dsc_to_mint: Any) -> dict[str, Any]:
        """Wrap, approve the engine, then deposit collateral and mint DSC in one call."""
        user = self.user_address
        sym = self.symbol
        native_before, wrapped_before, dsc_before = await asyncio.gather(
            self.asset.get_native_balance(user),
            self.asset.get_balance(user),
            self.token.get_balance(user),
        )
        self._ensure_balance(native_before, amount, sym)

        steps = await self._run_steps([
            ("step1_wrap", f"Wrapped {sym} to w{sym}", lambda: self.asset.deposit(amount)),
            (
                "step2_approve",
                f"Approved DSC Engine to spend w{sym}",
                lambda: self.asset.approve(self.engine.address, amount),
            ),
            (
                "step3_depositAndMint",
                f"Deposited w{sym} as collateral and minted DSC",
                lambda: self.engine.deposit_collateral_and_mint_dsc(
                    self.asset.address, amount, dsc_to_mint
                ),
            ),
        ])

        (
            native_after,
            wrapped_after,
            dsc_after,
            account,
            collateral,
            health_factor,
        ) = await asyncio.gather(
            self.asset.get_native_balance(user),
            self.asset.get_balance(user),
            self.token.get_balance(user),
            self.engine.get_account_information(user),
            self.engine.get_collateral_balance_of_user(user, self.asset.address),
            self.engine.get_health_factor(user),
        )
        return {
            "workflow": f"{sym} → w{sym} → Collateral Deposit → DSC Mint",
            f"{sym.lower()}AmountProcessed": amount,
            "dscMinted": dsc_to_mint,
            "userAddress": user,
            "steps": steps,
            "balances": {
                "before": {
                    sym.lower(): native_before,
                    f"w{sym.lower()}": wrapped_before,
                    "dsc": dsc_before,
                },
                "after": {
                    sym.lower(): native_after,
                    f"w{sym.lower()}": wrapped_after,
                    "dsc": dsc_after,
                },
                "changes": {
                    f"{sym.lower()}Used": _difference(native_before, native_after),
                    f"w{sym.lower()}Collateral": collateral,
                    "dscReceived": _difference(dsc_after, dsc_before),
                },
            },
            "dscAccount": {
                **account,
                "healthFactor": health_factor,
                f"w{sym.lower()}CollateralDeposited": collateral,
            },
            "contracts": {
                f"w{sym.lower()}Address": self.asset.address,
                "dscEngineAddress": self.engine.address,
                "dscTokenAddress": self.token.address,
            },
        }
