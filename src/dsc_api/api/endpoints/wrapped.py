"""Wrapped asset (wETH / wBTC) API endpoints.

Both assets expose the same routes; ``create_wrapped_router`` builds one
router per asset with the asset's amount field names.
"""

import asyncio
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from dsc_api.api.checks import check_signed_request
from dsc_api.api.deps import RequestBody, Services
from dsc_api.core.exceptions import InsufficientBalanceError
from dsc_api.core.responses import bad_request, create_api_response, error_response
from dsc_api.core.validation import format_address, validate_address
from dsc_api.services import CollateralWorkflowService, WrappedAssetService


def create_wrapped_router(asset: str, symbol: str) -> APIRouter:
    """Build the router for one wrapped asset.

    Args:
        asset: Container key and URL prefix ("weth" or "wbtc")
        symbol: Native asset symbol ("ETH" or "BTC")

    Returns:
        Router mounted at ``/{asset}``
    """
    router = APIRouter(prefix=f"/{asset}", tags=[f"w{symbol}"])
    native_field = f"{symbol.lower()}Amount"
    wrapped_field = f"w{symbol.lower()}Amount"
    wrapped_label = f"w{symbol}"

    def get_asset(services: Services) -> WrappedAssetService:
        return getattr(services, asset)

    def get_workflow(services: Services) -> CollateralWorkflowService:
        return services.workflow(asset)

    AssetDep = Annotated[WrappedAssetService, Depends(get_asset)]
    WorkflowDep = Annotated[CollateralWorkflowService, Depends(get_workflow)]

    native_check = {native_field: f"{symbol} amount must be a positive number"}

    @router.get("/info")
    async def get_info(
        wrapped: AssetDep,
        address: str | None = Query(None, description="Account address"),
    ) -> Any:
        """Get token information, or native and wrapped balances of an address."""
        if address and not validate_address(address):
            return bad_request("Invalid address format")

        try:
            if not address:
                return create_api_response(True, await wrapped.get_token_info())

            formatted_address = format_address(address)
            native, balance, metadata = await asyncio.gather(
                wrapped.get_native_balance(formatted_address),
                wrapped.get_balance(formatted_address),
                wrapped.get_token_metadata(),
            )
        except Exception as e:
            return error_response(e, f"fetch {wrapped_label} information")

        return create_api_response(
            True,
            {
                "userAddress": formatted_address,
                "balances": {symbol.lower(): native, wrapped_label.lower(): balance},
                "token": {
                    "name": metadata["name"],
                    "symbol": metadata["symbol"],
                    "decimals": metadata["decimals"],
                    "contractAddress": metadata["contractAddress"],
                },
            },
        )

    @router.post("/wrap")
    async def wrap(body: RequestBody, workflow: WorkflowDep) -> Any:
        """Wrap the native asset into its token."""
        invalid = check_signed_request(
            body, [native_field, "privateKey"], amounts=native_check
        )
        if invalid:
            return invalid

        try:
            data = await workflow.connect(body["privateKey"]).wrap(body[native_field])
        except InsufficientBalanceError as e:
            return bad_request(str(e))
        except Exception as e:
            return error_response(e, f"wrap {symbol} to {wrapped_label}")

        return create_api_response(True, data)

    @router.post("/unwrap")
    async def unwrap(body: RequestBody, workflow: WorkflowDep) -> Any:
        """Unwrap tokens back into the native asset."""
        invalid = check_signed_request(
            body,
            [wrapped_field, "privateKey"],
            amounts={wrapped_field: f"{wrapped_label} amount must be a positive number"},
        )
        if invalid:
            return invalid

        try:
            data = await workflow.connect(body["privateKey"]).unwrap(body[wrapped_field])
        except InsufficientBalanceError as e:
            return bad_request(str(e))
        except Exception as e:
            return error_response(e, f"unwrap {wrapped_label} to {symbol}")

        return create_api_response(True, data)

    @router.post("/deposit-as-collateral")
    async def deposit_as_collateral(body: RequestBody, workflow: WorkflowDep) -> Any:
        """Wrap, approve and deposit as DSCEngine collateral."""
        invalid = check_signed_request(
            body, [native_field, "privateKey"], amounts=native_check
        )
        if invalid:
            return invalid

        try:
            signed = workflow.connect(body["privateKey"])
            data = await signed.deposit_as_collateral(body[native_field])
        except InsufficientBalanceError as e:
            return bad_request(str(e))
        except Exception as e:
            return error_response(
                e, f"complete {symbol} to {wrapped_label} collateral deposit workflow"
            )

        return create_api_response(True, data)

    @router.post("/deposit-and-mint")
    async def deposit_and_mint(body: RequestBody, workflow: WorkflowDep) -> Any:
        """Wrap, approve, deposit as collateral and mint DSC."""
        invalid = check_signed_request(
            body,
            [native_field, "dscToMint", "privateKey"],
            amounts={
                **native_check,
                "dscToMint": "DSC amount to mint must be a positive number",
            },
        )
        if invalid:
            return invalid

        try:
            signed = workflow.connect(body["privateKey"])
            data = await signed.deposit_and_mint(body[native_field], body["dscToMint"])
        except InsufficientBalanceError as e:
            return bad_request(str(e))
        except Exception as e:
            return error_response(
                e,
                f"complete {symbol} to {wrapped_label} collateral deposit and mint workflow",
            )

        return create_api_response(True, data)

    return router


weth_router = create_wrapped_router("weth", "ETH")
wbtc_router = create_wrapped_router("wbtc", "BTC")
