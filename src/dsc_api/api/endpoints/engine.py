"""DSCEngine API endpoints."""

from typing import Any

from fastapi import APIRouter, Query

from dsc_api.api.checks import check_signed_request
from dsc_api.api.deps import EngineServiceDep, RequestBody
from dsc_api.core.responses import bad_request, create_api_response, error_response
from dsc_api.core.validation import (
    format_address,
    validate_address,
    validate_non_negative_amount,
)

router = APIRouter(prefix="/engine", tags=["Engine"])

COLLATERAL_ADDRESS_CHECK = {
    "tokenCollateralAddress": "Invalid collateral token address format"
}


# =============================================================================
# Read endpoints
# =============================================================================


@router.get("/account")
async def get_account(
    engine: EngineServiceDep,
    user: str | None = Query(None, description="User address"),
) -> Any:
    """Get DSC minted, collateral value and health factor of a user."""
    if not user:
        return bad_request("User address parameter is required")
    if not validate_address(user):
        return bad_request("Invalid Ethereum address format")

    try:
        formatted_user = format_address(user)
        overview = await engine.get_account_overview(formatted_user)
    except Exception as e:
        return error_response(e, "fetch account information")

    return create_api_response(True, {"user": formatted_user, **overview})


@router.get("/collateral")
async def get_collateral(
    engine: EngineServiceDep,
    user: str | None = Query(None, description="User address"),
    token: str | None = Query(None, description="Collateral token address"),
) -> Any:
    """List collateral tokens, or a user's balance of one collateral token."""
    if not user:
        return bad_request("User address parameter is required")
    if not validate_address(user):
        return bad_request("Invalid user address format")
    if token and not validate_address(token):
        return bad_request("Invalid token address format")

    try:
        formatted_user = format_address(user)
        if not token:
            collateral_tokens = await engine.get_collateral_tokens()
            return create_api_response(
                True, {"user": formatted_user, "collateralTokens": collateral_tokens}
            )

        formatted_token = format_address(token)
        balance = await engine.get_collateral_balance_of_user(formatted_user, formatted_token)
        price_feed = await engine.get_collateral_token_price_feed(formatted_token)
    except Exception as e:
        return error_response(e, "fetch collateral information")

    return create_api_response(
        True,
        {
            "user": formatted_user,
            "token": formatted_token,
            "balance": balance,
            "priceFeed": price_feed,
        },
    )


@router.get("/usd-value")
async def get_usd_value(
    engine: EngineServiceDep,
    token: str | None = Query(None, description="Collateral token address"),
    amount: str | None = Query(None, description="Token amount"),
) -> Any:
    """Get the USD value of an amount of collateral token."""
    if not token or amount is None:
        return bad_request("Both token and amount parameters are required")
    if not validate_address(token):
        return bad_request("Invalid token address format")
    if not validate_non_negative_amount(amount):
        return bad_request("Amount must be a non-negative number")

    try:
        formatted_token = format_address(token)
        usd_value = await engine.get_usd_value(formatted_token, amount)
    except Exception as e:
        return error_response(e, "fetch USD value")

    return create_api_response(
        True, {"token": formatted_token, "amount": amount, "usdValue": usd_value}
    )


@router.get("/token-amount")
async def get_token_amount_from_usd(
    engine: EngineServiceDep,
    token: str | None = Query(None, description="Collateral token address"),
    usd_amount: str | None = Query(None, alias="usdAmount", description="USD amount"),
) -> Any:
    """Get the amount of collateral token worth a USD amount."""
    if not token or usd_amount is None:
        return bad_request("Both token and usdAmount parameters are required")
    if not validate_address(token):
        return bad_request("Invalid token address format")
    if not validate_non_negative_amount(usd_amount):
        return bad_request("USD amount must be a non-negative number")

    try:
        formatted_token = format_address(token)
        token_amount = await engine.get_token_amount_from_usd(formatted_token, usd_amount)
    except Exception as e:
        return error_response(e, "fetch token amount")

    return create_api_response(
        True,
        {"token": formatted_token, "usdAmount": usd_amount, "tokenAmount": token_amount},
    )


# =============================================================================
# Write endpoints
# =============================================================================


@router.post("/deposit")
async def deposit_collateral(body: RequestBody, engine: EngineServiceDep) -> Any:
    """Deposit collateral into the engine."""
    invalid = check_signed_request(
        body,
        ["tokenCollateralAddress", "amountCollateral", "privateKey"],
        addresses=COLLATERAL_ADDRESS_CHECK,
        amounts={"amountCollateral": "Amount must be a positive number"},
    )
    if invalid:
        return invalid

    try:
        signed = engine.connect(body["privateKey"])
        token = format_address(body["tokenCollateralAddress"])
        result = await signed.deposit_collateral(token, body["amountCollateral"])
    except Exception as e:
        return error_response(e, "deposit collateral")

    return create_api_response(
        True,
        {
            "tokenCollateralAddress": token,
            "amountCollateral": body["amountCollateral"],
            **result.summary(),
        },
    )


@router.post("/mint")
async def mint_dsc(body: RequestBody, engine: EngineServiceDep) -> Any:
    """Mint DSC against deposited collateral."""
    invalid = check_signed_request(
        body,
        ["amountDscToMint", "privateKey"],
        amounts={"amountDscToMint": "Amount must be a positive number"},
    )
    if invalid:
        return invalid

    try:
        signed = engine.connect(body["privateKey"])
        result = await signed.mint_dsc(body["amountDscToMint"])
    except Exception as e:
        return error_response(e, "mint DSC")

    return create_api_response(
        True, {"amountDscToMint": body["amountDscToMint"], **result.summary()}
    )


@router.post("/deposit-and-mint")
async def deposit_and_mint(body: RequestBody, engine: EngineServiceDep) -> Any:
    """Deposit collateral and mint DSC in one transaction."""
    invalid = check_signed_request(
        body,
        ["tokenCollateralAddress", "amountCollateral", "amountDscToMint", "privateKey"],
        addresses=COLLATERAL_ADDRESS_CHECK,
        amounts={
            "amountCollateral": "Collateral amount must be a positive number",
            "amountDscToMint": "DSC amount must be a positive number",
        },
    )
    if invalid:
        return invalid

    try:
        signed = engine.connect(body["privateKey"])
        token = format_address(body["tokenCollateralAddress"])
        result = await signed.deposit_collateral_and_mint_dsc(
            token, body["amountCollateral"], body["amountDscToMint"]
        )
    except Exception as e:
        return error_response(e, "deposit collateral and mint DSC")

    return create_api_response(
        True,
        {
            "tokenCollateralAddress": token,
            "amountCollateral": body["amountCollateral"],
            "amountDscToMint": body["amountDscToMint"],
            **result.summary(),
        },
    )


@router.post("/redeem")
async def redeem_collateral(body: RequestBody, engine: EngineServiceDep) -> Any:
    """Redeem deposited collateral."""
    invalid = check_signed_request(
        body,
        ["tokenCollateralAddress", "amountCollateral", "privateKey"],
        addresses=COLLATERAL_ADDRESS_CHECK,
        amounts={"amountCollateral": "Amount must be a positive number"},
    )
    if invalid:
        return invalid

    try:
        signed = engine.connect(body["privateKey"])
        token = format_address(body["tokenCollateralAddress"])
        result = await signed.redeem_collateral(token, body["amountCollateral"])
    except Exception as e:
        return error_response(e, "redeem collateral")

    return create_api_response(
        True,
        {
            "tokenCollateralAddress": token,
            "amountCollateral": body["amountCollateral"],
            **result.summary(),
        },
    )


@router.post("/burn")
async def burn_dsc(body: RequestBody, engine: EngineServiceDep) -> Any:
    """Burn DSC to reduce debt."""
    invalid = check_signed_request(
        body,
        ["amount", "privateKey"],
        amounts={"amount": "Amount must be a positive number"},
    )
    if invalid:
        return invalid

    try:
        signed = engine.connect(body["privateKey"])
        result = await signed.burn_dsc(body["amount"])
    except Exception as e:
        return error_response(e, "burn DSC")

    return create_api_response(True, {"amount": body["amount"], **result.summary()})


@router.post("/redeem-and-burn")
async def redeem_and_burn(body: RequestBody, engine: EngineServiceDep) -> Any:
    """Burn DSC and redeem collateral in one transaction."""
    invalid = check_signed_request(
        body,
        ["tokenCollateralAddress", "amountCollateral", "amountDscToBurn", "privateKey"],
        addresses=COLLATERAL_ADDRESS_CHECK,
        amounts={
            "amountCollateral": "Collateral amount must be a positive number",
            "amountDscToBurn": "DSC amount must be a positive number",
        },
    )
    if invalid:
        return invalid

    try:
        signed = engine.connect(body["privateKey"])
        token = format_address(body["tokenCollateralAddress"])
        result = await signed.redeem_collateral_for_dsc(
            token, body["amountCollateral"], body["amountDscToBurn"]
        )
    except Exception as e:
        return error_response(e, "redeem collateral and burn DSC")

    return create_api_response(
        True,
        {
            "tokenCollateralAddress": token,
            "amountCollateral": body["amountCollateral"],
            "amountDscToBurn": body["amountDscToBurn"],
            **result.summary(),
        },
    )


@router.post("/liquidate")
async def liquidate(body: RequestBody, engine: EngineServiceDep) -> Any:
    """Liquidate an undercollateralized position."""
    invalid = check_signed_request(
        body,
        ["collateral", "user", "debtToCover", "privateKey"],
        addresses={
            "collateral": "Invalid collateral token address format",
            "user": "Invalid user address format",
        },
        amounts={"debtToCover": "Debt to cover must be a positive number"},
    )
    if invalid:
        return invalid

    try:
        signed = engine.connect(body["privateKey"])
        collateral = format_address(body["collateral"])
        user = format_address(body["user"])
        result = await signed.liquidate(collateral, user, body["debtToCover"])
    except Exception as e:
        return error_response(e, "liquidate position")

    return create_api_response(
        True,
        {
            "collateral": collateral,
            "user": user,
            "debtToCover": body["debtToCover"],
            **result.summary(),
        },
    )
