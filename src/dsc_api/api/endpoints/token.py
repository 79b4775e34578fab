"""DSC token API endpoints."""

from typing import Any

from fastapi import APIRouter, Query

from dsc_api.api.checks import check_signed_request
from dsc_api.api.deps import RequestBody, TokenServiceDep
from dsc_api.core.responses import bad_request, create_api_response, error_response
from dsc_api.core.validation import format_address, validate_address

router = APIRouter(prefix="/token", tags=["Token"])

AMOUNT_CHECK = {"amount": "Amount must be a positive number"}


@router.get("/info")
async def get_token_info(token: TokenServiceDep) -> Any:
    """Get token name, symbol, decimals, total supply, owner and address."""
    try:
        info = await token.get_token_info()
    except Exception as e:
        return error_response(e, "fetch token information")
    return create_api_response(True, info)


@router.get("/balance")
async def get_balance(
    token: TokenServiceDep,
    address: str | None = Query(None, description="Account address"),
) -> Any:
    """Get DSC balance of an address."""
    if not address:
        return bad_request("Address parameter is required")
    if not validate_address(address):
        return bad_request("Invalid Ethereum address format")

    try:
        formatted_address = format_address(address)
        balance = await token.get_balance(formatted_address)
        symbol = await token.get_token_symbol()
    except Exception as e:
        return error_response(e, "fetch balance")

    return create_api_response(
        True, {"address": formatted_address, "balance": balance, "symbol": symbol}
    )


@router.get("/allowance")
async def get_allowance(
    token: TokenServiceDep,
    owner: str | None = Query(None, description="Token owner address"),
    spender: str | None = Query(None, description="Spender address"),
) -> Any:
    """Get allowance granted by owner to spender."""
    if not owner or not spender:
        return bad_request("Both owner and spender parameters are required")
    if not validate_address(owner) or not validate_address(spender):
        return bad_request("Invalid Ethereum address format")

    try:
        formatted_owner = format_address(owner)
        formatted_spender = format_address(spender)
        allowance = await token.get_allowance(formatted_owner, formatted_spender)
        symbol = await token.get_token_symbol()
    except Exception as e:
        return error_response(e, "fetch allowance")

    return create_api_response(
        True,
        {
            "owner": formatted_owner,
            "spender": formatted_spender,
            "allowance": allowance,
            "symbol": symbol,
        },
    )


@router.post("/mint")
async def mint_tokens(body: RequestBody, token: TokenServiceDep) -> Any:
    """Mint new tokens (contract owner only)."""
    invalid = check_signed_request(
        body,
        ["to", "amount", "privateKey"],
        addresses={"to": "Invalid recipient address format"},
        amounts=AMOUNT_CHECK,
    )
    if invalid:
        return invalid

    try:
        signed = token.connect(body["privateKey"])
        recipient = format_address(body["to"])
        result = await signed.mint_tokens(recipient, body["amount"])
    except Exception as e:
        return error_response(e, "mint tokens")

    return create_api_response(
        True, {"recipient": recipient, "amount": body["amount"], **result.summary()}
    )


@router.post("/burn")
async def burn_tokens(body: RequestBody, token: TokenServiceDep) -> Any:
    """Burn tokens held by the signer."""
    invalid = check_signed_request(body, ["amount", "privateKey"], amounts=AMOUNT_CHECK)
    if invalid:
        return invalid

    try:
        signed = token.connect(body["privateKey"])
        result = await signed.burn_tokens(body["amount"])
    except Exception as e:
        return error_response(e, "burn tokens")

    return create_api_response(True, {"amount": body["amount"], **result.summary()})


@router.post("/transfer")
async def transfer_tokens(body: RequestBody, token: TokenServiceDep) -> Any:
    """Transfer tokens from the signer to another address."""
    invalid = check_signed_request(
        body,
        ["to", "amount", "privateKey"],
        addresses={"to": "Invalid recipient address format"},
        amounts=AMOUNT_CHECK,
    )
    if invalid:
        return invalid

    try:
        signed = token.connect(body["privateKey"])
        recipient = format_address(body["to"])
        result = await signed.transfer(recipient, body["amount"])
    except Exception as e:
        return error_response(e, "transfer tokens")

    return create_api_response(
        True, {"recipient": recipient, "amount": body["amount"], **result.summary()}
    )


@router.post("/approve")
async def approve_tokens(body: RequestBody, token: TokenServiceDep) -> Any:
    """Approve another address to spend the signer's tokens."""
    invalid = check_signed_request(
        body,
        ["spender", "amount", "privateKey"],
        addresses={"spender": "Invalid spender address format"},
        amounts=AMOUNT_CHECK,
    )
    if invalid:
        return invalid

    try:
        signed = token.connect(body["privateKey"])
        spender = format_address(body["spender"])
        result = await signed.approve(spender, body["amount"])
    except Exception as e:
        return error_response(e, "approve tokens")

    return create_api_response(
        True, {"spender": spender, "amount": body["amount"], **result.summary()}
    )


@router.post("/renounce-ownership")
async def renounce_ownership(body: RequestBody, token: TokenServiceDep) -> Any:
    """Renounce ownership of the token contract (owner only, irreversible)."""
    invalid = check_signed_request(body, ["privateKey"])
    if invalid:
        return invalid

    try:
        signed = token.connect(body["privateKey"])
        result = await signed.renounce_ownership()
    except Exception as e:
        return error_response(e, "renounce ownership")

    return create_api_response(
        True, {"previousOwner": signed.signer_address, **result.summary()}
    )
