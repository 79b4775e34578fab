"""API status and endpoint catalog."""

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends

from dsc_api import __version__
from dsc_api.api.deps import Services
from dsc_api.core.config import Settings, get_settings

router = APIRouter(tags=["Status"])

ENDPOINTS: dict[str, dict[str, dict[str, str]]] = {
    "token": {
        "read": {
            "GET /token/info": "Get token information (name, symbol, total supply, owner)",
            "GET /token/balance?address=0x...": "Get token balance for an address",
            "GET /token/allowance?owner=0x...&spender=0x...": "Get allowance between addresses",
        },
        "write": {
            "POST /token/mint": "Mint new tokens (owner only)",
            "POST /token/burn": "Burn tokens from signer",
            "POST /token/transfer": "Transfer tokens to another address",
            "POST /token/approve": "Approve another address to spend tokens",
            "POST /token/renounce-ownership": "Renounce token ownership (owner only)",
        },
    },
    "engine": {
        "read": {
            "GET /engine/account?user=0x...": "Get account information (DSC minted, collateral value, health factor)",
            "GET /engine/collateral?user=0x...": "Get all collateral tokens for user",
            "GET /engine/collateral?user=0x...&token=0x...": "Get specific collateral balance and price feed",
            "GET /engine/usd-value?token=0x...&amount=1": "Get USD value of a collateral amount",
            "GET /engine/token-amount?token=0x...&usdAmount=100": "Get collateral amount worth a USD amount",
        },
        "write": {
            "POST /engine/deposit": "Deposit collateral",
            "POST /engine/mint": "Mint DSC tokens",
            "POST /engine/deposit-and-mint": "Deposit collateral and mint DSC in one transaction",
            "POST /engine/redeem": "Redeem collateral",
            "POST /engine/burn": "Burn DSC tokens",
            "POST /engine/redeem-and-burn": "Redeem collateral and burn DSC in one transaction",
            "POST /engine/liquidate": "Liquidate a position",
        },
    },
}


def _wrapped_endpoints(asset: str, symbol: str) -> dict[str, dict[str, str]]:
    return {
        "read": {
            f"GET /{asset}/info": f"Get w{symbol} token information",
            f"GET /{asset}/info?address=0x...": f"Get {symbol} and w{symbol} balances for an address",
        },
        "write": {
            f"POST /{asset}/wrap": f"Wrap {symbol} to w{symbol}",
            f"POST /{asset}/unwrap": f"Unwrap w{symbol} to {symbol}",
            f"POST /{asset}/deposit-as-collateral": f"Wrap {symbol} and deposit it as collateral",
            f"POST /{asset}/deposit-and-mint": f"Wrap {symbol}, deposit it as collateral and mint DSC",
        },
    }


ENDPOINTS["weth"] = _wrapped_endpoints("weth", "ETH")
ENDPOINTS["wbtc"] = _wrapped_endpoints("wbtc", "BTC")


@router.get("/status")
async def get_status(
    services: Services, settings: Settings = Depends(get_settings)
) -> dict[str, Any]:
    """Report that the API is running, with its routes, contracts and node status."""
    addresses = settings.contract_addresses
    connected = await services.client.health_check()
    return {
        "status": "running",
        "message": "DSC Smart Contract Backend API is operational",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": __version__,
        "prefix": settings.api_prefix,
        "endpoints": ENDPOINTS,
        "contracts": {
            "dscToken": {
                "address": addresses["dsc"],
                "type": "ERC20 with mint/burn functionality",
            },
            "dscEngine": {
                "address": addresses["dscEngine"],
                "type": "DeFi Lending Protocol with collateral management",
            },
            "weth": {"address": addresses["weth"], "type": "Wrapped ETH (WETH9)"},
            "wbtc": {"address": addresses["wbtc"], "type": "Wrapped BTC"},
            "network": "Configured via BLOCKCHAIN_RPC_URL environment variable",
        },
        "node": {"rpcUrl": settings.blockchain_rpc_url, "connected": connected},
    }
