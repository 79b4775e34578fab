"""Shared test data."""

from dsc_api.core.formatting import TransactionResult

# Well-known development key and its address (first Anvil/Hardhat account)
PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
SIGNER_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

# Second Anvil/Hardhat account
USER_PRIVATE_KEY = "0x59c6995e998f97a5a0044966f0945389dc9e86dae88c7a8412f4603b6b78690d"
USER_ADDRESS = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
TOKEN_ADDRESS = "0x2c3B2411D8BEeA449f3dfbdAA80bE8C290a159C3"
ENGINE_ADDRESS = "0x38febeED266B885A6d84f129463330F81f02dF86"
WETH_ADDRESS = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"

TX_HASH = "0x" + "ab" * 32


def make_tx_result(**overrides) -> TransactionResult:
    """Build a confirmed transaction result."""
    fields = {
        "transaction_hash": TX_HASH,
        "block_number": 42,
        "gas_used": "21000",
        "status": 1,
    }
    fields.update(overrides)
    return TransactionResult(**fields)
