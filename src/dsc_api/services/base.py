"""Base classes for contract service wrappers."""

import asyncio
import copy
import logging
from typing import Any, TypeVar

from eth_account.signers.local import LocalAccount

from dsc_api.core.exceptions import InvalidPrivateKeyError, SignerNotSetError
from dsc_api.core.formatting import (
    TransactionResult,
    format_amount_from_wei,
    format_amount_to_wei,
    sanitize_private_key,
)
from dsc_api.core.validation import format_address, validate_private_key
from dsc_api.infrastructure.blockchain import (
    ChainClient,
    TransactionService,
    derive_signer,
)

logger = logging.getLogger(__name__)

ServiceT = TypeVar("ServiceT", bound="ContractService")


class ContractService:
    """Wraps one deployed contract.

    A service built at startup is unsigned and only serves view calls.
    ``connect`` returns a signed copy for the current request; the shared
    instance is never given a key.
    """

    label = "contract"

    def __init__(
        self,
        client: ChainClient,
        address: str,
        abi: list[dict[str, Any]],
        transactions: TransactionService | None = None,
    ):
        """Initialize contract service.

        Args:
            client: Blockchain client used for view calls
            address: Deployed contract address
            abi: Contract ABI
            transactions: Transaction sender (created from client if omitted)
        """
        self.client = client
        self.address = format_address(address)
        self.contract = client.contract(self.address, abi)
        self.transactions = transactions or TransactionService(client)
        self.signer: LocalAccount | None = None
        logger.info(f"{self.label} service initialized at {self.address}")

    @property
    def is_signed(self) -> bool:
        """Whether a signer is bound."""
        return self.signer is not None

    @property
    def signer_address(self) -> str | None:
        """Address of the bound signer, if any."""
        return self.signer.address if self.signer else None

    def connect(self: ServiceT, private_key: str) -> ServiceT:
        """Return a copy of this service that signs with the given key.

        Raises:
            InvalidPrivateKeyError: If the key is malformed
        """
        if not validate_private_key(private_key):
            logger.warning(
                f"{self.label} rejected private key {sanitize_private_key(private_key)}"
            )
            raise InvalidPrivateKeyError("Invalid private key format")
        return self.connect_account(derive_signer(private_key))

    def connect_account(self: ServiceT, signer: LocalAccount) -> ServiceT:
        """Return a copy of this service bound to an already derived account."""
        bound = copy.copy(self)
        bound.signer = signer
        logger.info(f"{self.label} signer set for address: {signer.address}")
        return bound

    def require_signer(self, action: str) -> LocalAccount:
        """Get the bound signer.

        Raises:
            SignerNotSetError: If the service is unsigned
        """
        if self.signer is None:
            raise SignerNotSetError(f"Signer not set. Private key required for {action}.")
        return self.signer

    async def call(self, function_name: str, *args: Any) -> Any:
        """Execute a view function of the contract."""
        function_call = getattr(self.contract.functions, function_name)(*args)
        return await self.client.call_function(
            function_call, f"{self.label}.{function_name}"
        )

    async def transact(
        self, action: str, function_name: str, *args: Any, value: int = 0
    ) -> TransactionResult:
        """Send a state-changing contract call signed by the bound account."""
        signer = self.require_signer(action)
        function_call = getattr(self.contract.functions, function_name)(*args)
        return await self.transactions.send_and_wait(
            signer,
            function_call,
            value=value,
            description=f"{self.label}.{function_name}",
        )


class ERC20Service(ContractService):
    """Read and write operations shared by every ERC20 token wrapper."""

    label = "ERC20"

    async def get_token_name(self) -> str:
        return await self.call("name")

    async def get_token_symbol(self) -> str:
        return await self.call("symbol")

    async def get_token_decimals(self) -> int:
        return await self.call("decimals")

    async def get_total_supply(self) -> str:
        """Total supply in token units."""
        return format_amount_from_wei(await self.call("totalSupply"))

    async def get_balance(self, address: str) -> str:
        """Token balance of an address in token units."""
        return format_amount_from_wei(await self.call("balanceOf", format_address(address)))

    async def get_allowance(self, owner: str, spender: str) -> str:
        """Remaining allowance of spender over owner's tokens, in token units."""
        allowance = await self.call(
            "allowance", format_address(owner), format_address(spender)
        )
        return format_amount_from_wei(allowance)

    async def get_token_metadata(self) -> dict[str, Any]:
        """Name, symbol, decimals and total supply fetched concurrently."""
        name, symbol, decimals, total_supply = await asyncio.gather(
            self.get_token_name(),
            self.get_token_symbol(),
            self.get_token_decimals(),
            self.get_total_supply(),
        )
        return {
            "name": name,
            "symbol": symbol,
            "decimals": str(decimals),
            "totalSupply": total_supply,
            "contractAddress": self.address,
        }

    async def approve(self, spender: str, amount: Any) -> TransactionResult:
        """Approve spender to move amount tokens of the signer."""
        return await self.transact(
            "approval",
            "approve",
            format_address(spender),
            format_amount_to_wei(amount),
        )

    async def transfer(self, to: str, amount: Any) -> TransactionResult:
        """Transfer amount tokens from the signer to an address."""
        return await self.transact(
            "transfer",
            "transfer",
            format_address(to),
            format_amount_to_wei(amount),
        )
