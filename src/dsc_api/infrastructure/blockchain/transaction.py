"""Transaction service for sending on-chain transactions.

Signs contract calls locally with the caller's account and waits for
confirmation:
- Nonce lookup (pending block)
- Gas and fee estimation by the node
- Receipt waiting and confirmation counting
- Reverted receipts reported as errors
"""

import logging
from typing import Any

from eth_account import Account
from eth_account.signers.local import LocalAccount

from dsc_api.core.config import get_settings
from dsc_api.core.exceptions import ContractCallError, InvalidPrivateKeyError
from dsc_api.core.formatting import TransactionResult, format_transaction_result
from dsc_api.infrastructure.blockchain.client import ChainClient

logger = logging.getLogger(__name__)


def derive_signer(private_key: str) -> LocalAccount:
    """Derive a local signing account from a 0x-prefixed private key.

    Raises:
        InvalidPrivateKeyError: If the key cannot produce an account
    """
    try:
        return Account.from_key(private_key)
    except Exception as e:
        raise InvalidPrivateKeyError("Invalid private key format") from e


class TransactionService:
    """Service for sending signed contract transactions.

    The signing account is passed on every call; the service holds no key.
    """

    def __init__(
        self,
        client: ChainClient,
        confirmations: int | None = None,
        receipt_timeout: float | None = None,
        poll_latency: float | None = None,
    ):
        """Initialize transaction service.

        Args:
            client: Blockchain client for sending transactions
            confirmations: Blocks to wait for (defaults to settings)
            receipt_timeout: Seconds to wait for the receipt (defaults to settings)
            poll_latency: Receipt polling interval (defaults to settings)
        """
        settings = get_settings()
        self.client = client
        self.confirmations = confirmations or settings.required_confirmations
        self.receipt_timeout = receipt_timeout or settings.tx_receipt_timeout
        self.poll_latency = poll_latency or settings.tx_poll_interval

    async def send_and_wait(
        self,
        signer: LocalAccount,
        function_call: Any,
        value: int = 0,
        description: str | None = None,
    ) -> TransactionResult:
        """Sign and send a contract function call, then wait for confirmation.

        Args:
            signer: Account that signs and pays for the transaction
            function_call: Bound contract function (e.g. contract.functions.mint(to, amount))
            value: Native amount to send in wei
            description: Label used in logs and errors

        Returns:
            TransactionResult of the mined transaction

        Raises:
            ContractCallError: If estimation fails or the transaction reverts
            NetworkError: If the node is unreachable or the receipt times out
        """
        label = description or getattr(function_call, "fn_name", "transaction")

        nonce = await self.client.get_transaction_count(signer.address)
        tx = await self.client.build_transaction(
            function_call,
            {"from": signer.address, "nonce": nonce, "value": value},
        )
        logger.debug(f"{label}: nonce {nonce}, gas {tx.get('gas')}")

        signed_tx = signer.sign_transaction(tx)
        tx_hash = await self.client.send_raw_transaction(signed_tx.raw_transaction)
        logger.info(f"Transaction sent: {tx_hash}, function: {label}, from: {signer.address}")

        receipt = await self.client.wait_for_transaction_receipt(
            tx_hash, timeout=self.receipt_timeout, poll_latency=self.poll_latency
        )
        if receipt.get("status") == 0:
            logger.error(f"Transaction reverted: {tx_hash} ({label})")
            raise ContractCallError(f"Transaction reverted: {tx_hash}")

        confirmations = await self.client.wait_for_confirmations(
            receipt["blockNumber"],
            self.confirmations,
            timeout=self.receipt_timeout,
            poll_latency=self.poll_latency,
        )
        logger.info(
            f"Transaction confirmed: {tx_hash} in block {receipt['blockNumber']} "
            f"({confirmations} confirmations)"
        )
        return format_transaction_result(receipt, confirmations)
