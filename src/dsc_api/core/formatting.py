"""Conversions between token units, wei and API result records.

All amounts use a fixed 18-decimal convention. Arithmetic is done on
``Decimal`` and ``int`` only, never on floats.
"""

from dataclasses import asdict, dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from web3 import Web3

TOKEN_DECIMALS = 18
WEI_PER_TOKEN = 10**TOKEN_DECIMALS


@dataclass
class TransactionResult:
    """Result of a confirmed transaction."""

    transaction_hash: str
    block_number: int | None
    gas_used: str
    status: int | None
    confirmations: int = 1

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the camelCase keys used by the API."""
        data = asdict(self)
        return {
            "transactionHash": data["transaction_hash"],
            "blockNumber": data["block_number"],
            "gasUsed": data["gas_used"],
            "status": data["status"],
            "confirmations": data["confirmations"],
        }

    def summary(self) -> dict[str, Any]:
        """Fields echoed by the write endpoints."""
        return {
            "transactionHash": self.transaction_hash,
            "blockNumber": self.block_number,
            "gasUsed": self.gas_used,
            "status": self.status,
        }


def parse_decimal(value: Any) -> Decimal | None:
    """Parse a user supplied amount, returning None when it is not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    if "_" in text:
        return None
    try:
        number = Decimal(text)
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite():
        return None
    return number


def format_amount_to_wei(amount: Any) -> int:
    """Convert an amount in token units to wei.

    Args:
        amount: Decimal string or number in token units

    Returns:
        Integer amount in wei

    Raises:
        ValueError: If the amount is not numeric, has more than 18 decimals
            or does not fit in a uint256
    """
    number = parse_decimal(amount)
    if number is None:
        raise ValueError(f"Invalid amount: {amount!r}")

    if _decimal_places(number) > TOKEN_DECIMALS:
        raise ValueError(
            f"Amount {amount!r} has more than {TOKEN_DECIMALS} decimal places"
        )
    try:
        return Web3.to_wei(number, "ether")
    except ArithmeticError as e:
        raise ValueError(f"Amount {amount!r} is out of range") from e


def _decimal_places(number: Decimal) -> int:
    """Count significant fractional digits, ignoring trailing zeros."""
    _, digits, exponent = number.as_tuple()
    text = "".join(map(str, digits)).rstrip("0")
    if not text:
        return 0
    return max(0, -(exponent + len(digits) - len(text)))


def format_amount_from_wei(wei_amount: int | str) -> str:
    """Convert a wei amount to a decimal string in token units.

    The fractional part keeps full precision with trailing zeros removed,
    but always has at least one digit (``10**20`` -> ``"100.0"``).
    """
    value = int(wei_amount)
    sign = "-" if value < 0 else ""
    whole, fraction = divmod(abs(value), WEI_PER_TOKEN)
    fraction_text = str(fraction).rjust(TOKEN_DECIMALS, "0").rstrip("0") or "0"
    return f"{sign}{whole}.{fraction_text}"


def _to_hex(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        text = bytes(value).hex()
    elif hasattr(value, "hex") and not isinstance(value, str):
        text = value.hex()
    else:
        text = str(value)
    return text if text.startswith("0x") else f"0x{text}"


def format_transaction_result(
    receipt: Mapping[str, Any], confirmations: int = 1
) -> TransactionResult:
    """Shape a transaction receipt into a TransactionResult.

    ``gasUsed`` is stringified so large values survive JSON encoding.
    """
    tx_hash = receipt.get("transactionHash", receipt.get("hash"))
    gas_used = receipt.get("gasUsed")
    return TransactionResult(
        transaction_hash=_to_hex(tx_hash) if tx_hash is not None else "",
        block_number=receipt.get("blockNumber"),
        gas_used=str(gas_used) if gas_used is not None else "0",
        status=receipt.get("status"),
        confirmations=confirmations,
    )


def sanitize_private_key(private_key: Any) -> str:
    """Mask a private key for display, keeping the first 6 and last 4 characters."""
    if not isinstance(private_key, str) or len(private_key) < 8:
        return "***"
    return f"{private_key[:6]}...{private_key[-4:]}"
