"""Input validation helpers shared by every route."""

import re
from typing import Any, Mapping, Sequence

from eth_account import Account
from web3 import Web3

from dsc_api.core.exceptions import InvalidAddressError
from dsc_api.core.formatting import parse_decimal
from dsc_api.core.responses import create_api_response

PRIVATE_KEY_PATTERN = re.compile(r"^0x[0-9a-fA-F]{64}$")


def validate_address(address: Any) -> bool:
    """Check that a value is a well-formed (and, if mixed-case, checksummed) address."""
    if not isinstance(address, str):
        return False
    try:
        return bool(Web3.is_address(address))
    except Exception:
        return False


def format_address(address: Any) -> str:
    """Return the EIP-55 checksummed form of an address.

    Raises:
        InvalidAddressError: If the value is not a valid address
    """
    if not validate_address(address):
        raise InvalidAddressError("Invalid address format")
    return Web3.to_checksum_address(address)


def validate_amount(amount: Any) -> bool:
    """Check that an amount is a finite number greater than zero."""
    number = parse_decimal(amount)
    return number is not None and number > 0


def validate_non_negative_amount(amount: Any) -> bool:
    """Check that an amount is a finite number greater than or equal to zero."""
    number = parse_decimal(amount)
    return number is not None and number >= 0


def validate_private_key(private_key: Any) -> bool:
    """Check that a value is a 0x-prefixed 32-byte hex key that derives an account."""
    if not isinstance(private_key, str) or not PRIVATE_KEY_PATTERN.fullmatch(private_key):
        return False
    try:
        Account.from_key(private_key)
    except Exception:
        return False
    return True


def validate_required_fields(
    body: Mapping[str, Any], required_fields: Sequence[str]
) -> dict[str, Any] | None:
    """Report the first missing or empty field of a request body.

    Returns:
        An error envelope naming the field, or None when all fields are set
    """
    for field in required_fields:
        if not body.get(field):
            return create_api_response(False, None, f"{field} is required")
    return None
