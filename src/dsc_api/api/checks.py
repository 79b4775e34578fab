"""Request checks run at the route boundary, before any contract call."""

from typing import Any, Mapping

from fastapi import status
from fastapi.responses import JSONResponse

from dsc_api.core.responses import bad_request
from dsc_api.core.validation import (
    validate_address,
    validate_amount,
    validate_private_key,
    validate_required_fields,
)


def check_signed_request(
    body: Mapping[str, Any],
    required: list[str],
    addresses: Mapping[str, str] | None = None,
    amounts: Mapping[str, str] | None = None,
) -> JSONResponse | None:
    """Validate a write request body.

    Args:
        body: Parsed JSON body
        required: Required fields in reporting order (including privateKey)
        addresses: Address fields mapped to their error message
        amounts: Positive amount fields mapped to their error message

    Returns:
        A 400 response for the first problem found, or None
    """
    validation_error = validate_required_fields(body, required)
    if validation_error:
        return JSONResponse(validation_error, status_code=status.HTTP_400_BAD_REQUEST)

    for field, message in (addresses or {}).items():
        if not validate_address(body[field]):
            return bad_request(message)

    for field, message in (amounts or {}).items():
        if not validate_amount(body[field]):
            return bad_request(message)

    if not validate_private_key(body["privateKey"]):
        return bad_request("Invalid private key format")

    return None
