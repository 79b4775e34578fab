"""Uniform JSON envelope for every endpoint."""

import logging
from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from dsc_api.core.exceptions import WorkflowStepError

logger = logging.getLogger(__name__)


class ApiResponse(BaseModel):
    """Response envelope returned by all endpoints."""

    success: bool = Field(..., description="Whether the operation succeeded")
    data: Any | None = Field(None, description="Payload on success")
    error: str | None = Field(None, description="Error summary on failure")
    details: str | None = Field(None, description="Underlying error message")


def create_api_response(
    success: bool,
    data: Any = None,
    error: str | None = None,
    details: str | None = None,
) -> dict[str, Any]:
    """Build a response envelope, omitting empty fields."""
    response: dict[str, Any] = {"success": success}

    if success and data:
        response["data"] = data

    if not success:
        if error:
            response["error"] = error
        if details:
            response["details"] = details

    return response


def handle_api_error(error: Exception, operation: str = "operation") -> dict[str, Any]:
    """Log a failed operation and convert it to an error envelope."""
    logger.error(f"Error in {operation}: {error}", exc_info=error)
    return create_api_response(False, None, f"Failed to {operation}", str(error))


def bad_request(message: str) -> JSONResponse:
    """400 response carrying a validation message."""
    return JSONResponse(
        create_api_response(False, None, message),
        status_code=status.HTTP_400_BAD_REQUEST,
    )


def error_response(error: Exception, operation: str) -> JSONResponse:
    """500 response for an unexpected failure of a route operation."""
    content = handle_api_error(error, operation)
    if isinstance(error, WorkflowStepError):
        content["step"] = error.step
        content["completedSteps"] = error.completed_steps
    return JSONResponse(content, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
