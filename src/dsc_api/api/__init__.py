"""API module."""

from fastapi import APIRouter

from dsc_api.api.endpoints import engine, status, token, wrapped
from dsc_api.core.responses import ApiResponse

api_router = APIRouter(
    responses={
        400: {"model": ApiResponse, "description": "Invalid request"},
        500: {"model": ApiResponse, "description": "Operation failed"},
    }
)

# Include routers
api_router.include_router(status.router)
api_router.include_router(token.router)
api_router.include_router(engine.router)
api_router.include_router(wrapped.weth_router)
api_router.include_router(wrapped.wbtc_router)
