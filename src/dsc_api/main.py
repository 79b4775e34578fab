"""FastAPI application factory and main entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dsc_api import __version__
from dsc_api.api import api_router
from dsc_api.core.config import get_settings
from dsc_api.core.logging import configure_logging
from dsc_api.core.responses import create_api_response
from dsc_api.services import build_services

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager for startup/shutdown events."""
    # Startup
    settings = get_settings()
    configure_logging(settings)
    app.state.settings = settings
    app.state.services = build_services(settings)
    logger.info(
        f"{settings.app_name} {__version__} started "
        f"(environment={settings.environment}, contracts={settings.contract_addresses})"
    )

    yield

    # Shutdown
    logger.info(f"{settings.app_name} shutting down")


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies with the standard envelope."""
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        create_api_response(False, None, "Invalid request body"),
        status_code=status.HTTP_400_BAD_REQUEST,
    )


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        description="REST API for the Decentralized Stable Coin contracts",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Register routes
    register_routes(app)

    return app


def register_routes(app: FastAPI) -> None:
    """Register all application routes."""
    settings = get_settings()

    # Include API router
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/health", tags=["System"])
    async def health_check():
        """Health check endpoint for load balancers and monitoring."""
        return {
            "status": "healthy",
            "version": __version__,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }


# Create application instance
app = create_app()
