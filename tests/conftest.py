"""Pytest configuration and fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from factories import make_tx_result


@pytest.fixture
def tx_result():
    """Confirmed transaction result."""
    return make_tx_result()


@pytest.fixture
def services():
    """Mocked service container.

    ``connect`` on every service returns a separate mock standing in for the
    request-scoped signed copy.
    """
    container = MagicMock(name="services")
    container.client.health_check = AsyncMock(return_value=True)
    for name in ("token", "engine", "weth", "wbtc"):
        service = MagicMock(name=name)
        service.connect.return_value = MagicMock(name=f"signed_{name}")
        setattr(container, name, service)

    workflows = {}
    for asset in ("weth", "wbtc"):
        workflow = MagicMock(name=f"{asset}_workflow")
        workflow.connect.return_value = MagicMock(name=f"signed_{asset}_workflow")
        workflows[asset] = workflow
    container.workflows = workflows
    container.workflow.side_effect = workflows.__getitem__
    return container


@pytest.fixture
def app(services):
    """Create FastAPI application for testing with mocked services."""
    from dsc_api.api.deps import get_services
    from dsc_api.main import create_app

    app = create_app()
    app.dependency_overrides[get_services] = lambda: services
    return app


@pytest.fixture
def client(app):
    """Create test client."""
    with TestClient(app) as client:
        yield client


@pytest.fixture(scope="function")
def settings():
    """Create settings instance for testing."""
    from dsc_api.core.config import Settings

    return Settings(environment="testing", _env_file=None)
