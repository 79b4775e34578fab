"""Tests for status and health endpoints."""

from fastapi.testclient import TestClient

from dsc_api import __version__


class TestHealthEndpoint:
    """Test health check endpoint."""

    def test_health_check_returns_ok(self, client: TestClient):
        """Test that health endpoint returns healthy status."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == __version__
        assert "timestamp" in data


class TestStatusEndpoint:
    """Test API status endpoint."""

    def test_status(self, client: TestClient):
        """Test status reports the running API and its contracts."""
        response = client.get("/api/status")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "running"
        assert data["version"] == __version__
        assert data["contracts"]["dscToken"]["address"] == (
            "0x2c3B2411D8BEeA449f3dfbdAA80bE8C290a159C3"
        )
        assert data["node"]["connected"] is True

    def test_status_lists_every_route_family(self, client: TestClient):
        """Test the endpoint catalog covers token, engine and wrapped assets."""
        endpoints = client.get("/api/status").json()["endpoints"]

        assert set(endpoints) == {"token", "engine", "weth", "wbtc"}
        assert "POST /wbtc/deposit-and-mint" in endpoints["wbtc"]["write"]
        assert "POST /engine/liquidate" in endpoints["engine"]["write"]


class TestCORSConfiguration:
    """Test CORS middleware configuration."""

    def test_cors_headers_present(self, client: TestClient):
        """Test that CORS headers are set for allowed origins."""
        response = client.get("/health", headers={"Origin": "http://localhost:3000"})

        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
