"""Tests for application configuration."""

import logging

import pytest
from pydantic import ValidationError

from dsc_api.core.config import Settings, get_settings
from dsc_api.core.logging import configure_logging


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, settings: Settings):
        """Test default values."""
        assert settings.app_name == "dsc-api"
        assert settings.api_prefix == "/api"
        assert settings.blockchain_rpc_url == "http://localhost:8545"
        assert settings.dsc_address == "0x2c3B2411D8BEeA449f3dfbdAA80bE8C290a159C3"
        assert settings.dsc_engine_address == "0x38febeed266b885a6d84f129463330f81f02df86"
        assert settings.required_confirmations == 1
        assert settings.is_production is False

    def test_contract_addresses(self, settings: Settings):
        """Test contract addresses are keyed by contract name."""
        addresses = settings.contract_addresses

        assert set(addresses) == {"dsc", "dscEngine", "weth", "wbtc"}
        assert addresses["dsc"] == settings.dsc_address

    def test_environment_override(self, monkeypatch):
        """Test values are read from the environment."""
        monkeypatch.setenv("BLOCKCHAIN_RPC_URL", "http://node:8545")
        monkeypatch.setenv("REQUIRED_CONFIRMATIONS", "3")
        monkeypatch.setenv("ENVIRONMENT", "production")

        settings = Settings(_env_file=None)

        assert settings.blockchain_rpc_url == "http://node:8545"
        assert settings.required_confirmations == 3
        assert settings.is_production is True

    def test_confirmations_must_be_positive(self):
        """Test zero confirmations is rejected."""
        with pytest.raises(ValidationError):
            Settings(required_confirmations=0, _env_file=None)

    def test_get_settings_is_cached(self):
        """Test get_settings returns the same instance."""
        assert get_settings() is get_settings()


class TestLogging:
    """Tests for logging setup."""

    def test_configure_logging_sets_level(self):
        """Test the root logger follows the configured level."""
        configure_logging(Settings(log_level="warning", _env_file=None))

        assert logging.getLogger().level == logging.WARNING
        assert logging.getLogger("web3").level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        """Test an unknown level name gives INFO."""
        configure_logging(Settings(log_level="chatty", _env_file=None))

        assert logging.getLogger().level == logging.INFO
