"""Application configuration management using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="dsc-api", description="Application name")
    environment: Literal["development", "testing", "staging", "production"] = Field(
        default="development", description="Runtime environment"
    )
    debug: bool = Field(default=False, description="Debug mode flag")

    # Server
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=3000, description="Listen port")

    # API
    api_prefix: str = Field(default="/api", description="API route prefix")
    allowed_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080"],
        description="CORS allowed origins",
    )

    # Blockchain
    blockchain_rpc_url: str = Field(
        default="http://localhost:8545",
        description="JSON-RPC endpoint of the node hosting the contracts",
    )

    # Contract Addresses
    dsc_address: str = Field(
        default="0x2c3B2411D8BEeA449f3dfbdAA80bE8C290a159C3",
        description="DSC stablecoin token address",
    )
    dsc_engine_address: str = Field(
        default="0x38febeed266b885a6d84f129463330f81f02df86",
        description="DSCEngine collateral manager address",
    )
    weth_address: str = Field(
        default=ZERO_ADDRESS,
        description="Wrapped ETH token address",
    )
    wbtc_address: str = Field(
        default=ZERO_ADDRESS,
        description="Wrapped BTC token address",
    )

    # Transactions
    required_confirmations: int = Field(
        default=1, ge=1, description="Blocks to wait for after a transaction is mined"
    )
    tx_receipt_timeout: int = Field(
        default=120, gt=0, description="Seconds to wait for a transaction receipt"
    )
    tx_poll_interval: float = Field(
        default=2.0, gt=0, description="Receipt polling interval in seconds"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    @computed_field
    @property
    def contract_addresses(self) -> dict[str, str]:
        """Configured contract addresses keyed by contract name."""
        return {
            "dsc": self.dsc_address,
            "dscEngine": self.dsc_engine_address,
            "weth": self.weth_address,
            "wbtc": self.wbtc_address,
        }

    @computed_field
    @property
    def is_production(self) -> bool:
        """Check whether the API runs in production."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
