"""Construction of the per-process service graph."""

import logging
from dataclasses import dataclass

from dsc_api.core.config import Settings
from dsc_api.infrastructure.blockchain import (
    ChainClient,
    TransactionService,
    get_abi_loader,
)
from dsc_api.services.engine import EngineService
from dsc_api.services.token import TokenService
from dsc_api.services.workflow import CollateralWorkflowService
from dsc_api.services.wrapped import WrappedAssetService

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Unsigned services shared by all requests."""

    client: ChainClient
    token: TokenService
    engine: EngineService
    weth: WrappedAssetService
    wbtc: WrappedAssetService

    def workflow(self, asset: str) -> CollateralWorkflowService:
        """Collateral workflow for "weth" or "wbtc"."""
        wrapped = {"weth": self.weth, "wbtc": self.wbtc}[asset]
        return CollateralWorkflowService(asset=wrapped, engine=self.engine, token=self.token)


def build_services(settings: Settings) -> ServiceContainer:
    """Create the client and all contract services from settings.

    Raises:
        InvalidAddressError: If a configured contract address is malformed
    """
    client = ChainClient(settings.blockchain_rpc_url)
    transactions = TransactionService(
        client,
        confirmations=settings.required_confirmations,
        receipt_timeout=settings.tx_receipt_timeout,
        poll_latency=settings.tx_poll_interval,
    )
    abis = get_abi_loader()

    container = ServiceContainer(
        client=client,
        token=TokenService(client, settings.dsc_address, abis.dsc_abi, transactions),
        engine=EngineService(
            client, settings.dsc_engine_address, abis.dsc_engine_abi, transactions
        ),
        weth=WrappedAssetService(
            client, settings.weth_address, abis.weth_abi, "ETH", transactions
        ),
        wbtc=WrappedAssetService(
            client, settings.wbtc_address, abis.wbtc_abi, "BTC", transactions
        ),
    )
    logger.info(f"Services initialized for RPC {settings.blockchain_rpc_url}")
    return container
