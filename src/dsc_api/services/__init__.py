"""Contract service wrappers."""

from dsc_api.services.base import ContractService, ERC20Service
from dsc_api.services.container import ServiceContainer, build_services
from dsc_api.services.engine import EngineService
from dsc_api.services.token import TokenService
from dsc_api.services.workflow import CollateralWorkflowService
from dsc_api.services.wrapped import WrappedAssetService

__all__ = [
    # Base
    "ContractService",
    "ERC20Service",
    # Contracts
    "TokenService",
    "EngineService",
    "WrappedAssetService",
    # Workflows
    "CollateralWorkflowService",
    # Wiring
    "ServiceContainer",
    "build_services",
]
