"""Contract ABI handling.

Loads ABIs from the abi/ directory shipped with the package.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path

logger = logging.getLogger(__name__)

ABI_DIR = Path(__file__).parent / "abi"

DSC_CONTRACT = "DecentralizedStableCoin"
DSC_ENGINE_CONTRACT = "DSCEngine"
WETH_CONTRACT = "WETH"
WBTC_CONTRACT = "WBTC"


class ABILoader:
    """Loads and caches contract ABIs from JSON files."""

    def __init__(self, abi_dir: Path = ABI_DIR):
        self.abi_dir = abi_dir
        self._abis: dict[str, list[dict]] = {}
        self._load_all_abis()

    def _load_all_abis(self) -> None:
        """Load all ABIs from the ABI directory."""
        if not self.abi_dir.exists():
            logger.warning(f"ABI directory not found: {self.abi_dir}")
            return

        for abi_file in sorted(self.abi_dir.glob("*.json")):
            with open(abi_file, "r") as f:
                data = json.load(f)
            abi = data.get("abi", [])
            if abi:
                self._abis[abi_file.stem] = abi
                logger.debug(f"Loaded ABI: {abi_file.stem} ({len(abi)} entries)")

        logger.info(f"Loaded {len(self._abis)} ABIs: {list(self._abis.keys())}")

    @property
    def contract_names(self) -> list[str]:
        """Names of all loaded ABIs."""
        return list(self._abis.keys())

    def get_abi(self, contract_name: str) -> list[dict]:
        """Get ABI by contract name.

        Args:
            contract_name: Contract name (e.g., "DSCEngine", "WETH")

        Returns:
            Contract ABI as list of dicts
        """
        if contract_name not in self._abis:
            raise ValueError(f"ABI not found for contract: {contract_name}")
        return self._abis[contract_name]

    def function_names(self, contract_name: str) -> list[str]:
        """Names of the functions declared in a contract ABI."""
        return [
            item["name"]
            for item in self.get_abi(contract_name)
            if item.get("type") == "function"
        ]

    @property
    def dsc_abi(self) -> list[dict]:
        """Get DSC token contract ABI."""
        return self.get_abi(DSC_CONTRACT)

    @property
    def dsc_engine_abi(self) -> list[dict]:
        """Get DSCEngine contract ABI."""
        return self.get_abi(DSC_ENGINE_CONTRACT)

    @property
    def weth_abi(self) -> list[dict]:
        """Get wrapped ETH contract ABI."""
        return self.get_abi(WETH_CONTRACT)

    @property
    def wbtc_abi(self) -> list[dict]:
        """Get wrapped BTC contract ABI."""
        return self.get_abi(WBTC_CONTRACT)


@lru_cache(maxsize=1)
def get_abi_loader() -> ABILoader:
    """Get the shared ABI loader instance."""
    return ABILoader()
