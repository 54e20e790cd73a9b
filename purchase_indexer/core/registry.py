# purchase_indexer/core/registry.py

from typing import Dict, Iterator, List, Optional, Sequence

from ..types import NetworkConfig
from .exceptions import ConfigurationError


DEFAULT_EXPLORER_URL = "https://sepolia.etherscan.io"


class NetworkRegistry:
    """Immutable, ordered table of the networks the purchase contract is deployed on"""

    def __init__(self, networks: Sequence[NetworkConfig]):
        if not networks:
            raise ConfigurationError("At least one network must be configured")

        self._networks: Dict[str, NetworkConfig] = {}
        self._by_chain_id: Dict[int, NetworkConfig] = {}

        for network in networks:
            if network.key in self._networks:
                raise ConfigurationError(f"Duplicate network key: {network.key}")
            if network.chain_id in self._by_chain_id:
                raise ConfigurationError(f"Duplicate chain id: {network.chain_id}")
            self._networks[network.key] = network
            self._by_chain_id[network.chain_id] = network

    def __iter__(self) -> Iterator[NetworkConfig]:
        return iter(self._networks.values())

    def __len__(self) -> int:
        return len(self._networks)

    def __contains__(self, key: str) -> bool:
        return key in self._networks

    @property
    def keys(self) -> List[str]:
        return list(self._networks)

    def get(self, key: str) -> NetworkConfig:
        try:
            return self._networks[key]
        except KeyError:
            raise ConfigurationError(f"Unknown network: {key}") from None

    def by_chain_id(self, chain_id: int) -> Optional[NetworkConfig]:
        return self._by_chain_id.get(chain_id)

    def explorer_tx_url(self, chain_id: int, tx_hash: str) -> str:
        network = self.by_chain_id(chain_id)
        if network and network.explorer_url:
            return network.tx_url(tx_hash)
        return f"{DEFAULT_EXPLORER_URL}/tx/{tx_hash}"
