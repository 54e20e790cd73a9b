# purchase_indexer/types/configs/network.py

from msgspec import Struct
from eth_utils import is_hex_address

from ..new import EvmAddress


class NetworkConfig(Struct, frozen=True):
    key: str
    chain_id: int
    name: str
    rpc_url: str
    explorer_url: str
    contract_address: EvmAddress
    deployment_block: int = 0

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("Network key must not be empty")
        if not is_hex_address(self.contract_address):
            raise ValueError(f"Invalid contract address for {self.key}: {self.contract_address}")
        if self.deployment_block < 0:
            raise ValueError(f"Deployment block for {self.key} must not be negative")

    def tx_url(self, tx_hash: str) -> str:
        return f"{self.explorer_url.rstrip('/')}/tx/{tx_hash}"
