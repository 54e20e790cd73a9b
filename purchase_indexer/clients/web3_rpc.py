# purchase_indexer/clients/web3_rpc.py

import asyncio
from datetime import datetime, timezone
from typing import Any, Awaitable, List, Mapping, Optional, TypeVar

from web3 import AsyncWeb3, Web3
from web3.providers import AsyncHTTPProvider

from ..core.exceptions import ChainClientError
from ..core.logging import LoggingMixin
from ..types import EvmLog, NetworkConfig
from .interfaces import ChainClientInterface, TopicFilter


T = TypeVar('T')


class Web3RpcClient(ChainClientInterface, LoggingMixin):
    """
    Chain client for one network, backed by web3's async JSON-RPC provider.

    Every request is a single attempt. Transport and node errors are
    re-raised as ChainClientError tagged with the network key.
    """

    def __init__(self, network: NetworkConfig, timeout: Optional[float] = None,
                 w3: Optional[AsyncWeb3] = None):
        self.network = network
        self.timeout = timeout
        self.w3 = w3 or AsyncWeb3(AsyncHTTPProvider(network.rpc_url))

    async def _request(self, method: str, awaitable: Awaitable[T]) -> T:
        try:
            if self.timeout is not None:
                return await asyncio.wait_for(awaitable, timeout=self.timeout)
            return await awaitable
        except asyncio.TimeoutError as e:
            raise ChainClientError(
                f"{method} timed out after {self.timeout}s on {self.network.key}",
                network=self.network.key, method=method,
            ) from e
        except Exception as e:
            raise ChainClientError(
                f"{method} failed on {self.network.key}: {e}",
                network=self.network.key, method=method,
            ) from e

    async def get_latest_block_number(self) -> int:
        return await self._request("eth_blockNumber", self.w3.eth.get_block_number())

    async def get_logs(self,
                       address: str,
                       topics: TopicFilter,
                       from_block: int,
                       to_block: int) -> List[EvmLog]:
        params = {
            "address": Web3.to_checksum_address(address),
            "topics": list(topics),
            "fromBlock": from_block,
            "toBlock": to_block,
        }
        entries = await self._request("eth_getLogs", self.w3.eth.get_logs(params))
        return [self._to_evm_log(entry) for entry in entries]

    async def get_block_timestamp(self, block_number: int) -> datetime:
        block = await self._request("eth_getBlockByNumber", self.w3.eth.get_block(block_number))
        return datetime.fromtimestamp(int(block["timestamp"]), tz=timezone.utc)

    @staticmethod
    def _to_evm_log(entry: Mapping[str, Any]) -> EvmLog:
        return EvmLog(
            address=str(entry["address"]).lower(),
            blockNumber=int(entry["blockNumber"]),
            data=_to_hex(entry["data"]),
            topics=[_to_hex(topic) for topic in entry["topics"]],
            transactionHash=_to_hex(entry["transactionHash"]),
            logIndex=int(entry.get("logIndex", 0)),
            removed=bool(entry.get("removed", False)),
        )


def _to_hex(value: Any) -> str:
    if isinstance(value, str):
        return value.lower() if value.startswith("0x") else f"0x{value.lower()}"
    return Web3.to_hex(value)
