"""
Interfaces for chain access components.

The scanners only need three capabilities from a network: the current
block height, a log query over an inclusive block range and a block
timestamp lookup. Any object implementing them can back a network,
including in-memory fakes used by the tests.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence

from ..types import EvmLog


TopicFilter = Sequence[Optional[str]]


class ChainClientInterface(ABC):
    """Interface for per-network chain client implementations."""

    @abstractmethod
    async def get_latest_block_number(self) -> int:
        """
        Get the latest block number.

        Returns:
            Latest block number
        """
        pass

    @abstractmethod
    async def get_logs(self,
                       address: str,
                       topics: TopicFilter,
                       from_block: int,
                       to_block: int) -> List[EvmLog]:
        """
        Get the logs emitted by a contract in an inclusive block range.

        Args:
            address: Contract address
            topics: Positional topic filter, None matches any value
            from_block: First block of the range
            to_block: Last block of the range

        Returns:
            Matching log entries in chain order
        """
        pass

    @abstractmethod
    async def get_block_timestamp(self, block_number: int) -> datetime:
        """
        Get the timestamp of a block.

        Args:
            block_number: Block number

        Returns:
            Timezone-aware UTC timestamp
        """
        pass
