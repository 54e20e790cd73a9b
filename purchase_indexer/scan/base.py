# purchase_indexer/scan/base.py

from typing import Iterable, List, Optional

from ..clients.interfaces import ChainClientInterface, TopicFilter
from ..core.exceptions import LogDecodeError
from ..core.logging import LoggingMixin
from ..decode.log_decoder import PurchaseLogDecoder
from ..types import ALL, EvmLog, Limit, NetworkConfig, PurchaseEvent


def normalize_limit(limit: Limit) -> Optional[int]:
    """Return the numeric limit, or None for "all"."""
    if limit == ALL:
        return None
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValueError(f"limit must be a positive integer or '{ALL}', got {limit!r}")
    if limit <= 0:
        raise ValueError(f"limit must be positive, got {limit}")
    return limit


class BaseScanner(LoggingMixin):
    """Shared chunk query and decode steps of the forward and reverse scanners"""

    def __init__(self, chunk_size: int, decoder: Optional[PurchaseLogDecoder] = None):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.chunk_size = chunk_size
        self.decoder = decoder or PurchaseLogDecoder()

    async def _query_chunk(self,
                           client: ChainClientInterface,
                           contract_address: str,
                           topics: TopicFilter,
                           network: NetworkConfig,
                           from_block: int,
                           to_block: int) -> List[EvmLog]:
        logs = await client.get_logs(contract_address, topics, from_block, to_block)
        self.log_debug("Chunk scanned",
                       network=network.key,
                       from_block=from_block,
                       to_block=to_block,
                       event_count=len(logs))
        return logs

    def _decode_logs(self, logs: Iterable[EvmLog], network: NetworkConfig) -> List[PurchaseEvent]:
        events = []
        for log in logs:
            try:
                events.append(self.decoder.decode(log, network))
            except LogDecodeError as e:
                self.log_warning("Skipping malformed purchase log",
                                 network=network.key,
                                 block_number=log.blockNumber,
                                 tx_hash=log.transactionHash,
                                 error=str(e))
        return events
