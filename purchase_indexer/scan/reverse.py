# purchase_indexer/scan/reverse.py

from typing import List, Optional

from ..clients.interfaces import ChainClientInterface
from ..decode.events import purchase_topic_filter
from ..decode.log_decoder import PurchaseLogDecoder
from ..types import REVERSE_CHUNK_SIZE, EvmLog, Limit, NetworkConfig, PurchaseEvent
from .base import BaseScanner, normalize_limit
from .ranges import reverse_ranges


class ReverseScanner(BaseScanner):
    """
    Walks a network's history backwards from the chain head and stops as
    soon as `limit` logs have been collected or the deployment block has
    been scanned.

    The early stop only applies to this network. Collecting `limit` events
    per network guarantees the global latest `limit` are among the
    candidates once all networks are merged.
    """

    def __init__(self, chunk_size: int = REVERSE_CHUNK_SIZE,
                 decoder: Optional[PurchaseLogDecoder] = None):
        super().__init__(chunk_size, decoder)

    async def scan_latest(self,
                          client: ChainClientInterface,
                          contract_address: str,
                          network: NetworkConfig,
                          limit: Limit,
                          receiver: Optional[str] = None) -> List[PurchaseEvent]:
        max_events = normalize_limit(limit)
        topics = purchase_topic_filter(receiver)
        height = await client.get_latest_block_number()

        self.log_info("Starting reverse scan",
                      network=network.key,
                      from_block=network.deployment_block,
                      to_block=height,
                      limit=limit,
                      receiver=receiver)

        collected: List[EvmLog] = []
        for from_block, to_block in reverse_ranges(network.deployment_block, height, self.chunk_size):
            collected.extend(await self._query_chunk(
                client, contract_address, topics, network, from_block, to_block
            ))
            if max_events is not None and len(collected) >= max_events:
                self.log_debug("Limit reached, stopping reverse scan",
                               network=network.key,
                               from_block=from_block,
                               event_count=len(collected))
                break

        collected.sort(key=lambda log: (log.blockNumber, log.logIndex), reverse=True)
        if max_events is not None:
            collected = collected[:max_events]

        events = self._decode_logs(collected, network)
        self.log_info("Reverse scan complete", network=network.key, event_count=len(events))
        return events
