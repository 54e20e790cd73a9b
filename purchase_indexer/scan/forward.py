# purchase_indexer/scan/forward.py

from typing import List, Optional

from ..clients.interfaces import ChainClientInterface
from ..decode.events import purchase_topic_filter
from ..decode.log_decoder import PurchaseLogDecoder
from ..types import FORWARD_CHUNK_SIZE, NetworkConfig, PurchaseEvent
from .base import BaseScanner
from .ranges import forward_ranges


class ForwardScanner(BaseScanner):
    """
    Walks a network's full purchase history from the deployment block to
    the chain head, oldest chunk first.

    The head is read once when the scan starts; blocks mined while the
    scan runs are not included. Chunks are queried one after another and
    the returned events keep ascending block order.
    """

    def __init__(self, chunk_size: int = FORWARD_CHUNK_SIZE,
                 decoder: Optional[PurchaseLogDecoder] = None):
        super().__init__(chunk_size, decoder)

    async def scan(self,
                   client: ChainClientInterface,
                   contract_address: str,
                   network: NetworkConfig,
                   receiver: Optional[str] = None) -> List[PurchaseEvent]:
        topics = purchase_topic_filter(receiver)
        height = await client.get_latest_block_number()

        self.log_info("Starting forward scan",
                      network=network.key,
                      from_block=network.deployment_block,
                      to_block=height,
                      receiver=receiver)

        events: List[PurchaseEvent] = []
        for from_block, to_block in forward_ranges(network.deployment_block, height, self.chunk_size):
            logs = await self._query_chunk(
                client, contract_address, topics, network, from_block, to_block
            )
            events.extend(self._decode_logs(logs, network))

        self.log_info("Forward scan complete", network=network.key, event_count=len(events))
        return events
