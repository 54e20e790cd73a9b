# purchase_indexer/scan/timestamps.py

import asyncio
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence

from ..clients.interfaces import ChainClientInterface
from ..core.logging import LoggingMixin
from ..types import TIMESTAMP_BATCH_SIZE, PurchaseEvent


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TimestampResolver(LoggingMixin):
    """
    Attaches block timestamps to events of one network.

    Distinct block numbers are looked up in sequential batches of
    `batch_size` concurrent requests. A failed lookup never aborts the
    batch: the block is stamped with the current time instead and a
    warning is logged.
    """

    def __init__(self, batch_size: int = TIMESTAMP_BATCH_SIZE,
                 clock: Callable[[], datetime] = utc_now):
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self.batch_size = batch_size
        self.clock = clock

    async def attach_timestamps(self,
                                client: ChainClientInterface,
                                events: Sequence[PurchaseEvent],
                                network: Optional[str] = None) -> List[PurchaseEvent]:
        block_numbers = list(dict.fromkeys(event.block_number for event in events))
        timestamps = await self.resolve(client, block_numbers, network)
        return [event.with_timestamp(timestamps[event.block_number]) for event in events]

    async def resolve(self,
                      client: ChainClientInterface,
                      block_numbers: Sequence[int],
                      network: Optional[str] = None) -> Dict[int, datetime]:
        timestamps: Dict[int, datetime] = {}

        for start in range(0, len(block_numbers), self.batch_size):
            batch = block_numbers[start:start + self.batch_size]
            results = await asyncio.gather(
                *(self._lookup(client, block_number, network) for block_number in batch)
            )
            timestamps.update(zip(batch, results))

        self.log_debug("Block timestamps resolved",
                       network=network,
                       event_count=len(timestamps))
        return timestamps

    async def _lookup(self, client: ChainClientInterface, block_number: int,
                      network: Optional[str]) -> datetime:
        try:
            return await client.get_block_timestamp(block_number)
        except Exception as e:
            self.log_warning("Block timestamp lookup failed, using current time",
                             network=network,
                             block_number=block_number,
                             error=str(e),
                             exception_type=type(e).__name__)
            return self.clock()
