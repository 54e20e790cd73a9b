# purchase_indexer/services/aggregator.py

import asyncio
from functools import cmp_to_key
from itertools import chain
from typing import Awaitable, List, Mapping, Optional, Sequence

from ..clients.interfaces import ChainClientInterface
from ..core.exceptions import ConfigurationError
from ..core.logging import LoggingMixin
from ..core.registry import NetworkRegistry
from ..decode.events import normalize_address
from ..scan import ForwardScanner, ReverseScanner, TimestampResolver, normalize_limit
from ..types import Limit, NetworkConfig, PurchaseEvent


def compare_by_timestamp_desc(a: PurchaseEvent, b: PurchaseEvent) -> int:
    # events without a timestamp compare equal to everything
    if a.timestamp is None or b.timestamp is None:
        return 0
    if a.timestamp > b.timestamp:
        return -1
    if a.timestamp < b.timestamp:
        return 1
    return 0


def sort_by_timestamp_desc(events: Sequence[PurchaseEvent]) -> List[PurchaseEvent]:
    return sorted(events, key=cmp_to_key(compare_by_timestamp_desc))


class PurchaseAggregator(LoggingMixin):
    """
    Fans purchase scans out over every registered network and merges the
    results.

    Each network runs as its own task. Any exception raised inside a
    network's pipeline is logged and turns that network's contribution
    into an empty list, so one unreachable node never fails the call.
    Errors raised before the fan-out (bad arguments, missing clients)
    reach the caller.
    """

    def __init__(self,
                 registry: NetworkRegistry,
                 clients: Mapping[str, ChainClientInterface],
                 forward_scanner: Optional[ForwardScanner] = None,
                 reverse_scanner: Optional[ReverseScanner] = None,
                 timestamp_resolver: Optional[TimestampResolver] = None):
        missing = [key for key in registry.keys if key not in clients]
        if missing:
            raise ConfigurationError(f"No chain client configured for: {', '.join(missing)}")

        self.registry = registry
        self.clients = dict(clients)
        self.forward_scanner = forward_scanner or ForwardScanner()
        self.reverse_scanner = reverse_scanner or ReverseScanner()
        self.timestamp_resolver = timestamp_resolver or TimestampResolver()

    async def fetch_all_for(self, receiver: Optional[str] = None) -> List[PurchaseEvent]:
        """Full history of every network in registration order, without timestamps."""
        receiver = normalize_address(receiver) if receiver is not None else None

        results = await asyncio.gather(*(
            self._guarded(network, self._scan_all(network, receiver))
            for network in self.registry
        ))
        self._log_totals("Purchases fetched", results)

        return list(chain.from_iterable(results))

    async def fetch_latest(self, limit: Limit, receiver: Optional[str] = None) -> List[PurchaseEvent]:
        """The `limit` most recent purchases across all networks, newest first, with timestamps."""
        max_events = normalize_limit(limit)
        receiver = normalize_address(receiver) if receiver is not None else None

        results = await asyncio.gather(*(
            self._guarded(network, self._scan_latest(network, limit, receiver))
            for network in self.registry
        ))
        self._log_totals("Latest purchases fetched", results)

        events = sort_by_timestamp_desc(list(chain.from_iterable(results)))
        if max_events is not None:
            events = events[:max_events]
        return events

    async def _scan_all(self, network: NetworkConfig, receiver: Optional[str]) -> List[PurchaseEvent]:
        return await self.forward_scanner.scan(
            self.clients[network.key], network.contract_address, network, receiver
        )

    async def _scan_latest(self, network: NetworkConfig, limit: Limit,
                           receiver: Optional[str]) -> List[PurchaseEvent]:
        client = self.clients[network.key]
        events = await self.reverse_scanner.scan_latest(
            client, network.contract_address, network, limit, receiver
        )
        return await self.timestamp_resolver.attach_timestamps(client, events, network.key)

    async def _guarded(self, network: NetworkConfig,
                       pipeline: Awaitable[List[PurchaseEvent]]) -> List[PurchaseEvent]:
        try:
            return await pipeline
        except Exception as e:
            self.log_error("Error fetching purchases from network",
                           exc_info=True,
                           network=network.key,
                           chain_id=network.chain_id,
                           error=str(e),
                           exception_type=type(e).__name__)
            return []

    def _log_totals(self, message: str, results: Sequence[List[PurchaseEvent]]) -> None:
        counts = ', '.join(
            f"{network.name}: {len(events)}" for network, events in zip(self.registry, results)
        )
        self.log_info(f"{message}: {sum(len(events) for events in results)} ({counts})",
                      network_count=len(results))
