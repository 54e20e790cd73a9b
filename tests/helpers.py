# tests/helpers.py
"""
Common test utilities: an in-memory chain client and log builders.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Sequence

from purchase_indexer.clients.interfaces import ChainClientInterface
from purchase_indexer.core.exceptions import ChainClientError
from purchase_indexer.decode.events import PURCHASE_EVENT_TOPIC, address_to_topic
from purchase_indexer.types import EvmLog, NetworkConfig


EPOCH = datetime(2025, 1, 1, tzinfo=timezone.utc)

BUYER = "0x1111111111111111111111111111111111111111"
MERCHANT = "0x2222222222222222222222222222222222222222"
OTHER_MERCHANT = "0x3333333333333333333333333333333333333333"
CONTRACT = "0x9999999999999999999999999999999999999999"


def make_network(key: str = "sepolia", chain_id: int = 11155111,
                 deployment_block: int = 0, name: Optional[str] = None) -> NetworkConfig:
    return NetworkConfig(
        key=key,
        chain_id=chain_id,
        name=name or key.title(),
        rpc_url=f"https://rpc.{key}.example",
        explorer_url=f"https://explorer.{key}.example",
        contract_address=CONTRACT,
        deployment_block=deployment_block,
    )


def make_log(block_number: int,
             buyer: str = BUYER,
             receiver: str = MERCHANT,
             amount_sc: int = 1_000_000,
             amount_bc: int = 10 ** 18,
             log_index: int = 0,
             tx_hash: Optional[str] = None) -> EvmLog:
    return EvmLog(
        address=CONTRACT,
        blockNumber=block_number,
        data=f"0x{amount_sc:064x}{amount_bc:064x}",
        topics=[PURCHASE_EVENT_TOPIC, address_to_topic(buyer), address_to_topic(receiver)],
        transactionHash=tx_hash or f"0x{block_number:060x}{log_index:04x}",
        logIndex=log_index,
    )


def timestamp_for(block_number: int, offset_seconds: int = 0) -> datetime:
    return EPOCH + timedelta(seconds=block_number * 10 + offset_seconds)


def topics_match(log_topics: Sequence[str], topic_filter: Sequence[Optional[str]]) -> bool:
    for position, expected in enumerate(topic_filter):
        if expected is None:
            continue
        if position >= len(log_topics) or log_topics[position].lower() != expected.lower():
            return False
    return True


class FakeChainClient(ChainClientInterface):
    """In-memory network that records every request it serves."""

    def __init__(self,
                 height: int,
                 logs: Iterable[EvmLog] = (),
                 timestamps: Optional[Dict[int, datetime]] = None,
                 timestamp_offset: int = 0,
                 fail_logs: bool = False,
                 fail_height: bool = False,
                 fail_blocks: Iterable[int] = ()):
        self.height = height
        self.logs = list(logs)
        self.timestamps = timestamps or {}
        self.timestamp_offset = timestamp_offset
        self.fail_logs = fail_logs
        self.fail_height = fail_height
        self.fail_blocks = set(fail_blocks)

        self.height_queries = 0
        self.log_queries: List[tuple] = []
        self.timestamp_queries: List[int] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def get_latest_block_number(self) -> int:
        self.height_queries += 1
        if self.fail_height:
            raise ChainClientError("node unreachable", network="fake", method="eth_blockNumber")
        return self.height

    async def get_logs(self, address, topics, from_block, to_block) -> List[EvmLog]:
        self.log_queries.append((from_block, to_block, list(topics)))
        if self.fail_logs:
            raise ChainClientError("eth_getLogs failed", network="fake", method="eth_getLogs")
        return [
            log for log in self.logs
            if from_block <= log.blockNumber <= to_block and topics_match(log.topics, topics)
        ]

    async def get_block_timestamp(self, block_number: int) -> datetime:
        self.timestamp_queries.append(block_number)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            if block_number in self.fail_blocks:
                raise ChainClientError("block not found", network="fake", method="eth_getBlockByNumber")
            if block_number in self.timestamps:
                return self.timestamps[block_number]
            return timestamp_for(block_number, self.timestamp_offset)
        finally:
            self.in_flight -= 1

    @property
    def queried_ranges(self) -> List[tuple]:
        return [(from_block, to_block) for from_block, to_block, _ in self.log_queries]
