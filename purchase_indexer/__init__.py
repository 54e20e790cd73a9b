# purchase_indexer/__init__.py

import logging
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from .core.config import IndexerConfig
from .core.exceptions import (
    ChainClientError,
    ConfigurationError,
    IndexerError,
    LogDecodeError,
)
from .core.logging import IndexerLogger, log_with_context
from .core.registry import NetworkRegistry
from .clients.interfaces import ChainClientInterface
from .clients.web3_rpc import Web3RpcClient
from .scan import ForwardScanner, ReverseScanner, TimestampResolver
from .services.aggregator import PurchaseAggregator
from .types import PurchaseEvent


__version__ = "0.1.0"


def create_aggregator(config: Optional[IndexerConfig] = None,
                      config_path: Optional[Union[str, Path]] = None,
                      clients: Optional[Mapping[str, ChainClientInterface]] = None) -> PurchaseAggregator:
    """
    Build an aggregator over every network in the configuration.

    Networks without an entry in `clients` get a Web3RpcClient for their
    configured endpoint.
    """
    if config is None:
        config = IndexerConfig.from_file(config_path)

    logger = IndexerLogger.get_logger('core.init')
    registry = config.registry()

    chain_clients: Dict[str, ChainClientInterface] = dict(clients or {})
    for network in registry:
        if network.key not in chain_clients:
            chain_clients[network.key] = Web3RpcClient(network, timeout=config.rpc.timeout)

    aggregator = PurchaseAggregator(
        registry,
        chain_clients,
        forward_scanner=ForwardScanner(chunk_size=config.scan.forward_chunk_size),
        reverse_scanner=ReverseScanner(chunk_size=config.scan.reverse_chunk_size),
        timestamp_resolver=TimestampResolver(batch_size=config.scan.timestamp_batch_size),
    )

    log_with_context(logger, logging.INFO, "Purchase aggregator created",
                     network_count=len(registry))
    return aggregator
