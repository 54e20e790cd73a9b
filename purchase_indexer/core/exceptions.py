# purchase_indexer/core/exceptions.py

from typing import Optional


class IndexerError(Exception):
    """Base class for purchase indexer errors."""


class ConfigurationError(IndexerError):
    """Invalid or unreadable configuration. Always fatal."""


class ChainClientError(IndexerError):
    """An RPC request against a network failed."""

    def __init__(self, message: str, network: Optional[str] = None, method: Optional[str] = None):
        self.network = network
        self.method = method
        super().__init__(message)


class LogDecodeError(IndexerError):
    """A raw log entry does not have the shape of a purchase event."""

    def __init__(self, message: str, tx_hash: Optional[str] = None):
        self.tx_hash = tx_hash
        super().__init__(message)
