# purchase_indexer/types/configs/config.py

from typing import Optional

from msgspec import Struct


FORWARD_CHUNK_SIZE = 49_999
REVERSE_CHUNK_SIZE = 50_000
TIMESTAMP_BATCH_SIZE = 20


class RpcConfig(Struct, frozen=True):
    timeout: Optional[float] = None  # seconds per request, None disables the deadline

    def __post_init__(self) -> None:
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("rpc.timeout must be positive")


class ScanConfig(Struct, frozen=True):
    forward_chunk_size: int = FORWARD_CHUNK_SIZE
    reverse_chunk_size: int = REVERSE_CHUNK_SIZE
    timestamp_batch_size: int = TIMESTAMP_BATCH_SIZE

    def __post_init__(self) -> None:
        for name in ('forward_chunk_size', 'reverse_chunk_size', 'timestamp_batch_size'):
            if getattr(self, name) <= 0:
                raise ValueError(f"scan.{name} must be positive")
