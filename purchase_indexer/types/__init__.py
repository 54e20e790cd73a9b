# purchase_indexer/types/__init__.py

from .new import (
    HexStr,
    EvmAddress,
    EvmHash,
    DecimalStr,
    Limit,
    ALL,
)

# EVM Types
from .evm import EvmLog

# Configuration Types
from .configs.config import (
    RpcConfig,
    ScanConfig,
    FORWARD_CHUNK_SIZE,
    REVERSE_CHUNK_SIZE,
    TIMESTAMP_BATCH_SIZE,
)
from .configs.network import NetworkConfig

# Model Types
from .model.purchase import PurchaseEvent
