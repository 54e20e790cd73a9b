# purchase_indexer/types/evm.py

from msgspec import Struct

from .new import HexStr, EvmAddress, EvmHash


class EvmLog(Struct, frozen=True):
    """Raw log entry as returned by eth_getLogs, hex values normalized to 0x strings."""
    address: EvmAddress
    blockNumber: int
    data: HexStr
    topics: list[EvmHash]
    transactionHash: EvmHash
    logIndex: int = 0
    removed: bool = False  # True when dropped by a reorg
