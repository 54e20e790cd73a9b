# purchase_indexer/types/new.py

from typing import NewType, Literal, Union


HexStr = NewType('HexStr', str)
EvmAddress = NewType('EvmAddress', str)  # lowercase, 0x-prefixed, 20 bytes
EvmHash = NewType('EvmHash', str)  # 0x-prefixed, 32 bytes
DecimalStr = NewType('DecimalStr', str)

ALL = "all"
Limit = Union[int, Literal["all"]]
