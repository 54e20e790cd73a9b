# purchase_indexer/types/model/purchase.py

from datetime import datetime
from typing import Optional, Tuple

import msgspec
from msgspec import Struct

from ..new import EvmAddress, EvmHash, DecimalStr


class PurchaseEvent(Struct, frozen=True, kw_only=True):
    """One confirmed stable coin purchase on a single network."""
    buyer: EvmAddress
    receiver: EvmAddress
    amount_sc: DecimalStr  # 6 decimals
    amount_bc: DecimalStr  # 18 decimals
    block_number: int
    transaction_hash: EvmHash
    chain_id: int
    network_name: str
    timestamp: Optional[datetime] = None

    @property
    def event_key(self) -> Tuple[int, EvmHash]:
        # tx hashes are only unique within one chain
        return (self.chain_id, self.transaction_hash)

    def with_timestamp(self, timestamp: datetime) -> 'PurchaseEvent':
        return msgspec.structs.replace(self, timestamp=timestamp)
