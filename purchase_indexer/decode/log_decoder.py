# purchase_indexer/decode/log_decoder.py

from hexbytes import HexBytes
from web3 import Web3

from ..core.exceptions import LogDecodeError
from ..core.logging import LoggingMixin
from ..types import EvmLog, NetworkConfig, PurchaseEvent
from ..utils.amounts import BASE_COIN_DECIMALS, STABLE_COIN_DECIMALS, format_units
from .events import PURCHASE_DATA_TYPES, PURCHASE_EVENT_TOPIC, topic_to_address


class PurchaseLogDecoder(LoggingMixin):
    """Maps raw purchase logs onto PurchaseEvent values. Holds no state between calls."""

    def __init__(self):
        self.codec = Web3().codec

    def decode(self, log: EvmLog, network: NetworkConfig) -> PurchaseEvent:
        if len(log.topics) < 3:
            raise LogDecodeError(
                f"Expected 3 topics, got {len(log.topics)}", tx_hash=log.transactionHash
            )
        if log.topics[0].lower() != PURCHASE_EVENT_TOPIC:
            raise LogDecodeError(
                f"Unexpected event signature {log.topics[0]}", tx_hash=log.transactionHash
            )

        try:
            buyer = topic_to_address(log.topics[1])
            receiver = topic_to_address(log.topics[2])
            amount_sc, amount_bc = self.codec.decode(PURCHASE_DATA_TYPES, HexBytes(log.data))
        except Exception as e:
            raise LogDecodeError(
                f"Malformed purchase log: {e}", tx_hash=log.transactionHash
            ) from e

        return PurchaseEvent(
            buyer=buyer,
            receiver=receiver,
            amount_sc=format_units(amount_sc, STABLE_COIN_DECIMALS),
            amount_bc=format_units(amount_bc, BASE_COIN_DECIMALS),
            block_number=log.blockNumber,
            transaction_hash=log.transactionHash.lower(),
            chain_id=network.chain_id,
            network_name=network.name,
        )
