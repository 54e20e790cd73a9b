# purchase_indexer/decode/events.py

from typing import Optional

from web3 import Web3
from eth_utils import event_abi_to_log_topic, is_hex_address

from ..types import EvmAddress, EvmHash


PURCHASE_EVENT_NAME = "BoughtStableCoins"
PURCHASE_EVENT_SIGNATURE = f"{PURCHASE_EVENT_NAME}(address,address,uint256,uint256)"

PURCHASE_EVENT_ABI = {
    "type": "event",
    "name": PURCHASE_EVENT_NAME,
    "anonymous": False,
    "inputs": [
        {"name": "buyer", "type": "address", "indexed": True},
        {"name": "receiver", "type": "address", "indexed": True},
        {"name": "amountSC", "type": "uint256", "indexed": False},
        {"name": "amountBC", "type": "uint256", "indexed": False},
    ],
}

PURCHASE_EVENT_TOPIC: EvmHash = Web3.to_hex(event_abi_to_log_topic(PURCHASE_EVENT_ABI))

# non-indexed fields, in data order
PURCHASE_DATA_TYPES = [
    item["type"] for item in PURCHASE_EVENT_ABI["inputs"] if not item["indexed"]
]

TOPIC_HEX_LENGTH = 64
ADDRESS_HEX_LENGTH = 40


def topic_to_address(topic: str) -> EvmAddress:
    """Keep the low 20 bytes of an indexed address topic, lowercased."""
    word = topic[2:] if topic.startswith(("0x", "0X")) else topic
    if len(word) != TOPIC_HEX_LENGTH:
        raise ValueError(f"Topic must be a 32-byte word: {topic}")
    return EvmAddress(f"0x{word[-ADDRESS_HEX_LENGTH:].lower()}")


def normalize_address(address: str) -> EvmAddress:
    if not is_hex_address(address):
        raise ValueError(f"Invalid address: {address}")
    return EvmAddress(address.lower())


def address_to_topic(address: str) -> EvmHash:
    """Left-pad an address to the 32-byte word used in topic filters."""
    address = normalize_address(address)
    return EvmHash(f"0x{address[2:].rjust(TOPIC_HEX_LENGTH, '0')}")


def purchase_topic_filter(receiver: Optional[str] = None) -> list:
    """Topic filter for purchase logs, optionally pinned to one receiver."""
    if receiver is None:
        return [PURCHASE_EVENT_TOPIC]
    return [PURCHASE_EVENT_TOPIC, None, address_to_topic(receiver)]
