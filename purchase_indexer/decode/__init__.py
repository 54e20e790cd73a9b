from .events import (
    PURCHASE_EVENT_ABI,
    PURCHASE_EVENT_SIGNATURE,
    PURCHASE_EVENT_TOPIC,
    address_to_topic,
    normalize_address,
    purchase_topic_filter,
    topic_to_address,
)
from .log_decoder import PurchaseLogDecoder
