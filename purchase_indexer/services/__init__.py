from .aggregator import PurchaseAggregator, compare_by_timestamp_desc, sort_by_timestamp_desc
