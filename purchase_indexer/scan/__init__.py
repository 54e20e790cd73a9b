from .ranges import forward_ranges, reverse_ranges
from .base import normalize_limit
from .forward import ForwardScanner
from .reverse import ReverseScanner
from .timestamps import TimestampResolver
