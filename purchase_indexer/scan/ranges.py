# purchase_indexer/scan/ranges.py
"""
Block range arithmetic for chunked log scans.

Both generators walk an inclusive window [start_block, height] and yield
inclusive (from_block, to_block) chunks that cover it exactly once. The
chunk size is the offset between the two bounds of a chunk, so a chunk
holds at most chunk_size + 1 blocks.
"""

from typing import Iterator, Tuple


BlockRange = Tuple[int, int]


def forward_ranges(start_block: int, height: int, chunk_size: int) -> Iterator[BlockRange]:
    """Oldest chunk first. Nothing is yielded when height < start_block."""
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    from_block = start_block
    while from_block <= height:
        to_block = min(from_block + chunk_size, height)
        yield from_block, to_block
        from_block = to_block + 1


def reverse_ranges(start_block: int, height: int, chunk_size: int) -> Iterator[BlockRange]:
    """Newest chunk first, ending with the chunk that touches start_block."""
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    to_block = height
    while to_block >= start_block:
        from_block = max(to_block - chunk_size, start_block)
        yield from_block, to_block
        if from_block <= start_block:
            break
        to_block = from_block - 1
