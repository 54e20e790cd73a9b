# tests/test_ranges.py
"""
Chunk boundary arithmetic for forward and reverse scans
"""

import pytest

from purchase_indexer.scan.ranges import forward_ranges, reverse_ranges


def assert_exact_cover(ranges, start_block, height):
    ordered = sorted(ranges)
    assert ordered[0][0] == start_block
    assert ordered[-1][1] == height
    for (_, previous_end), (next_start, _) in zip(ordered, ordered[1:]):
        assert next_start == previous_end + 1
    for from_block, to_block in ordered:
        assert from_block <= to_block


def test_forward_ranges_respect_provider_window():
    ranges = list(forward_ranges(0, 120_000, 49_999))

    assert ranges == [(0, 49_999), (50_000, 99_999), (100_000, 120_000)]
    assert all(to_block - from_block + 1 <= 50_000 for from_block, to_block in ranges)


def test_reverse_ranges_walk_back_from_head():
    ranges = list(reverse_ranges(0, 120_000, 50_000))

    assert ranges == [(70_000, 120_000), (19_999, 69_999), (0, 19_998)]


@pytest.mark.parametrize("start_block,height,chunk_size", [
    (0, 0, 10),
    (5, 5, 10),
    (100, 1_000, 1),
    (100, 1_000, 899),
    (100, 1_000, 900),
    (100, 1_000, 901),
    (4_000_000, 4_250_123, 49_999),
    (4_000_000, 4_250_123, 50_000),
])
def test_ranges_cover_window_without_gaps_or_overlaps(start_block, height, chunk_size):
    assert_exact_cover(list(forward_ranges(start_block, height, chunk_size)), start_block, height)
    assert_exact_cover(list(reverse_ranges(start_block, height, chunk_size)), start_block, height)


def test_forward_ranges_are_ascending_and_reverse_descending():
    forward = list(forward_ranges(10, 500, 49))
    reverse = list(reverse_ranges(10, 500, 49))

    assert forward == sorted(forward)
    assert reverse == sorted(reverse, reverse=True)


def test_single_block_window():
    assert list(forward_ranges(42, 42, 49_999)) == [(42, 42)]
    assert list(reverse_ranges(42, 42, 50_000)) == [(42, 42)]


def test_head_below_deployment_block_yields_nothing():
    assert list(forward_ranges(1_000, 999, 49_999)) == []
    assert list(reverse_ranges(1_000, 999, 50_000)) == []


def test_chunk_size_must_be_positive():
    with pytest.raises(ValueError):
        list(forward_ranges(0, 10, 0))
    with pytest.raises(ValueError):
        list(reverse_ranges(0, 10, -1))
