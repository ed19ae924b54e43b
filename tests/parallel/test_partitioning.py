# tests/parallel/test_partitioning.py
from __future__ import annotations

import pytest

from func_input.parallel.partitioning import (
    compute_partitions,
    compute_split_size,
    format_partitions_summary,
)
from func_input.parallel.types import Partition


def _as_tuples(parts):
    return [(p.start, p.length) for p in parts]


def test_ten_over_three_folds_remainder_into_last():
    assert _as_tuples(compute_partitions(10, 3)) == [(0, 3), (3, 3), (6, 4)]


def test_zero_elements_yield_no_partitions():
    assert compute_partitions(0, 1) == []
    assert compute_partitions(0, 16) == []
    assert compute_split_size(0, 4) == 0


def test_hint_larger_than_n_clamps_split_size_to_one():
    assert compute_split_size(3, 8) == 1
    assert _as_tuples(compute_partitions(3, 8)) == [(0, 1), (1, 1), (2, 1)]


def test_single_hint_is_one_partition():
    assert _as_tuples(compute_partitions(7, 1)) == [(0, 7)]


def test_uneven_division_may_exceed_hint():
    # split size 2 → five partitions of two; the hint is only a target
    assert _as_tuples(compute_partitions(10, 4)) == [(0, 2), (2, 2), (4, 2), (6, 2), (8, 2)]


def test_exact_division():
    assert _as_tuples(compute_partitions(12, 4)) == [(0, 3), (3, 3), (6, 3), (9, 3)]


@pytest.mark.parametrize("n", [0, 1, 2, 5, 10, 17, 100, 1001])
@pytest.mark.parametrize("hint", [1, 2, 3, 7, 64, 2000])
def test_partitions_cover_range_exactly_in_order(n, hint):
    parts = compute_partitions(n, hint)

    covered = [i for p in parts for i in p.indices()]
    assert covered == list(range(n))

    # contiguous, ascending, non-empty
    for prev, cur in zip(parts, parts[1:]):
        assert cur.start == prev.end
    assert all(p.length >= 1 for p in parts)

    if parts:
        split_size = compute_split_size(n, hint)
        assert all(p.length == split_size for p in parts[:-1])
        assert parts[-1].length == n - (len(parts) - 1) * split_size
        assert split_size <= parts[-1].length < 2 * split_size


def test_partitioning_is_deterministic():
    assert compute_partitions(12345, 17) == compute_partitions(12345, 17)


@pytest.mark.parametrize("n, hint", [(-1, 1), (10, 0), (10, -3)])
def test_invalid_arguments_raise(n, hint):
    with pytest.raises(ValueError):
        compute_partitions(n, hint)


def test_partition_helpers():
    p = Partition(start=4, length=3)
    assert p.end == 7
    assert 4 in p and 6 in p
    assert 7 not in p and 3 not in p
    assert list(p.indices()) == [4, 5, 6]


def test_format_partitions_summary():
    text = format_partitions_summary(compute_partitions(10, 3))
    assert text.splitlines() == [
        "Created 3 partitions covering 10 indices:",
        "  [0, 3): 3",
        "  [3, 6): 3",
        "  [6, 10): 4",
    ]
