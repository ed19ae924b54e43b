# parallel/partitioning.py
"""Index range partitioning."""

from __future__ import annotations

from typing import List

from func_input.parallel.types import Partition

__all__ = ["compute_split_size", "compute_partitions", "format_partitions_summary"]


def compute_split_size(n: int, num_splits_hint: int) -> int:
    """
    Size of every partition except the last.

    Clamped to 1 when the hint exceeds ``n`` so partitioning always makes
    progress; 0 only when ``n`` is 0.
    """
    if n < 0:
        raise ValueError(f"n must be >= 0, got {n}")
    if num_splits_hint < 1:
        raise ValueError(f"num_splits_hint must be >= 1, got {num_splits_hint}")
    if n == 0:
        return 0
    return max(1, n // num_splits_hint)


def compute_partitions(n: int, num_splits_hint: int) -> List[Partition]:
    """
    Divide ``[0, n)`` into contiguous partitions for ``num_splits_hint`` workers.

    Every partition holds ``n // num_splits_hint`` indices (at least one),
    except the last, which also absorbs the remainder. The hint is a target,
    not a bound: when ``n`` is small relative to the hint every partition
    holds one index, and uneven divisions can produce more partitions than
    the hint.

    Args:
        n: Total number of indices
        num_splits_hint: Desired number of partitions

    Returns:
        Partitions in ascending ``start`` order; empty when ``n == 0``

    Example:
        >>> compute_partitions(10, 3)
        [Partition(start=0, length=3), Partition(start=3, length=3), Partition(start=6, length=4)]
        >>> compute_partitions(3, 8)
        [Partition(start=0, length=1), Partition(start=1, length=1), Partition(start=2, length=1)]
        >>> compute_partitions(0, 4)
        []
    """
    split_size = compute_split_size(n, num_splits_hint)
    if split_size == 0:
        return []

    count = n // split_size
    partitions = [Partition(start=i * split_size, length=split_size) for i in range(count - 1)]

    # Last partition takes whatever is left
    last_start = (count - 1) * split_size
    partitions.append(Partition(start=last_start, length=n - last_start))
    return partitions


def format_partitions_summary(partitions: List[Partition]) -> str:
    """
    Format a summary of partitions for display.

    Example:
        >>> print(format_partitions_summary(compute_partitions(10, 3)))
        Created 3 partitions covering 10 indices:
          [0, 3): 3
          [3, 6): 3
          [6, 10): 4
    """
    total = sum(p.length for p in partitions)
    lines = [f"Created {len(partitions)} partitions covering {total:,} indices:"]

    for p in partitions:
        lines.append(f"  [{p.start:,}, {p.end:,}): {p.length:,}")

    return "\n".join(lines)
