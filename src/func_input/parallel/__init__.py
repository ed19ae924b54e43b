"""Index range partitioning for parallel reads."""

from .types import Partition
from .partitioning import compute_partitions, compute_split_size, format_partitions_summary

__all__ = [
    "Partition",
    "compute_partitions",
    "compute_split_size",
    "format_partitions_summary",
]
