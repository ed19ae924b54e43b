# parallel/types.py
"""Shared types for partitioning the index space."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Partition"]


@dataclass(frozen=True)
class Partition:
    """A contiguous half-open index range ``[start, start + length)``."""

    start: int
    """First index in the range"""

    length: int
    """Number of indices in the range"""

    @property
    def end(self) -> int:
        """Exclusive end of the range"""
        return self.start + self.length

    def __contains__(self, index: int) -> bool:
        return self.start <= index < self.end

    def indices(self) -> range:
        return range(self.start, self.end)
