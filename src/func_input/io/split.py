# io/split.py
"""
Serializable unit of work: one index range plus the generating function.

Wire format
-----------
Big-endian, fixed width::

    [start: int32][length: int32][payload_size: int32][payload: payload_size bytes]

``payload`` is the cloudpickle encoding of the function. Each split carries
its own copy so a worker can rebuild the function without contacting the
distribution cache.
"""

from __future__ import annotations

import io
import struct
from dataclasses import dataclass, field
from typing import BinaryIO, Callable, Generic, List, TypeVar

import cloudpickle

from func_input.errors import CorruptDescriptor
from func_input.parallel.types import Partition

__all__ = ["FunctionSplit", "HEADER", "INT32_MAX"]

A = TypeVar("A")

_INT = struct.Struct(">i")
HEADER = struct.Struct(">ii")
INT32_MAX = 2**31 - 1


@dataclass(frozen=True)
class FunctionSplit(Generic[A]):
    """A range of values produced by ``function``."""

    start: int
    length: int
    function: Callable[[int], A] = field(compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.start < 0 or self.length < 0:
            raise ValueError(f"start and length must be >= 0, got ({self.start}, {self.length})")
        if self.start + self.length > INT32_MAX:
            raise ValueError(f"range end {self.start + self.length} does not fit in int32")

    @classmethod
    def for_partition(cls, partition: Partition, function: Callable[[int], A]) -> "FunctionSplit[A]":
        return cls(partition.start, partition.length, function)

    @property
    def end(self) -> int:
        return self.start + self.length

    def partition(self) -> Partition:
        return Partition(self.start, self.length)

    def get_length(self) -> int:
        return self.length

    def get_locations(self) -> List[str]:
        # Values are synthesized, so there is no data locality to report
        return []

    # --- encoding ---------------------------------------------------------- #

    def write(self, out: BinaryIO) -> None:
        payload = cloudpickle.dumps(self.function)
        out.write(HEADER.pack(self.start, self.length))
        out.write(_INT.pack(len(payload)))
        out.write(payload)

    def encode(self) -> bytes:
        buf = io.BytesIO()
        self.write(buf)
        return buf.getvalue()

    # --- decoding ---------------------------------------------------------- #

    @classmethod
    def read_from(cls, stream: BinaryIO) -> "FunctionSplit":
        """Read exactly one split from `stream`, leaving any following bytes unread."""
        start, length = HEADER.unpack(_read_fully(stream, HEADER.size, "header"))
        (size,) = _INT.unpack(_read_fully(stream, _INT.size, "payload size"))
        if size < 0:
            raise CorruptDescriptor(f"negative payload size {size}")

        payload = _read_fully(stream, size, "function payload")
        try:
            function = cloudpickle.loads(payload)
        except Exception as exc:
            raise CorruptDescriptor(f"function payload could not be reconstructed: {exc}") from exc
        if not callable(function):
            raise CorruptDescriptor(f"function payload decoded to {type(function).__name__}, not a callable")

        try:
            return cls(start, length, function)
        except ValueError as exc:
            raise CorruptDescriptor(str(exc)) from exc

    @classmethod
    def decode(cls, data: bytes) -> "FunctionSplit":
        """
        Inverse of ``encode``.

        Raises
        ------
        CorruptDescriptor
            Truncated input, trailing bytes, invalid fields, or a payload that
            cannot be unpickled.
        """
        stream = io.BytesIO(data)
        split = cls.read_from(stream)
        trailing = len(data) - stream.tell()
        if trailing:
            raise CorruptDescriptor(f"{trailing} unexpected trailing bytes")
        return split


def _read_fully(stream: BinaryIO, size: int, what: str) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise CorruptDescriptor(f"truncated {what}: expected {size} bytes, got {len(data)}")
    return data
