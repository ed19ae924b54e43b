# io/reader.py
"""Worker-side lazy evaluation of one split."""

from __future__ import annotations

import enum
import logging
from typing import Generic, Iterator, Optional, TypeVar

from func_input.errors import FunctionEvaluationFailure, NoCurrentValue, ReaderStateError
from func_input.io.split import FunctionSplit

logger = logging.getLogger(__name__)

__all__ = ["ReaderState", "FunctionRecordReader"]

A = TypeVar("A")

_UNSET = object()


class ReaderState(enum.Enum):
    READY = "ready"
    PRODUCING = "producing"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


class FunctionRecordReader(Generic[A]):
    """
    Pull-based reader producing ``function(i)`` for each index of a split.

    The function is called exactly once per index, in ascending order, and
    only when ``next_key_value()`` is called. Nothing is buffered beyond the
    current value.

    Example:
        >>> reader = FunctionRecordReader(FunctionSplit(3, 2, lambda i: i * i))
        >>> while reader.next_key_value():
        ...     print(reader.get_current_key(), reader.get_current_value())
        3 9
        4 16
    """

    def __init__(self, split: FunctionSplit[A]):
        self.split = split
        self.initialize()

    def initialize(self, split: Optional[FunctionSplit[A]] = None) -> None:
        """Reset the cursor to the start of `split` (or the current split)."""
        if split is not None:
            self.split = split
        self._index = self.split.start
        self._end = self.split.start + self.split.length
        self._key: Optional[int] = None
        self._value = _UNSET
        self.state = ReaderState.READY

    @property
    def index(self) -> int:
        """Next index to produce."""
        return self._index

    def next_key_value(self) -> bool:
        """Produce the next value; return False once the range is exhausted."""
        if self.state is ReaderState.FAILED:
            raise ReaderStateError("reader failed on a previous call and cannot continue")

        if self._index >= self._end:
            self.state = ReaderState.EXHAUSTED
            self._key = None
            self._value = _UNSET
            return False

        ix = self._index
        try:
            value = self.split.function(ix)
        except Exception as exc:
            self.state = ReaderState.FAILED
            logger.error("Function raised at index %d: %s", ix, exc)
            raise FunctionEvaluationFailure(ix, f"Function raised at index {ix}: {exc!r}") from exc

        self._key = ix
        self._value = value
        self._index = ix + 1
        self.state = ReaderState.PRODUCING
        return True

    def get_current_key(self) -> int:
        """Index of the current value."""
        if self._key is None:
            raise NoCurrentValue(f"no current value (state={self.state.value})")
        return self._key

    def get_current_value(self) -> A:
        if self._value is _UNSET:
            raise NoCurrentValue(f"no current value (state={self.state.value})")
        return self._value  # type: ignore[return-value]

    def get_progress(self) -> float:
        length = self.split.length
        if length == 0:
            return 1.0
        return (self._index - self.split.start) / length

    def close(self) -> None:
        # Nothing to release; no external handles are held
        pass

    def __enter__(self) -> "FunctionRecordReader[A]":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __iter__(self) -> Iterator[A]:
        while self.next_key_value():
            yield self._value  # type: ignore[misc]
