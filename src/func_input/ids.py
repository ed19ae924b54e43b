# func_input/ids.py
"""Process-local unique ids for function source instances."""

from __future__ import annotations

import threading

__all__ = ["UniqueIdAllocator", "default_allocator"]


class UniqueIdAllocator:
    """
    Hands out monotonically increasing integers, safe under concurrent calls.

    Several function sources can share one job configuration; each needs its
    own id so their published functions land under different cache keys.
    Create one allocator per planning context and pass it to every
    ``from_function`` call made in that context.

    Example:
        >>> ids = UniqueIdAllocator()
        >>> ids.next(), ids.next()
        (0, 1)
    """

    def __init__(self, start: int = 0):
        self._next = start
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            value = self._next
            self._next += 1
        return value

    def peek(self) -> int:
        """Return the id the next call to ``next()`` will hand out."""
        with self._lock:
            return self._next


# Used only when a caller does not pass its own allocator.
default_allocator = UniqueIdAllocator()
