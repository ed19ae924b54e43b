# func_input/errors.py
"""Exception types raised by the function-backed input source."""

from __future__ import annotations

__all__ = [
    "FuncInputError",
    "CorruptDescriptor",
    "KeyNotFound",
    "ObjectDecodeError",
    "FunctionEvaluationFailure",
    "NoCurrentValue",
    "ReaderStateError",
]


class FuncInputError(Exception):
    """Base class for all func_input errors."""


class CorruptDescriptor(FuncInputError):
    """Encoded split bytes are truncated or malformed."""


class KeyNotFound(FuncInputError, KeyError):
    """The distribution cache has no entry for the requested key."""

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"No object published under key {self.key!r}"


class ObjectDecodeError(FuncInputError):
    """A published object could not be deserialized."""


class FunctionEvaluationFailure(FuncInputError):
    """The generating function raised while producing a value.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, index: int, message: str = ""):
        self.index = index
        super().__init__(message or f"Function raised at index {index}")


class NoCurrentValue(FuncInputError):
    """No value has been produced (or the range is exhausted)."""


class ReaderStateError(FuncInputError):
    """A record reader was driven after a propagated failure."""
