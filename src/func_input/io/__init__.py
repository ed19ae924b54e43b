# io/__init__.py
"""Split encoding and worker-side reading."""

from .split import FunctionSplit
from .reader import FunctionRecordReader, ReaderState

__all__ = ["FunctionSplit", "FunctionRecordReader", "ReaderState"]
