"""
Distributed collections generated from a function of the element index.

Main entry points:
    from_function() / build() - create (and publish) a function source
    collect()                 - read a function source on a local worker pool

Key components:
    - parallel: index range partitioning
    - io: split encoding and the lazy record reader
    - db: distribution cache for published functions
    - pipeline: worker, runner, logging and run summaries
"""

from func_input.config import JobConf, RunnerConfig
from func_input.errors import (
    CorruptDescriptor,
    FuncInputError,
    FunctionEvaluationFailure,
    KeyNotFound,
    NoCurrentValue,
)
from func_input.ids import UniqueIdAllocator
from func_input.source import FunctionInputFormat, FunctionSource, PartitionedSource, build, from_function
from func_input.pipeline.runner import collect

__all__ = [
    "JobConf",
    "RunnerConfig",
    "UniqueIdAllocator",
    "FunctionSource",
    "FunctionInputFormat",
    "PartitionedSource",
    "from_function",
    "build",
    "collect",
    # Errors
    "FuncInputError",
    "CorruptDescriptor",
    "KeyNotFound",
    "FunctionEvaluationFailure",
    "NoCurrentValue",
]
