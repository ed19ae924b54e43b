# func_input/source.py
"""
Data source whose elements are generated by a function of their index.

Lifecycle
---------
1. Submission: ``from_function`` allocates an instance id; ``input_configure``
   writes ``n`` and the id to the job configuration and publishes the function
   to the distribution cache under ``func_input.function.f<id>``.
2. Planning: ``FunctionInputFormat.get_splits`` reads those properties back,
   pulls the function once and builds one ``FunctionSplit`` per partition.
3. Execution: each worker decodes its split and drives a
   ``FunctionRecordReader`` over it.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, Iterator, List, Optional, Protocol, Sequence, TypeVar, runtime_checkable

from func_input.config import (
    ID_PROPERTY,
    LENGTH_PROPERTY,
    NUM_SPLITS_HINT_PROPERTY,
    JobConf,
    function_property,
)
from func_input.db.dist_cache import DistCache
from func_input.ids import UniqueIdAllocator, default_allocator
from func_input.io.reader import FunctionRecordReader
from func_input.io.split import INT32_MAX, FunctionSplit
from func_input.parallel.partitioning import compute_partitions, compute_split_size
from func_input.parallel.types import Partition

logger = logging.getLogger(__name__)

__all__ = [
    "PartitionedSource",
    "FunctionInputFormat",
    "FunctionSource",
    "from_function",
    "build",
]

A = TypeVar("A")


@runtime_checkable
class PartitionedSource(Protocol[A]):
    """What a batch host needs from a source: its partitions and a way to read one."""

    def partitions(self) -> Sequence[Partition]:
        ...

    def iterate(self, partition: Partition) -> Iterator[A]:
        ...


class FunctionInputFormat(Generic[A]):
    """Plans splits for function sources and creates their readers.

    Stateless; one instance serves every function source in a job, told apart
    by the instance id in the job configuration.
    """

    def get_splits(self, conf: JobConf, cache: DistCache) -> List[FunctionSplit[A]]:
        n = conf.get_int(LENGTH_PROPERTY, 0)
        source_id = conf.get_int(ID_PROPERTY, 0)
        num_splits_hint = conf.get_int(NUM_SPLITS_HINT_PROPERTY, 1)

        logger.debug("id=%d", source_id)
        logger.debug("n=%d", n)
        logger.debug("numSplitsHint=%d", num_splits_hint)
        logger.debug("splitSize=%d", compute_split_size(n, num_splits_hint))

        partitions = compute_partitions(n, num_splits_hint)
        if not partitions:
            return []

        # One pull per planning call; every split references the same function
        function = cache.pull_object(conf, function_property(source_id))
        splits = [FunctionSplit.for_partition(p, function) for p in partitions]
        logger.info("Source %d: %d splits for n=%s", source_id, len(splits), f"{n:,}")
        return splits

    def create_record_reader(self, split: FunctionSplit[A]) -> FunctionRecordReader[A]:
        return FunctionRecordReader(split)


class FunctionSource(Generic[A]):
    """A virtual collection of ``n`` values, ``function(0) .. function(n - 1)``."""

    input_format = FunctionInputFormat()

    def __init__(self, n: int, function: Callable[[int], A], source_id: int, num_splits_hint: int = 1):
        if n < 0:
            raise ValueError(f"n must be >= 0, got {n}")
        if n > INT32_MAX:
            raise ValueError(f"n must fit in int32, got {n}")
        if not callable(function):
            raise TypeError(f"function must be callable, got {type(function).__name__}")
        self.n = n
        self.function = function
        self.id = source_id
        self.num_splits_hint = num_splits_hint

    @property
    def function_key(self) -> str:
        return function_property(self.id)

    def input_check(self) -> None:
        # Nothing to verify: there is no input location that could be missing
        pass

    def input_configure(self, conf: JobConf, cache: DistCache) -> None:
        """Publish this source's settings and function for the planner and workers."""
        conf.set_int(LENGTH_PROPERTY, self.n)
        conf.set_int(ID_PROPERTY, self.id)
        cache.push_object(conf, self.function, self.function_key)

    def input_size(self) -> int:
        """Exact number of elements."""
        return self.n

    def input_converter(self, key: int, value: A) -> A:
        return value

    # --- PartitionedSource ------------------------------------------------- #

    def partitions(self) -> List[Partition]:
        return compute_partitions(self.n, self.num_splits_hint)

    def iterate(self, partition: Partition) -> Iterator[A]:
        if partition.start < 0 or partition.end > self.n:
            raise ValueError(f"partition [{partition.start}, {partition.end}) is outside [0, {self.n})")
        reader = FunctionRecordReader(FunctionSplit.for_partition(partition, self.function))
        with reader:
            yield from reader

    def __repr__(self) -> str:
        return f"FunctionSource(id={self.id}, n={self.n})"


def from_function(
    n: int,
    function: Callable[[int], A],
    *,
    ids: Optional[UniqueIdAllocator] = None,
    num_splits_hint: int = 1,
) -> FunctionSource[A]:
    """
    Create a source of ``n`` elements where element ``i`` is ``function(i)``.

    `function` must be picklable by cloudpickle (closures and lambdas are
    fine) and should be pure: workers may evaluate it in other processes.
    """
    source_id = (ids if ids is not None else default_allocator).next()
    source = FunctionSource(n, function, source_id, num_splits_hint=num_splits_hint)
    logger.debug("Created %r", source)
    return source


def build(
    n: int,
    function: Callable[[int], A],
    conf: JobConf,
    cache: DistCache,
    *,
    ids: Optional[UniqueIdAllocator] = None,
) -> FunctionSource[A]:
    """Create a function source and publish it to `conf` and `cache` in one step."""
    source = from_function(
        n,
        function,
        ids=ids,
        num_splits_hint=conf.get_int(NUM_SPLITS_HINT_PROPERTY, 1),
    )
    source.input_check()
    source.input_configure(conf, cache)
    return source
