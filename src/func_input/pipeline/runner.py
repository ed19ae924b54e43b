# func_input/pipeline/runner.py
from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Type

from tqdm import tqdm

from func_input.config import NUM_SPLITS_HINT_PROPERTY, JobConf, RunnerConfig
from func_input.db.dist_cache import DistCache, memory_dist_cache, open_dist_cache
from func_input.ids import UniqueIdAllocator
from func_input.pipeline.report import print_run_summary
from func_input.pipeline.worker import read_split
from func_input.source import FunctionSource, build
from func_input.utils.cleanup import safe_db_cleanup

logger = logging.getLogger(__name__)

__all__ = ["run_source", "collect"]


def run_source(
    source: FunctionSource,
    conf: JobConf,
    cache: DistCache,
    *,
    executor_class: Type = ProcessPoolExecutor,  # or ThreadPoolExecutor
    workers: int = 4,
    show_progress: bool = True,
) -> List[Any]:
    """
    Plan splits for a configured source and read them on a worker pool.

    Each split is encoded before submission, so workers receive the function
    through the split bytes exactly as a remote worker would.

    Returns
    -------
    list
        All values in index order.

    Notes
    -----
    - The first failing split stops the run: pending splits are cancelled and
      its exception is re-raised unchanged. Retrying is left to the caller.
    """
    splits = source.input_format.get_splits(conf, cache)
    if not splits:
        logger.info("Source %d is empty; nothing to run", source.id)
        return []

    encoded = [split.encode() for split in splits]
    in_thread = executor_class is ThreadPoolExecutor
    results: Dict[int, List[Any]] = {}

    with tqdm(total=len(encoded), desc="Reading Splits", unit="splits",
              colour="blue", disable=not show_progress) as pbar:
        with executor_class(max_workers=workers) as executor:
            futures = {
                executor.submit(read_split, data, idx, set_title=not in_thread): idx
                for idx, data in enumerate(encoded, start=1)
            }

            for fut in as_completed(futures):
                idx = futures[fut]
                try:
                    start, values = fut.result()
                except Exception:
                    logger.error("Split %d of %d failed; cancelling the rest", idx, len(encoded))
                    for other in futures:
                        other.cancel()
                    raise
                results[start] = values
                pbar.update(1)

    out: List[Any] = []
    for start in sorted(results):
        out.extend(results[start])
    logger.info("Read %s values from %d splits", f"{len(out):,}", len(results))
    return out


def collect(
    n: int,
    function: Callable[[int], Any],
    config: Optional[RunnerConfig] = None,
    *,
    ids: Optional[UniqueIdAllocator] = None,
) -> List[Any]:
    """
    Build a function source for ``function(0) .. function(n - 1)`` and read it.

    Process
    -------
    1. Open the distribution cache (RocksDB at ``config.cache_path`` or memory)
    2. Publish the source to a fresh job configuration
    3. Plan splits and read them on the pool
    4. Unpublish the function and close (optionally remove) the cache
    """
    config = config or RunnerConfig()
    start_time = datetime.now()

    conf = JobConf()
    conf.set_int(NUM_SPLITS_HINT_PROPERTY, config.splits_hint())

    if config.cache_path is not None:
        cache = open_dist_cache(config.cache_path)
    else:
        cache = memory_dist_cache()

    executor_class: Type = ThreadPoolExecutor if config.use_threads else ProcessPoolExecutor
    executor_name = "threads" if config.use_threads else "processes"

    source = None
    try:
        source = build(n, function, conf, cache, ids=ids)

        if config.print_summary:
            print_run_summary(
                source_id=source.id,
                n=n,
                num_splits_hint=config.splits_hint(),
                partitions=source.partitions(),
                cache_location=cache.location,
                workers=config.num_workers,
                executor_name=executor_name,
                start_time=start_time,
            )

        return run_source(
            source,
            conf,
            cache,
            executor_class=executor_class,
            workers=config.num_workers,
            show_progress=config.show_progress,
        )
    finally:
        if source is not None:
            cache.remove(source.function_key)
        cache.close()
        if config.cache_path is not None and config.cleanup_cache:
            if not safe_db_cleanup(config.cache_path):
                logger.warning("Could not remove distribution cache at %s", config.cache_path)
