# func_input/pipeline/worker.py
from __future__ import annotations

import logging
import os
from typing import Any, List, Tuple

from setproctitle import setproctitle

from func_input.io.reader import FunctionRecordReader
from func_input.io.split import FunctionSplit

logger = logging.getLogger(__name__)

DEFAULT_PROGRESS_EVERY = 100_000  # values between progress log lines

__all__ = ["DEFAULT_PROGRESS_EVERY", "read_split"]


def read_split(
    encoded_split: bytes,
    worker_id: int,
    *,
    progress_every: int = DEFAULT_PROGRESS_EVERY,
    set_title: bool = True,
) -> Tuple[int, List[Any]]:
    """
    Decode one split and evaluate its function over the whole range.

    Runs inside a pool worker: the split arrives as bytes and the function is
    rebuilt from the payload embedded in them.

    Returns
    -------
    (start, values)
        ``start`` lets the caller put results back in index order.

    Raises
    ------
    CorruptDescriptor
        `encoded_split` could not be decoded.
    FunctionEvaluationFailure
        The function raised; no partial result is returned.
    """
    if set_title:
        setproctitle(f"func_input:worker-{worker_id}")

    split = FunctionSplit.decode(encoded_split)
    pid = os.getpid()
    logger.info(
        "Worker %s (PID %s): reading [%s, %s)",
        worker_id,
        pid,
        f"{split.start:,}",
        f"{split.end:,}",
    )

    values: List[Any] = []
    with FunctionRecordReader(split) as reader:
        while reader.next_key_value():
            values.append(reader.get_current_value())
            if progress_every and len(values) % progress_every == 0:
                logger.debug(
                    "Worker %s: %.1f%% of [%s, %s)",
                    worker_id,
                    100.0 * reader.get_progress(),
                    split.start,
                    split.end,
                )

    logger.info("Worker %s: produced %s values", worker_id, f"{len(values):,}")
    return split.start, values
