# func_input/pipeline/report.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence

from func_input.parallel.types import Partition

logger = logging.getLogger(__name__)


def _abbrev(s: str, width: int = 96) -> str:
    """Return s truncated with an ellipsis if it exceeds width."""
    return s if len(s) <= width else (s[: max(0, width - 1)] + "…")


def format_run_summary(
    *,
    source_id: int,
    n: int,
    num_splits_hint: int,
    partitions: Sequence[Partition],
    cache_location: str,
    workers: int,
    executor_name: str,
    start_time: datetime,
    color: bool = True,
) -> str:
    """
    Build a formatted, human-readable summary of the planned run.
    """
    heading = f"Start Time: {start_time:%Y-%m-%d %H:%M:%S}"
    if color:
        heading = f"\033[31m{heading}\033[0m"

    if partitions:
        sizes = [p.length for p in partitions]
        size_line = f"{min(sizes):,} to {max(sizes):,}"
    else:
        size_line = "n/a"

    lines = [
        heading,
        ("\033[4mFunction Source Configuration\033[0m" if color
         else "Function Source Configuration"),
        f"Source id:                  {source_id}",
        f"Element count:              {n:,}",
        f"Split hint:                 {num_splits_hint}",
        f"Partitions:                 {len(partitions)}",
        f"Partition sizes:            {size_line}",
        f"Distribution cache:         {_abbrev(cache_location)}",
        f"Worker processes/threads:   {workers} ({executor_name})",
    ]
    return "\n".join(lines) + "\n"


def print_run_summary(**kwargs) -> None:
    """Print the run summary to stdout (CLI usage)."""
    print(format_run_summary(**kwargs), end="")


def log_run_summary(*, color: bool = False, **kwargs) -> None:
    """Log the run summary at INFO level (pipelines using logging)."""
    summary = format_run_summary(color=color, **kwargs)
    for line in summary.rstrip("\n").splitlines():
        logger.info(line)
