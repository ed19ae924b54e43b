# func_input/utils/cleanup.py
from __future__ import annotations

import logging
import shutil
import time
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


def safe_db_cleanup(
    db_path: Union[str, Path],
    max_retries: int = 3,
    delay_seconds: float = 0.5,
    backoff: float = 2.0,
) -> bool:
    """
    Remove a job-scoped RocksDB directory once nothing reads it any more.

    Behavior
    --------
    - If the path doesn't exist: returns True (idempotent no-op).
    - If the path exists but isn't a directory: raises ValueError.
    - Retries with backoff while files are still held open (e.g. a worker
      that has not exited yet); returns False when every attempt fails.
    """
    path = Path(db_path).expanduser()

    if not path.exists():
        return True
    if not path.is_dir():
        raise ValueError(f"{path!s} exists but is not a directory")

    delay = delay_seconds
    for attempt in range(1, max_retries + 1):
        try:
            shutil.rmtree(path)
            logger.info("Removed %s (attempt %d)", path, attempt)
            return True
        except OSError as exc:
            if attempt == max_retries:
                logger.error("Failed to remove %s after %d attempts: %s", path, max_retries, exc)
                return False

            logger.warning("Cleanup attempt %d/%d for %s failed: %s", attempt, max_retries, path, exc)
            time.sleep(delay)
            delay *= backoff

    return False
