# func_input/config.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

__all__ = [
    "PROPERTY_PREFIX",
    "LENGTH_PROPERTY",
    "ID_PROPERTY",
    "NUM_SPLITS_HINT_PROPERTY",
    "function_property",
    "JobConf",
    "RunnerConfig",
]

# Private namespace for the function source's job properties
PROPERTY_PREFIX = "func_input.function"
LENGTH_PROPERTY = PROPERTY_PREFIX + ".n"
ID_PROPERTY = PROPERTY_PREFIX + ".id"

# Ambient parallelism hint; owned by the job, not by the source
NUM_SPLITS_HINT_PROPERTY = "job.map.tasks"


def function_property(source_id: int) -> str:
    """Cache key under which the function of source ``source_id`` is published."""
    return f"{PROPERTY_PREFIX}.f{source_id}"


class JobConf:
    """
    Job-scoped string-keyed properties shared between submission and planning.

    Values are stored as strings, the way a job configuration travels between
    processes; the typed accessors convert on the way in and out.
    """

    def __init__(self, props: Optional[Dict[str, str]] = None):
        self._props: Dict[str, str] = dict(props or {})

    def set(self, name: str, value: Any) -> None:
        self._props[name] = str(value)

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self._props.get(name, default)

    def set_int(self, name: str, value: int) -> None:
        self._props[name] = str(int(value))

    def get_int(self, name: str, default: int) -> int:
        raw = self._props.get(name)
        if raw is None:
            return default
        try:
            return int(raw)
        except ValueError:
            raise ValueError(f"Property {name!r} is not an integer: {raw!r}") from None

    def set_bool(self, name: str, value: bool) -> None:
        self._props[name] = "true" if value else "false"

    def get_bool(self, name: str, default: bool) -> bool:
        raw = self._props.get(name)
        if raw is None:
            return default
        return raw.strip().lower() == "true"

    def to_dict(self) -> Dict[str, str]:
        return dict(self._props)

    def __contains__(self, name: str) -> bool:
        return name in self._props

    def __iter__(self) -> Iterator[str]:
        return iter(self._props)

    def __len__(self) -> int:
        return len(self._props)

    def __repr__(self) -> str:
        return f"JobConf({self._props!r})"


# Local run options
@dataclass(frozen=True)
class RunnerConfig:
    """Options for running a function source on the local process pool.

    ``cache_path`` selects a RocksDB-backed distribution cache; when None an
    in-memory store is used, which is fine for process pools because the
    function travels inside each encoded split.
    """
    # Parallelism
    num_workers: int = 4
    num_splits_hint: Optional[int] = None  # If None, defaults to num_workers
    use_threads: bool = False

    # Distribution cache
    cache_path: Optional[Union[str, Path]] = None
    cleanup_cache: bool = True  # Remove the cache directory after the run

    # Reporting
    show_progress: bool = True
    print_summary: bool = False

    def splits_hint(self) -> int:
        return self.num_splits_hint if self.num_splits_hint is not None else self.num_workers
