# func_input/db/dist_cache.py
"""
Job-scoped blob store for objects that every worker needs a copy of.

Objects are published once at submission time and pulled (read-only) during
planning and execution. The store is any mutable mapping of bytes to bytes:
a ``rocksdict.Rdict`` when the cache must be shared across processes on a
machine, a plain dict when planning happens in the same process.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, MutableMapping, Optional, Union

import cloudpickle

from func_input.config import JobConf
from func_input.db.rocks import setup_rocksdb
from func_input.errors import KeyNotFound, ObjectDecodeError

logger = logging.getLogger(__name__)

MEMORY_LOCATION = ":memory:"

__all__ = [
    "MEMORY_LOCATION",
    "DistCache",
    "open_dist_cache",
    "memory_dist_cache",
]


def _store_key(key: str) -> bytes:
    return key.encode("utf-8")


class DistCache:
    """Publish-once, read-many object cache keyed by property name."""

    def __init__(self, store: MutableMapping[bytes, bytes], location: str = MEMORY_LOCATION):
        self._store = store
        self.location = location

    def push_object(self, conf: JobConf, obj: Any, key: str) -> int:
        """
        Serialize `obj` and publish it under `key`.

        The cache location is recorded in `conf` under the same key so that
        the planner can tell which store holds the object. Returns the size of
        the serialized payload in bytes.
        """
        payload = cloudpickle.dumps(obj)
        try:
            self._store[_store_key(key)] = payload
        except Exception:
            logger.exception("Error publishing %s", key)
            raise
        conf.set(key, self.location)
        logger.info("Published %s (%s bytes) to %s", key, f"{len(payload):,}", self.location)
        return len(payload)

    def pull_object(self, conf: Optional[JobConf], key: str) -> Any:
        """
        Fetch and deserialize the object published under `key`.

        Raises
        ------
        KeyNotFound
            Nothing was published under `key`.
        ObjectDecodeError
            The stored payload could not be deserialized.
        """
        if conf is not None and key in conf and conf.get(key) != self.location:
            logger.warning(
                "%s was published to %s but is being read from %s",
                key,
                conf.get(key),
                self.location,
            )

        payload = self._store.get(_store_key(key))
        if payload is None:
            raise KeyNotFound(key)

        try:
            return cloudpickle.loads(payload)
        except Exception as exc:
            raise ObjectDecodeError(f"Could not deserialize {key}: {exc}") from exc

    def contains(self, key: str) -> bool:
        return _store_key(key) in self._store

    def remove(self, key: str) -> bool:
        """Drop `key` from the cache; returns False if it was not present."""
        k = _store_key(key)
        if k not in self._store:
            return False
        del self._store[k]
        logger.debug("Removed %s from %s", key, self.location)
        return True

    def close(self) -> None:
        close = getattr(self._store, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "DistCache":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def open_dist_cache(path: Union[str, Path], **rocks_kwargs) -> DistCache:
    """Open (or create) a RocksDB-backed cache at `path`."""
    db = setup_rocksdb(path, **rocks_kwargs)
    return DistCache(db, location=str(Path(path).expanduser()))


def memory_dist_cache() -> DistCache:
    return DistCache({}, location=MEMORY_LOCATION)
