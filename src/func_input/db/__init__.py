from .dist_cache import DistCache, memory_dist_cache, open_dist_cache
from .rocks import setup_rocksdb

__all__ = ["DistCache", "memory_dist_cache", "open_dist_cache", "setup_rocksdb"]
