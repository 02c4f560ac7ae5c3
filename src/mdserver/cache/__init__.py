"""Cache subsystem — mtime-validated document cache with shared/exclusive guarding."""

from mdserver.cache.document import DocumentCache
from mdserver.cache.inflight import InflightRenders
from mdserver.cache.rwlock import ReadWriteLock
from mdserver.cache.stats import CacheStats

__all__ = [
    "CacheStats",
    "DocumentCache",
    "InflightRenders",
    "ReadWriteLock",
]
