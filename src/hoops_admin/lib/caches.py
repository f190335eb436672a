"""
Disk-based caching utilities with TTL support.

Filter option lists (seasons, grades, packages) change rarely, so their
responses are kept on disk for a few minutes. Backed by the diskcache
library, which is thread-safe and process-safe.
"""

from pathlib import Path
from typing import Any, Callable, TypeVar

import diskcache

from hoops_admin.lib import logs

LOG = logs.logger(__file__)

T = TypeVar("T")

_MISSING = object()


class DiskCache:
    """
    Disk-based cache with TTL support.

    A disabled cache never stores anything and always calls the loader,
    which keeps call sites free of ``if cache_enabled`` branches.

    Attributes:
        cache_dir: Path to the cache directory.
        enabled: False to bypass the cache entirely.
    """

    def __init__(self, cache_dir: str | Path, enabled: bool = True) -> None:
        self.cache_dir = Path(cache_dir)
        self.enabled = enabled
        self._cache = diskcache.Cache(str(self.cache_dir)) if enabled else None

    def get_or_load(
        self,
        key: str,
        loader: Callable[[], T],
        expire: int | None = None,
    ) -> T:
        """
        Return the cached value for key, or load, store and return it.

        Loader exceptions propagate and nothing is stored, so a failed
        request is retried on the next call.

        Args:
            key: Cache key string.
            loader: Called with no arguments on a miss.
            expire: TTL in seconds. None means no expiration.
        """
        if self._cache is None:
            return loader()
        cached = self._cache.get(key, default=_MISSING)
        if cached is not _MISSING:
            LOG.debug("Cache hit - key:%s", key[:12])
            return cached
        value = loader()
        self._cache.set(key, value, expire=expire)
        return value

    def get(self, key: str, default: Any = None) -> Any:
        if self._cache is None:
            return default
        return self._cache.get(key, default=default)

    def set(self, key: str, value: Any, expire: int | None = None) -> None:
        if self._cache is not None:
            self._cache.set(key, value, expire=expire)

    def delete(self, key: str) -> None:
        if self._cache is not None:
            self._cache.delete(key)

    def clear(self) -> None:
        """Clear all entries from the cache."""
        if self._cache is not None:
            self._cache.clear()

    def close(self) -> None:
        """Close the cache and release resources."""
        if self._cache is not None:
            self._cache.close()
