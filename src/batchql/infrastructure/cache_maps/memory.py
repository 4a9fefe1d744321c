"""In-memory cache map implementation."""

from collections.abc import Hashable, MutableMapping
from typing import Any

from cachetools import LRUCache, TTLCache  # type: ignore[import-untyped]


class InMemoryCacheMap:
    """In-memory cache map, optionally bounded or expiring.

    Unbounded by default, which matches the lifetime of a loader scoped to
    a single request. Uses cachetools for LRU eviction when ``maxsize`` is
    set and for TTL expiration when ``ttl`` is set. An evicted entry only
    means the next load of that key is fetched again.
    """

    def __init__(
        self,
        maxsize: int | None = None,
        ttl: float | None = None,
    ) -> None:
        """Initialize the cache map.

        Args:
            maxsize: Maximum number of entries. None means unbounded,
                unless a ttl is given.
            ttl: Time-to-live in seconds for entries.
        """
        self._maxsize = maxsize
        self._ttl = ttl
        self._cache: MutableMapping[Hashable, Any]
        if ttl is not None:
            self._cache = TTLCache(maxsize=maxsize or 10_000, ttl=ttl)
        elif maxsize is not None:
            self._cache = LRUCache(maxsize=maxsize)
        else:
            self._cache = {}

    def get(self, key: Hashable) -> Any | None:
        """Return the cached future for a key, or None."""
        return self._cache.get(key)

    def set(self, key: Hashable, value: Any) -> None:
        """Store a future for a key."""
        self._cache[key] = value

    def delete(self, key: Hashable) -> bool:
        """Remove a key.

        Returns:
            True if the key existed and was removed, False otherwise.
        """
        try:
            del self._cache[key]
            return True
        except KeyError:
            return False

    def clear(self) -> None:
        """Remove every entry."""
        self._cache.clear()

    def __contains__(self, key: object) -> bool:
        """Check if a key is cached."""
        return key in self._cache

    def __len__(self) -> int:
        """Return the number of entries."""
        return len(self._cache)

    @property
    def maxsize(self) -> int | None:
        """Return the configured maximum size."""
        return self._maxsize
