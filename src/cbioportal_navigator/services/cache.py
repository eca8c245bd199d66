"""
In-memory cache with per-entry TTL.

One instance is created per lookup domain (gene validity, studies, molecular
profiles) so keys from different domains never collide. Entries expire after
a fixed TTL and are evicted lazily when accessed; there is no capacity bound
and no background sweep.
"""

import logging
import math
import time
from dataclasses import dataclass
from typing import Any, Callable

from cachetools import TTLCache

logger = logging.getLogger(__name__)


class _Missing:
    """Marker for "no usable cache entry"."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


# Returned by CacheService.get on a miss. Cached None/False/[] are real hits.
MISSING = _Missing()


@dataclass
class CacheStats:
    """Cache statistics."""

    hits: int = 0
    misses: int = 0
    expirations: int = 0
    size: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


class CacheService:
    """
    Key/value cache with time-based expiry only.

    Features:
    - Fixed TTL per instance, an entry is expired once its age reaches the TTL
    - Lazy eviction on access
    - Explicit MISSING marker so negative results can be cached
    - Statistics tracking
    """

    def __init__(
        self,
        name: str,
        ttl_seconds: float = 3600,
        enabled: bool = True,
        timer: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize cache service.

        Args:
            name: Domain label used in log messages
            ttl_seconds: Time-to-live for cache entries in seconds
            enabled: Whether caching is enabled
            timer: Clock returning seconds, injectable for tests
        """
        self.name = name
        self.ttl_seconds = ttl_seconds
        self.enabled = enabled

        self._cache: TTLCache = TTLCache(maxsize=math.inf, ttl=ttl_seconds, timer=timer)
        self._written: set[str] = set()
        self._stats = CacheStats()

        logger.debug(
            f"CacheService '{name}' initialized: ttl={ttl_seconds}s, enabled={enabled}"
        )

    def get(self, key: str) -> Any:
        """
        Get value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value, or MISSING if absent or expired
        """
        if not self.enabled:
            return MISSING

        try:
            value = self._cache[key]
        except KeyError:
            self._stats.misses += 1
            if key in self._written:
                self._stats.expirations += 1
                self._written.discard(key)
                self._cache.expire()
                logger.debug(f"Cache EXPIRED [{self.name}]: {key}")
            else:
                logger.debug(f"Cache MISS [{self.name}]: {key}")
            return MISSING

        self._stats.hits += 1
        logger.debug(f"Cache HIT [{self.name}]: {key}")
        return value

    def set(self, key: str, value: Any) -> None:
        """
        Store value, replacing any previous entry for the key.

        Args:
            key: Cache key
            value: Value to cache (None and other falsy values included)
        """
        if not self.enabled:
            return

        self._prune()
        self._cache[key] = value
        self._written.add(key)
        logger.debug(f"Cache SET [{self.name}]: {key}")

    def has(self, key: str) -> bool:
        """Check whether key currently holds an unexpired value."""
        return self.get(key) is not MISSING

    def clear(self) -> None:
        """Clear all cache entries."""
        self._cache.clear()
        self._written.clear()
        logger.info(f"Cache '{self.name}' cleared")

    def size(self) -> int:
        """Number of unexpired entries."""
        self._prune()
        return len(self._cache)

    def _prune(self) -> None:
        """Drop expired entries and forget their keys, counting them as expirations."""
        self._cache.expire()
        if len(self._written) == len(self._cache):
            return
        stale = [key for key in self._written if key not in self._cache]
        for key in stale:
            self._written.discard(key)
            logger.debug(f"Cache EXPIRED [{self.name}]: {key}")
        self._stats.expirations += len(stale)

    def get_stats(self) -> CacheStats:
        """
        Get cache statistics.

        Returns:
            CacheStats instance
        """
        return CacheStats(
            hits=self._stats.hits,
            misses=self._stats.misses,
            expirations=self._stats.expirations,
            size=self.size(),
        )

    def reset_stats(self) -> None:
        """Reset all statistics counters."""
        self._stats = CacheStats()

    @staticmethod
    def make_key(prefix: str, *parts: Any) -> str:
        """
        Create cache key from components.

        Args:
            prefix: Key prefix (e.g., 'study:', 'profile:')
            *parts: Key components

        Returns:
            Cache key string
        """
        key_parts = [str(part) for part in parts if part is not None]
        return f"{prefix}{':'.join(key_parts)}"
