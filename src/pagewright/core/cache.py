"""Bounded in-memory cache with lazy TTL expiry and statistics.

Entries are evicted in insertion order once ``max_size`` is exceeded.
Expiry is checked on lookup only; there is no background sweep. All
mutation happens under a single lock so concurrent page compilation can
share one instance.
"""

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .hash import Algorithm, hash_string

T = TypeVar("T")


@dataclass
class Stats:
    """Cache statistics."""

    size: int = 0
    max_size: int = 0
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    expirations: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate hit rate (0.0 to 1.0)."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "size": self.size,
            "max_size": self.max_size,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "expirations": self.expirations,
            "hit_rate": self.hit_rate,
        }


class BoundedCache(Generic[T]):
    """
    Insertion-ordered cache with optional TTL.

    Examples:
        >>> cache = BoundedCache[str](max_size=100, ttl_seconds=3600)
        >>> cache.set("key", "value")
        >>> cache.get("key")
        'value'
        >>> cache.stats.hit_rate
        1.0
    """

    def __init__(
        self,
        max_size: int = 1000,
        ttl_seconds: float | None = None,
        hash_algorithm: Algorithm = Algorithm.XXHASH64,
    ):
        """
        Initialize cache.

        Args:
            max_size: Maximum number of entries
            ttl_seconds: Time-to-live in seconds (None = no expiration)
            hash_algorithm: Algorithm for computing internal keys
        """
        if max_size <= 0:
            raise ValueError("max_size must be positive")

        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self.hash_algorithm = hash_algorithm

        self._cache: OrderedDict[str, tuple[T, float]] = OrderedDict()
        self._stats = Stats(max_size=max_size)
        self._lock = threading.Lock()

    def _compute_key(self, key: str) -> str:
        return hash_string(key, self.hash_algorithm, truncate=16)

    def _is_expired(self, timestamp: float) -> bool:
        if self.ttl_seconds is None:
            return False
        return time.time() - timestamp >= self.ttl_seconds

    def get(self, key: str) -> T | None:
        """
        Get cached value if present and not expired.

        Lookups do not change eviction order.
        """
        cache_key = self._compute_key(key)

        with self._lock:
            entry = self._cache.get(cache_key)
            if entry is None:
                self._stats.misses += 1
                return None

            value, timestamp = entry
            if self._is_expired(timestamp):
                del self._cache[cache_key]
                self._stats.size = len(self._cache)
                self._stats.expirations += 1
                self._stats.misses += 1
                return None

            self._stats.hits += 1
            return value

    def set(self, key: str, value: T) -> None:
        """Store value; overwriting an entry re-inserts it at the newest position."""
        cache_key = self._compute_key(key)

        with self._lock:
            if cache_key in self._cache:
                del self._cache[cache_key]

            self._cache[cache_key] = (value, time.time())

            while len(self._cache) > self.max_size:
                self._cache.popitem(last=False)
                self._stats.evictions += 1

            self._stats.size = len(self._cache)

    def delete(self, key: str) -> bool:
        """Delete entry; returns False when absent."""
        cache_key = self._compute_key(key)

        with self._lock:
            if cache_key in self._cache:
                del self._cache[cache_key]
                self._stats.size = len(self._cache)
                return True
            return False

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
            self._stats.size = 0

    @property
    def stats(self) -> Stats:
        return self._stats

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, key: str) -> bool:
        """Check presence without touching statistics or expiry."""
        return self._compute_key(key) in self._cache


__all__ = ["BoundedCache", "Stats"]
