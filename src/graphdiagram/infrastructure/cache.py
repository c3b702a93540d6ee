"""
Generic LRU cache implementation with TTL support.

This module provides a thread-safe LRU (Least Recently Used) cache with an
optional TTL (Time To Live) and hit/miss metrics. The graph calculator uses
it to keep per-node incident edge lists between queries; keys carry the store
revision so any edge mutation makes older entries unreachable.

Features:
- LRU eviction policy
- Optional TTL-based expiration
- Thread-safe operations
- Performance metrics
"""

from collections import OrderedDict
from threading import Lock
from time import monotonic
from typing import Dict, Generic, Hashable, Optional, TypeVar

from ..core.exceptions import ConfigurationError

T = TypeVar("T")  # Type of cached values


class LRUCache(Generic[T]):
    """
    Thread-safe LRU cache with TTL support.

    Entries are evicted least recently used first once ``max_size`` is
    reached, and expire ``base_ttl`` seconds after being stored. A ``base_ttl``
    of ``None`` disables expiry.

    Attributes:
        max_size: Maximum number of entries to store
        base_ttl: Time-to-live in seconds, or None
    """

    def __init__(self, max_size: int, base_ttl: Optional[float] = None):
        """Initialize cache with given parameters."""
        if max_size < 1:
            raise ConfigurationError("max_size must be positive")
        if base_ttl is not None and base_ttl <= 0:
            raise ConfigurationError("base_ttl must be positive")
        self._cache: "OrderedDict[Hashable, T]" = OrderedDict()
        self._expiry: Dict[Hashable, float] = {}
        self._lock = Lock()
        self.max_size = max_size
        self.base_ttl = base_ttl

        # Metrics
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def _expired(self, key: Hashable) -> bool:
        return self.base_ttl is not None and monotonic() >= self._expiry[key]

    def _drop(self, key: Hashable) -> None:
        del self._cache[key]
        self._expiry.pop(key, None)

    def get(self, key: Hashable) -> Optional[T]:
        """
        Get value from cache.

        Args:
            key: Cache key to look up

        Returns:
            Cached value if found and not expired, None otherwise
        """
        with self._lock:
            if key in self._cache and not self._expired(key):
                self._hits += 1
                self._cache.move_to_end(key)
                return self._cache[key]

            self._misses += 1
            if key in self._cache:
                self._drop(key)
            return None

    def put(self, key: Hashable, value: T) -> None:
        """
        Store value in cache.

        Args:
            key: Cache key to store value under
            value: Value to cache
        """
        with self._lock:
            self._cache[key] = value
            self._cache.move_to_end(key)
            if self.base_ttl is not None:
                self._expiry[key] = monotonic() + self.base_ttl

            while len(self._cache) > self.max_size:
                lru_key = next(iter(self._cache))
                self._drop(lru_key)
                self._evictions += 1

    def remove(self, key: Hashable) -> None:
        """Remove an item from the cache if present."""
        with self._lock:
            if key in self._cache:
                self._drop(key)

    def clear(self) -> None:
        """Clear all entries and reset metrics."""
        with self._lock:
            self._cache.clear()
            self._expiry.clear()
            self._hits = 0
            self._misses = 0
            self._evictions = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def get_metrics(self) -> Dict[str, float]:
        """
        Get cache performance metrics.

        Returns:
            Dictionary containing:
            - hits: Number of cache hits
            - misses: Number of cache misses
            - evictions: Number of LRU evictions
            - size: Current cache size
            - hit_rate: Cache hit rate
        """
        with self._lock:
            total_accesses = self._hits + self._misses
            hit_rate = float(self._hits) / total_accesses if total_accesses > 0 else 0.0
            return {
                "hits": float(self._hits),
                "misses": float(self._misses),
                "evictions": float(self._evictions),
                "size": float(len(self._cache)),
                "hit_rate": hit_rate,
            }
