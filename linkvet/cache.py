"""In-memory TTL cache for LinkVet enrichment lookups.

Supports:
- Per-entry TTL with a shared default
- Negative caching (``None`` is a real cached value, not a miss)
- Thread-safe operations
- Injectable clock for deterministic expiry in tests
"""

import logging
import threading
import time
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CacheEntry:
    """Represents a cached value with timestamp."""

    __slots__ = ("value", "timestamp", "ttl_seconds")

    def __init__(self, value: Any, timestamp: float, ttl_seconds: Optional[float] = None):
        self.value = value
        self.timestamp = timestamp
        self.ttl_seconds = ttl_seconds

    def is_expired(self, now: float, default_ttl: float) -> bool:
        """Check if this entry has expired."""
        ttl = self.ttl_seconds if self.ttl_seconds is not None else default_ttl
        return now - self.timestamp >= ttl


class TTLCache:
    """
    Memory cache with TTL-based staleness and a get-or-fetch helper.

    Usage:
        cache = TTLCache(ttl_seconds=86400, namespace="domain_age")

        entry = cache.lookup("example.com")
        age = await cache.get_or_fetch("example.com", lambda: fetch_age("example.com"))

    Stale entries are replaced on the next fetch, never evicted proactively.
    The lock is never held across an await, so two callers missing the same
    key may both fetch; the last write wins.
    """

    def __init__(
        self,
        ttl_seconds: float = 3600,
        namespace: str = "",
        clock: Callable[[], float] = time.time,
    ):
        self.ttl_seconds = ttl_seconds
        self.namespace = namespace
        self._clock = clock
        self._memory: Dict[str, CacheEntry] = {}
        self._lock = threading.RLock()

    def _make_key(self, key: str) -> str:
        """Generate full cache key with namespace."""
        if self.namespace:
            return f"{self.namespace}:{key}"
        return key

    def lookup(self, key: str) -> Optional[CacheEntry]:
        """Return the fresh entry for ``key`` or None on miss/stale."""
        full_key = self._make_key(key)
        with self._lock:
            entry = self._memory.get(full_key)
            if entry is None:
                return None
            if entry.is_expired(self._clock(), self.ttl_seconds):
                return None
            return entry

    def get(self, key: str, default: Any = None) -> Any:
        """Get cached value if present and fresh, else ``default``."""
        entry = self.lookup(key)
        if entry is None:
            return default
        return entry.value

    def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        """Store ``value`` (including None) under ``key``."""
        entry = CacheEntry(value=value, timestamp=self._clock(), ttl_seconds=ttl_seconds)
        with self._lock:
            self._memory[self._make_key(key)] = entry

    def delete(self, key: str) -> None:
        with self._lock:
            self._memory.pop(self._make_key(key), None)

    def clear(self) -> None:
        """Clear all cached values."""
        with self._lock:
            self._memory.clear()

    async def get_or_fetch(
        self,
        key: str,
        fetch_fn: Callable[[], Awaitable[T]],
        ttl_seconds: Optional[float] = None,
    ) -> T:
        """
        Get cached value or fetch and cache it.

        Args:
            key: Cache key
            fetch_fn: Async function producing the value; its result is cached
                even when it is None
            ttl_seconds: Override default TTL

        Returns:
            Cached or freshly fetched value
        """
        entry = self.lookup(key)
        if entry is not None:
            logger.debug("Cache hit for %s", self._make_key(key))
            return entry.value

        value = await fetch_fn()
        self.set(key, value, ttl_seconds)
        return value

    def __len__(self) -> int:
        with self._lock:
            return len(self._memory)

    def stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            now = self._clock()
            fresh = sum(1 for e in self._memory.values() if not e.is_expired(now, self.ttl_seconds))
            return {
                "namespace": self.namespace,
                "ttl_seconds": self.ttl_seconds,
                "entries": len(self._memory),
                "fresh_entries": fresh,
            }


def create_domain_age_cache(
    ttl_seconds: float = 24 * 3600,
    clock: Callable[[], float] = time.time,
) -> TTLCache:
    """Create cache for RDAP domain-age lookups (memory-only)."""
    return TTLCache(ttl_seconds=ttl_seconds, namespace="domain_age", clock=clock)
