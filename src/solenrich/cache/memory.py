"""In-memory cache backend implementation."""

import logging
import time
from collections.abc import Callable

from solenrich.cache.base import CacheEntry

logger = logging.getLogger(__name__)


class InMemoryBackend:
    """
    In-process cache backend using a simple dictionary.

    Best for:
    - Development and testing
    - Deployments without a shared Redis store

    Limitations:
    - Not shared across instances
    - Lost on restart
    - Expired entries are dropped lazily on read (or by cleanup_expired)

    The store assumes single-threaded cooperative access from one event
    loop and takes no locks.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """
        Initialize in-memory backend.

        Args:
            clock: Returns the current time in seconds; injectable for tests
        """
        self._store: dict[str, CacheEntry] = {}
        self._clock = clock

    @property
    def name(self) -> str:
        return "memory"

    async def get(self, key: str) -> str | None:
        """Get a payload, evicting it if expired."""
        entry = self._store.get(key)
        if entry is None:
            return None

        if entry.is_expired(self._clock()):
            del self._store[key]
            return None

        return entry.serialized_value

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store a payload, overwriting any previous entry."""
        self._store[key] = CacheEntry(
            key=key,
            serialized_value=value,
            expires_at=self._clock() + ttl_seconds,
        )

    async def delete(self, key: str) -> None:
        self._store.pop(key, None)

    async def close(self) -> None:
        self._store.clear()

    def cleanup_expired(self) -> int:
        """Remove all expired entries."""
        now = self._clock()
        expired_keys = [k for k, v in self._store.items() if v.is_expired(now)]
        for key in expired_keys:
            del self._store[key]

        if expired_keys:
            logger.debug(f"Cleaned up {len(expired_keys)} expired cache entries")

        return len(expired_keys)

    def size(self) -> int:
        """Get current number of entries, including not-yet-evicted stale ones."""
        return len(self._store)
