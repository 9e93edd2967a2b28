"""Cache backend interface and the in-memory entry type."""

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass
class CacheEntry:
    """
    A serialized value held by the in-memory backend.

    Attributes:
        key: Namespaced cache key
        serialized_value: JSON text of the cached value
        expires_at: Clock reading after which the entry is stale
    """

    key: str
    serialized_value: str
    expires_at: float

    def is_expired(self, now: float) -> bool:
        """Check if entry has expired at the given clock reading."""
        return now > self.expires_at


@runtime_checkable
class CacheBackend(Protocol):
    """
    Storage contract consumed by :class:`solenrich.cache.Cache`.

    Backends deal only in serialized text and raise on failure. Key
    namespacing, serialization and error recovery belong to the cache.
    """

    @property
    def name(self) -> str:
        """Backend identifier (e.g., 'memory', 'redis', 'upstash')."""
        ...

    async def get(self, key: str) -> Any | None:
        """
        Read a stored payload.

        Returns:
            The stored text (or an already-decoded value for clients that
            decode on read), or None if not found
        """
        ...

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store a payload with the TTL applied as its expiration."""
        ...

    async def delete(self, key: str) -> None:
        """Remove a key; missing keys are not an error."""
        ...

    async def close(self) -> None:
        """Release connections held by the backend."""
        ...
