"""Key-value cache facade over a single backend."""

import inspect
import json
import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from solenrich.cache.base import CacheBackend
from solenrich.cache.factory import create_backend

if TYPE_CHECKING:
    from solenrich.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "solenrich:"
HEALTH_KEY = "__health__"


def cache_key(*parts: Any) -> str:
    """Build a collaborator key such as ``birdeye:price:<mint>``."""
    return ":".join(str(p) for p in parts)


def _json_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class Cache:
    """
    Best-effort cache for external data lookups.

    Wraps exactly one backend, chosen at construction, and namespaces
    every key with ``prefix``. Values are stored as JSON text. ``get``,
    ``set`` and ``delete`` never raise: backend and serialization
    failures are logged and surface only as a miss or a no-op.

    Construct one instance and pass it to every collaborator that needs
    it::

        cache = Cache.from_settings(get_settings())
        client = BirdeyeClient(cache=cache)
    """

    def __init__(
        self,
        url: str | None = None,
        token: str | None = None,
        prefix: str = DEFAULT_PREFIX,
        timeout: float = 5.0,
        clock: Callable[[], float] | None = None,
        backend: CacheBackend | None = None,
    ) -> None:
        """
        Initialize the cache.

        Args:
            url: Remote cache endpoint; empty or placeholder means in-memory
            token: Remote cache access token
            prefix: Namespace prepended to every key
            timeout: Remote request timeout in seconds
            clock: Clock for the in-memory backend (tests)
            backend: Explicit backend, bypassing credential-based selection
        """
        self._prefix = prefix
        if backend is None:
            backend = create_backend(url, token, timeout=timeout, clock=clock)
        self._backend = backend

    @classmethod
    def from_settings(cls, settings: "Settings") -> "Cache":
        """Create a cache from application settings."""
        return cls(
            url=settings.upstash_redis_rest_url,
            token=settings.upstash_redis_rest_token,
            prefix=settings.cache_prefix,
            timeout=settings.cache_socket_timeout,
        )

    @property
    def backend(self) -> CacheBackend:
        return self._backend

    @property
    def backend_name(self) -> str:
        return self._backend.name

    @property
    def prefix(self) -> str:
        return self._prefix

    def _get_key(self, key: str) -> str:
        """Get prefixed key."""
        return f"{self._prefix}{key}"

    async def get(self, key: str) -> Any | None:
        """
        Get a cached value.

        Args:
            key: Logical cache key (without namespace)

        Returns:
            The decoded value, or None on miss, expiry or any failure
        """
        try:
            raw = await self._backend.get(self._get_key(key))
            if raw is None:
                logger.debug(f"Cache miss for {key}")
                return None
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8")
            logger.debug(f"Cache hit for {key}")
            return json.loads(raw) if isinstance(raw, str) else raw
        except Exception as e:
            logger.warning(f"Cache get({key}) failed: {e}")
            return None

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        """
        Cache a value.

        Args:
            key: Logical cache key (without namespace)
            value: JSON-serializable value or pydantic model
            ttl_seconds: Time-to-live in seconds
        """
        try:
            serialized = json.dumps(value, default=_json_default)
            await self._backend.set(self._get_key(key), serialized, ttl_seconds)
        except Exception as e:
            logger.warning(f"Cache set({key}) failed: {e}")

    async def delete(self, key: str) -> None:
        """Invalidate a cached value."""
        try:
            await self._backend.delete(self._get_key(key))
        except Exception as e:
            logger.warning(f"Cache delete({key}) failed: {e}")

    async def get_or_set(
        self,
        key: str,
        factory: Callable[[], Any],
        ttl_seconds: int,
    ) -> Any:
        """
        Get a value, or compute and cache it if missing.

        Errors raised by ``factory`` propagate; None results are returned
        but not cached.

        Args:
            key: Logical cache key
            factory: Callable or coroutine function producing the value
            ttl_seconds: TTL if the value needs to be computed

        Returns:
            Cached or computed value
        """
        value = await self.get(key)
        if value is not None:
            return value

        value = factory()
        if inspect.isawaitable(value):
            value = await value

        if value is not None:
            await self.set(key, value, ttl_seconds)
        return value

    async def health_check(self) -> dict[str, Any]:
        """
        Probe the backend with a write/read round-trip.

        Returns:
            Dict with backend name, namespace and health flag
        """
        probe = str(time.time())
        healthy = False
        error: str | None = None
        try:
            await self._backend.set(self._get_key(HEALTH_KEY), json.dumps(probe), 10)
            raw = await self._backend.get(self._get_key(HEALTH_KEY))
            if isinstance(raw, str):
                raw = json.loads(raw)
            healthy = raw == probe
        except Exception as e:
            error = str(e)
            logger.warning(f"Cache health check failed: {e}")

        result: dict[str, Any] = {
            "backend": self.backend_name,
            "prefix": self._prefix,
            "healthy": healthy,
        }
        if error:
            result["error"] = error
        return result

    async def close(self) -> None:
        """Close the backend connection."""
        try:
            await self._backend.close()
        except Exception as e:
            logger.error(f"Error closing cache backend: {e}")

    async def __aenter__(self) -> "Cache":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
