"""Redis cache backend speaking the native Redis protocol."""

import logging
from typing import Any

import redis.asyncio as redis

logger = logging.getLogger(__name__)


class RedisBackend:
    """
    Redis backend for a shared, multi-instance cache.

    The client is created lazily by redis-py and connects on first use,
    so construction only fails on a malformed URL. Values are stored with
    the TTL as the native key expiration (``SET key value EX ttl``).
    """

    def __init__(
        self,
        url: str,
        token: str | None = None,
        socket_timeout: float = 5.0,
        socket_connect_timeout: float = 5.0,
    ) -> None:
        """
        Initialize Redis backend.

        Args:
            url: Redis connection URL (redis://, rediss:// or unix://)
            token: Access token, sent as the connection password
            socket_timeout: Socket timeout in seconds
            socket_connect_timeout: Connection timeout in seconds
        """
        options: dict[str, Any] = {
            "socket_timeout": socket_timeout,
            "socket_connect_timeout": socket_connect_timeout,
            "decode_responses": True,
        }
        if token:
            options["password"] = token

        self._url = url
        self._client = redis.from_url(url, **options)

    @property
    def name(self) -> str:
        return "redis"

    async def get(self, key: str) -> str | None:
        return await self._client.get(key)

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        await self._client.set(key, value, ex=ttl_seconds)

    async def delete(self, key: str) -> None:
        await self._client.delete(key)

    async def ping(self) -> bool:
        """Check the server answers."""
        return bool(await self._client.ping())

    async def close(self) -> None:
        """Close the Redis connection pool."""
        try:
            await self._client.aclose()
        except Exception as e:
            logger.error(f"Error closing Redis connection: {e}")
