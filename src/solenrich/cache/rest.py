"""Upstash-style Redis REST backend."""

import logging
from typing import Any

import httpx

from solenrich.cache.errors import CacheBackendError

logger = logging.getLogger(__name__)


class UpstashRestBackend:
    """
    Redis backend over the Upstash REST protocol.

    Each command is POSTed as a JSON array (``["GET", key]``) to the
    endpoint with a bearer token. The store answers ``{"result": ...}``
    on success and ``{"error": "..."}`` when it rejects the command.
    """

    def __init__(
        self,
        url: str,
        token: str,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize REST backend.

        Args:
            url: REST endpoint URL (https://...)
            token: Bearer token for the endpoint
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self._client = httpx.AsyncClient(
            base_url=url.rstrip("/"),
            timeout=timeout,
            headers={"Authorization": f"Bearer {token}"},
            transport=transport,
        )

    @property
    def name(self) -> str:
        return "upstash"

    async def _command(self, *args: Any) -> Any:
        """Send one command and return its result."""
        command = str(args[0])
        response = await self._client.post("", json=[str(a) for a in args])

        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict) and "error" in body:
            raise CacheBackendError(command, str(body["error"]))
        if response.status_code >= 400:
            raise CacheBackendError(command, f"HTTP {response.status_code}")
        if not isinstance(body, dict) or "result" not in body:
            raise CacheBackendError(command, "malformed response")

        return body["result"]

    async def get(self, key: str) -> Any | None:
        return await self._command("GET", key)

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        await self._command("SET", key, value, "EX", ttl_seconds)

    async def delete(self, key: str) -> None:
        await self._command("DEL", key)

    async def ping(self) -> bool:
        return await self._command("PING") == "PONG"

    async def close(self) -> None:
        await self._client.aclose()
