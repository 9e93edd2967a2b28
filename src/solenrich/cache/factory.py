"""Backend selection from remote cache credentials."""

import logging
from collections.abc import Callable
from urllib.parse import urlparse

from solenrich.cache.base import CacheBackend
from solenrich.cache.memory import InMemoryBackend
from solenrich.cache.redis import RedisBackend
from solenrich.cache.rest import UpstashRestBackend

logger = logging.getLogger(__name__)

PLACEHOLDER_PREFIX = "your_"

REST_SCHEMES = ("http", "https")
REDIS_SCHEMES = ("redis", "rediss", "unix")


def is_configured(value: str | None) -> bool:
    """Check a credential is set and not a template placeholder."""
    if value is None:
        return False
    value = value.strip()
    return value != "" and not value.startswith(PLACEHOLDER_PREFIX)


def create_backend(
    url: str | None,
    token: str | None,
    timeout: float = 5.0,
    clock: Callable[[], float] | None = None,
) -> CacheBackend:
    """
    Create the cache backend for the given credentials.

    Remote credentials that are missing or placeholders select the
    in-memory backend. A remote backend that cannot be built is logged
    and replaced by the in-memory backend; this function never raises.

    Args:
        url: Remote endpoint (https:// for REST, redis:// for native)
        token: Access token for the endpoint
        timeout: Remote request timeout in seconds
        clock: Clock for the in-memory backend

    Returns:
        CacheBackend instance
    """
    memory_kwargs = {"clock": clock} if clock is not None else {}

    if not (is_configured(url) and is_configured(token)):
        logger.info("Using in-memory cache (no remote cache configured)")
        return InMemoryBackend(**memory_kwargs)

    url = url.strip()
    token = token.strip()
    try:
        scheme = urlparse(url).scheme.lower()
        if scheme in REST_SCHEMES:
            backend: CacheBackend = UpstashRestBackend(url, token, timeout=timeout)
        elif scheme in REDIS_SCHEMES:
            backend = RedisBackend(
                url,
                token=token,
                socket_timeout=timeout,
                socket_connect_timeout=timeout,
            )
        else:
            raise ValueError(f"Unsupported cache URL scheme: {scheme or '<none>'}")
    except Exception as e:
        logger.warning(f"Failed to init remote cache, falling back to in-memory: {e}")
        return InMemoryBackend(**memory_kwargs)

    logger.info(f"Using {backend.name} cache backend")
    return backend
