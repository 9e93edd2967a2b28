"""
Cache module for external data lookups.

Provides a namespaced key-value cache that selects a remote Redis store
(REST or native protocol) when credentials are configured and falls back
to an in-process store otherwise.
"""

from solenrich.cache.base import CacheBackend, CacheEntry
from solenrich.cache.core import Cache, cache_key
from solenrich.cache.errors import CacheBackendError
from solenrich.cache.factory import create_backend, is_configured
from solenrich.cache.memory import InMemoryBackend
from solenrich.cache.redis import RedisBackend
from solenrich.cache.rest import UpstashRestBackend

__all__ = [
    "Cache",
    "CacheBackend",
    "CacheBackendError",
    "CacheEntry",
    "InMemoryBackend",
    "RedisBackend",
    "UpstashRestBackend",
    "cache_key",
    "create_backend",
    "is_configured",
]
