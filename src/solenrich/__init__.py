"""Shared access-layer primitives for Solana data providers."""

from solenrich.cache import Cache, cache_key
from solenrich.parallel import ParallelTask, parallel_fetch

__version__ = "0.1.0"

__all__ = ["Cache", "ParallelTask", "cache_key", "parallel_fetch"]
