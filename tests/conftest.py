"""Pytest configuration and fixtures."""

import pytest

from solenrich.cache import Cache, InMemoryBackend


class FakeClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock."""
    return FakeClock()


@pytest.fixture
def memory_backend(clock: FakeClock) -> InMemoryBackend:
    """Create an in-memory backend driven by the fake clock."""
    return InMemoryBackend(clock=clock)


@pytest.fixture
def cache(memory_backend: InMemoryBackend) -> Cache:
    """Create a cache over the in-memory backend."""
    return Cache(prefix="test:", backend=memory_backend)


@pytest.fixture(autouse=True)
def no_remote_cache_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep real credentials from the environment out of tests."""
    monkeypatch.delenv("UPSTASH_REDIS_REST_URL", raising=False)
    monkeypatch.delenv("UPSTASH_REDIS_REST_TOKEN", raising=False)
