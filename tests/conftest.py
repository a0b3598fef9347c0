"""Pytest configuration for cachelayer tests."""

import pytest

from cachelayer import (
    CacheConfig,
    CacheService,
    InMemoryCacheProvider,
    InMemoryEntryStore,
)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock for testing."""
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> InMemoryEntryStore:
    """Create an entry store driven by the fake clock."""
    return InMemoryEntryStore(maxsize=100, clock=clock)


@pytest.fixture
def provider(store: InMemoryEntryStore) -> InMemoryCacheProvider:
    """Create a provider over the fake-clock store."""
    return InMemoryCacheProvider(store=store)


@pytest.fixture
def cache_service(provider: InMemoryCacheProvider) -> CacheService:
    """Create a cache service over the fake-clock provider."""
    return CacheService(provider=provider, config=CacheConfig())
