"""Tests for create_cache_service."""

from datetime import timedelta

from cachelayer import (
    CacheConfig,
    CacheService,
    InMemoryCacheProvider,
    create_cache_service,
)


class TestCreateCacheService:
    """Tests for wiring the cache stack."""

    def test_default_wiring(self) -> None:
        service = create_cache_service()

        assert isinstance(service, CacheService)
        assert isinstance(service.provider, InMemoryCacheProvider)
        assert service.config.default_ttl == timedelta(minutes=30)

    def test_config_applied(self, clock) -> None:
        config = CacheConfig(max_size=2, sliding_expiration=timedelta(seconds=5))
        service = create_cache_service(config, clock=clock)
        provider = service.provider

        assert isinstance(provider, InMemoryCacheProvider)
        assert provider.store.maxsize == 2
        assert service.config is config

        # Provider used directly gets the configured sliding window
        provider.set("k", "v")
        clock.advance(5)
        assert provider.get("k") is None

    def test_instances_are_independent(self) -> None:
        first = create_cache_service()
        second = create_cache_service()

        first.set("k", "v")

        assert second.get("k") is None
