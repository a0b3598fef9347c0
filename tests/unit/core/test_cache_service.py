"""Tests for CacheService."""

import logging
from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from cachelayer import CacheConfig, CacheService, StoreError
from cachelayer.core.interfaces import ICacheProvider


@pytest.fixture
def mock_provider() -> MagicMock:
    """Create a provider double."""
    return MagicMock(spec=ICacheProvider)


@pytest.fixture
def service(mock_provider: MagicMock) -> CacheService:
    """Create a cache service over the provider double."""
    return CacheService(provider=mock_provider)


class TestCacheServiceDelegation:
    """Tests for the happy path against a provider double."""

    def test_get_returns_cached_value(
        self, service: CacheService, mock_provider: MagicMock
    ) -> None:
        mock_provider.get.return_value = {"name": "Test", "value": 123}

        result = service.get("test-key")

        assert result == {"name": "Test", "value": 123}
        mock_provider.get.assert_called_once_with("test-key", None)

    def test_get_passes_decoder(
        self, service: CacheService, mock_provider: MagicMock
    ) -> None:
        decode = MagicMock()

        service.get("test-key", decode=decode)

        mock_provider.get.assert_called_once_with("test-key", decode)

    def test_get_miss(self, service: CacheService, mock_provider: MagicMock) -> None:
        mock_provider.get.return_value = None

        assert service.get("missing-key") is None

    def test_set_uses_default_ttl(
        self, service: CacheService, mock_provider: MagicMock
    ) -> None:
        """Test that a missing TTL becomes the 30 minute default."""
        service.set("test-key", {"name": "Test"})

        mock_provider.set.assert_called_once_with(
            "test-key", {"name": "Test"}, timedelta(minutes=30)
        )

    def test_set_uses_configured_default_ttl(self, mock_provider: MagicMock) -> None:
        service = CacheService(
            provider=mock_provider,
            config=CacheConfig(default_ttl=timedelta(minutes=5)),
        )

        service.set("test-key", "v")

        mock_provider.set.assert_called_once_with("test-key", "v", timedelta(minutes=5))

    def test_set_with_custom_ttl(
        self, service: CacheService, mock_provider: MagicMock
    ) -> None:
        service.set("test-key", "v", ttl=timedelta(minutes=10))

        mock_provider.set.assert_called_once_with(
            "test-key", "v", timedelta(minutes=10)
        )

    def test_remove(self, service: CacheService, mock_provider: MagicMock) -> None:
        service.remove("test-key")

        mock_provider.remove.assert_called_once_with("test-key")

    @pytest.mark.parametrize("exists", [True, False])
    def test_exists(
        self, service: CacheService, mock_provider: MagicMock, exists: bool
    ) -> None:
        mock_provider.exists.return_value = exists

        assert service.exists("key") is exists
        mock_provider.exists.assert_called_once_with("key")

    def test_get_multiple(
        self, service: CacheService, mock_provider: MagicMock
    ) -> None:
        mock_provider.get_multiple.return_value = {"a": 1}

        result = service.get_multiple(iter(["a", "b"]))

        assert result == {"a": 1}
        mock_provider.get_multiple.assert_called_once_with(["a", "b"], None)

    def test_remove_by_pattern(
        self, service: CacheService, mock_provider: MagicMock
    ) -> None:
        mock_provider.remove_by_pattern.return_value = 3

        assert service.remove_by_pattern("cart:u1:*") == 3
        mock_provider.remove_by_pattern.assert_called_once_with("cart:u1:*")


class TestCacheServiceFailurePolicy:
    """Tests for failure absorption on reads and propagation on writes."""

    def test_get_absorbs_and_logs(
        self,
        service: CacheService,
        mock_provider: MagicMock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        mock_provider.get.side_effect = StoreError("Cache error")

        with caplog.at_level(logging.ERROR):
            result = service.get("error-key")

        assert result is None
        assert "Error retrieving cache key: error-key" in caplog.text
        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.cache_key == "error-key"  # type: ignore[attr-defined]
        assert record.exc_info is not None

    def test_exists_absorbs_and_logs(
        self,
        service: CacheService,
        mock_provider: MagicMock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        mock_provider.exists.side_effect = RuntimeError("down")

        with caplog.at_level(logging.ERROR):
            assert service.exists("k") is False

        assert "Error checking if cache key exists: k" in caplog.text

    def test_get_multiple_absorbs_and_logs(
        self,
        service: CacheService,
        mock_provider: MagicMock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        mock_provider.get_multiple.side_effect = RuntimeError("down")

        with caplog.at_level(logging.ERROR):
            assert service.get_multiple(["a", "b"]) == {}

        assert "Error retrieving multiple cache keys" in caplog.text

    def test_set_logs_and_reraises(
        self,
        service: CacheService,
        mock_provider: MagicMock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        mock_provider.set.side_effect = StoreError("write failed")

        with caplog.at_level(logging.ERROR):
            with pytest.raises(StoreError, match="write failed"):
                service.set("cart:u1:items", [1, 2])

        assert "Error setting cache key: cart:u1:items" in caplog.text

    def test_remove_logs_and_reraises(
        self,
        service: CacheService,
        mock_provider: MagicMock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        mock_provider.remove.side_effect = RuntimeError("remove failed")

        with caplog.at_level(logging.ERROR):
            with pytest.raises(RuntimeError):
                service.remove("k")

        assert "Error removing cache key: k" in caplog.text

    def test_remove_by_pattern_logs_and_reraises(
        self,
        service: CacheService,
        mock_provider: MagicMock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        mock_provider.remove_by_pattern.side_effect = RuntimeError("scan failed")

        with caplog.at_level(logging.ERROR):
            with pytest.raises(RuntimeError):
                service.remove_by_pattern("cart:*")

        assert "Error removing cache keys by pattern: cart:*" in caplog.text

    def test_clear_reraises(
        self, service: CacheService, mock_provider: MagicMock
    ) -> None:
        mock_provider.clear.side_effect = RuntimeError("clear failed")

        with pytest.raises(RuntimeError):
            service.clear()

    def test_no_retries(
        self, service: CacheService, mock_provider: MagicMock
    ) -> None:
        """Test that a failed operation is attempted exactly once."""
        mock_provider.get.side_effect = RuntimeError("down")
        mock_provider.set.side_effect = RuntimeError("down")

        service.get("k")
        with pytest.raises(RuntimeError):
            service.set("k", 1)

        assert mock_provider.get.call_count == 1
        assert mock_provider.set.call_count == 1

    def test_errors_counted(
        self, service: CacheService, mock_provider: MagicMock
    ) -> None:
        mock_provider.get.side_effect = RuntimeError("down")
        mock_provider.exists.side_effect = RuntimeError("down")

        service.get("k")
        service.exists("k")

        assert service.stats["errors"] == 2
        assert service.stats["total"] == 0


class TestCacheService:
    """Tests against the real in-memory provider."""

    def test_set_and_get(self, cache_service: CacheService) -> None:
        cache_service.set("product:123:details", {"id": 123, "name": "Lamp"})

        assert cache_service.get("product:123:details") == {"id": 123, "name": "Lamp"}

    def test_default_ttl_expires(self, cache_service: CacheService, clock) -> None:
        """Test that values set without TTL expire after 30 minutes."""
        cache_service.set("k", "v")

        clock.advance(29 * 60)
        assert cache_service.get("k") == "v"
        clock.advance(60)
        assert cache_service.get("k") is None

    def test_cache_stats(self, cache_service: CacheService) -> None:
        """Test cache statistics tracking."""
        assert cache_service.stats == {"hits": 0, "misses": 0, "errors": 0, "total": 0}

        cache_service.get("k")
        assert cache_service.stats["misses"] == 1

        cache_service.set("k", "v")
        cache_service.get("k")
        assert cache_service.stats["hits"] == 1

        cache_service.get_multiple(["k", "other"])
        assert cache_service.stats == {"hits": 2, "misses": 2, "errors": 0, "total": 4}

    def test_get_multiple_stats_count_duplicate_keys_once(
        self, cache_service: CacheService
    ) -> None:
        cache_service.set("a", 1)

        assert cache_service.get_multiple(["a", "a", "b", "b"]) == {"a": 1}
        assert cache_service.stats == {"hits": 1, "misses": 1, "errors": 0, "total": 2}

    def test_clear_cache(self, cache_service: CacheService) -> None:
        """Test clearing the cache resets entries and stats."""
        cache_service.set("k", "v")
        cache_service.get("k")

        cache_service.clear()

        assert cache_service.stats["total"] == 0
        assert cache_service.get("k") is None

    def test_get_or_set_miss_then_hit(self, cache_service: CacheService) -> None:
        """Test cache-aside loading."""
        loader = MagicMock(return_value={"id": 1})

        first = cache_service.get_or_set("product:1:details", loader)
        second = cache_service.get_or_set("product:1:details", loader)

        assert first == second == {"id": 1}
        loader.assert_called_once_with()

    def test_get_or_set_does_not_cache_none(
        self, cache_service: CacheService
    ) -> None:
        loader = MagicMock(return_value=None)

        assert cache_service.get_or_set("k", loader) is None
        assert cache_service.get_or_set("k", loader) is None
        assert loader.call_count == 2
        assert cache_service.exists("k") is False

    def test_get_or_set_uses_ttl(self, cache_service: CacheService, clock) -> None:
        cache_service.get_or_set("k", lambda: "v", ttl=timedelta(seconds=5))

        clock.advance(5)
        assert cache_service.exists("k") is False

    def test_get_or_set_propagates_write_failure(
        self, mock_provider: MagicMock
    ) -> None:
        mock_provider.get.return_value = None
        mock_provider.set.side_effect = StoreError("down")
        service = CacheService(provider=mock_provider)

        with pytest.raises(StoreError):
            service.get_or_set("k", lambda: "v")

    def test_disabled_cache(self, mock_provider: MagicMock) -> None:
        """Test that a disabled cache never touches the provider."""
        service = CacheService(
            provider=mock_provider, config=CacheConfig(enabled=False)
        )

        service.set("k", "v")
        assert service.get("k") is None
        assert service.exists("k") is False
        assert service.get_multiple(["k"]) == {}
        assert service.remove_by_pattern("*") == 0
        service.remove("k")
        service.clear()

        assert mock_provider.method_calls == []
        mock_provider.clear.assert_not_called()

    def test_hit_and_miss_logged_at_debug(
        self, cache_service: CacheService, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="cachelayer"):
            cache_service.get("k")
            cache_service.set("k", "v")
            cache_service.get("k")

        assert "Cache miss for key: k" in caplog.text
        assert "Cache hit for key: k" in caplog.text
