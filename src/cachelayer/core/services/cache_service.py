"""Cache service - facade for caching operations."""

import logging
import threading
from collections.abc import Callable, Iterable
from datetime import timedelta
from typing import Any, TypeVar

from cachelayer.core.entities.cache_config import CacheConfig
from cachelayer.core.interfaces.cache_provider import Decoder, ICacheProvider

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CacheService:
    """Domain service that fronts a cache provider.

    This is the main entry point for cache operations. It applies
    the default TTL, records hits, misses and errors, and enforces
    the failure policy:

    - Read path (``get``, ``exists``, ``get_multiple``): provider
      failures are logged and degrade to a miss, ``False`` or an
      empty mapping. A cache failure must never become an
      application error.
    - Write path (``set``, ``remove``, ``remove_by_pattern``,
      ``clear``): failures are logged and re-raised so the caller
      knows the write was not applied.

    No operation is retried.
    """

    def __init__(
        self,
        provider: ICacheProvider,
        config: CacheConfig | None = None,
    ) -> None:
        """Initialize the cache service.

        Args:
            provider: The cache provider to delegate to.
            config: Optional cache configuration. Uses defaults if not provided.
        """
        self._provider = provider
        self._config = config or CacheConfig()

        # Statistics
        self._stats_lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._errors = 0

    @property
    def config(self) -> CacheConfig:
        """Get the cache configuration."""
        return self._config

    @property
    def provider(self) -> ICacheProvider:
        """Get the underlying provider."""
        return self._provider

    @property
    def stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dictionary with hits, misses, errors, and total lookups.
        """
        with self._stats_lock:
            return {
                "hits": self._hits,
                "misses": self._misses,
                "errors": self._errors,
                "total": self._hits + self._misses,
            }

    def get(self, key: str, decode: Decoder | None = None) -> Any | None:
        """Get a cached value.

        Args:
            key: The cache key.
            decode: Optional callable turning the stored value into the
                caller's type, e.g. ``Product.from_dict``.

        Returns:
            The cached value, or None on a miss or provider failure.
        """
        if not self._config.enabled:
            return None

        try:
            logger.debug("Retrieving cache key: %s", key, extra={"cache_key": key})
            result = self._provider.get(key, decode)
        except Exception:
            self._record_error()
            logger.exception(
                "Error retrieving cache key: %s", key, extra={"cache_key": key}
            )
            return None

        if result is None:
            self._record(hit=False)
            logger.debug("Cache miss for key: %s", key, extra={"cache_key": key})
        else:
            self._record(hit=True)
            logger.debug("Cache hit for key: %s", key, extra={"cache_key": key})
        return result

    def set(self, key: str, value: Any, ttl: timedelta | None = None) -> None:
        """Cache a value.

        Args:
            key: The cache key.
            value: The value to cache.
            ttl: Optional TTL. Uses ``config.default_ttl`` if not provided.

        Raises:
            Exception: Whatever the provider raised, after logging it.
        """
        if not self._config.enabled:
            return

        effective_ttl = ttl if ttl is not None else self._config.default_ttl
        try:
            logger.debug(
                "Setting cache key: %s with expiry: %s",
                key,
                effective_ttl,
                extra={"cache_key": key},
            )
            self._provider.set(key, value, effective_ttl)
        except Exception:
            self._record_error()
            logger.exception(
                "Error setting cache key: %s", key, extra={"cache_key": key}
            )
            raise
        logger.debug("Successfully set cache key: %s", key, extra={"cache_key": key})

    def remove(self, key: str) -> None:
        """Remove a cached value. Removing an absent key is a no-op."""
        if not self._config.enabled:
            return

        try:
            logger.debug("Removing cache key: %s", key, extra={"cache_key": key})
            self._provider.remove(key)
        except Exception:
            self._record_error()
            logger.exception(
                "Error removing cache key: %s", key, extra={"cache_key": key}
            )
            raise

    def exists(self, key: str) -> bool:
        """Check whether a key holds a live value.

        Returns:
            True if present, False if absent or on provider failure.
        """
        if not self._config.enabled:
            return False

        try:
            exists = self._provider.exists(key)
        except Exception:
            self._record_error()
            logger.exception(
                "Error checking if cache key exists: %s",
                key,
                extra={"cache_key": key},
            )
            return False

        logger.debug(
            "Cache key %s exists: %s", key, exists, extra={"cache_key": key}
        )
        return exists

    def get_multiple(
        self,
        keys: Iterable[str],
        decode: Decoder | None = None,
    ) -> dict[str, Any]:
        """Get several cached values at once.

        Args:
            keys: The cache keys.
            decode: Optional callable applied to each value.

        Returns:
            Mapping with only the keys that hold a value. Empty on
            provider failure.
        """
        if not self._config.enabled:
            return {}

        keys_list = list(keys)
        try:
            logger.debug("Retrieving multiple cache keys. Count: %d", len(keys_list))
            result = self._provider.get_multiple(keys_list, decode)
        except Exception:
            self._record_error()
            logger.exception(
                "Error retrieving multiple cache keys: %s",
                keys_list,
                extra={"cache_keys": keys_list},
            )
            return {}

        with self._stats_lock:
            for key in dict.fromkeys(keys_list):
                if key in result:
                    self._hits += 1
                else:
                    self._misses += 1
        logger.debug(
            "Retrieved %d of %d cache keys", len(result), len(keys_list)
        )
        return result

    def remove_by_pattern(self, pattern: str) -> int:
        """Remove every key matching a glob pattern.

        Args:
            pattern: Glob where ``*`` matches any run of characters,
                e.g. ``"cart:u1:*"``.

        Returns:
            Number of keys removed.

        Raises:
            Exception: Whatever the provider raised, after logging it.
        """
        if not self._config.enabled:
            return 0

        try:
            logger.debug(
                "Removing cache keys matching pattern: %s",
                pattern,
                extra={"cache_pattern": pattern},
            )
            count = self._provider.remove_by_pattern(pattern)
        except Exception:
            self._record_error()
            logger.exception(
                "Error removing cache keys by pattern: %s",
                pattern,
                extra={"cache_pattern": pattern},
            )
            raise

        logger.debug(
            "Removed %d cache keys matching pattern: %s",
            count,
            pattern,
            extra={"cache_pattern": pattern},
        )
        return count

    def get_or_set(
        self,
        key: str,
        factory: Callable[[], T],
        ttl: timedelta | None = None,
        decode: Decoder | None = None,
    ) -> T:
        """Cache-aside lookup.

        Returns the cached value when present. Otherwise calls
        ``factory``, caches its result and returns it. A None result
        is returned without being cached.

        Args:
            key: The cache key.
            factory: Loads the value from the primary source on a miss.
            ttl: Optional TTL for the stored value.
            decode: Optional callable applied to a cached value.

        Returns:
            The cached or freshly loaded value.
        """
        cached = self.get(key, decode)
        if cached is not None:
            return cached  # type: ignore[no-any-return]

        value = factory()
        if value is not None:
            self.set(key, value, ttl)
        return value

    def clear(self) -> None:
        """Clear all cached entries and reset statistics."""
        if not self._config.enabled:
            return

        try:
            self._provider.clear()
        except Exception:
            self._record_error()
            logger.exception("Error clearing cache")
            raise

        with self._stats_lock:
            self._hits = 0
            self._misses = 0
            self._errors = 0

    def _record(self, hit: bool) -> None:
        with self._stats_lock:
            if hit:
                self._hits += 1
            else:
                self._misses += 1

    def _record_error(self) -> None:
        with self._stats_lock:
            self._errors += 1
