"""Cache provider interface."""

from collections.abc import Callable, Iterable
from datetime import timedelta
from typing import Any, Protocol

Decoder = Callable[[Any], Any]


class ICacheProvider(Protocol):
    """Contract for cache providers.

    Providers own the storage of serialized values and the
    expiration semantics. CacheService layers logging, statistics
    and the failure policy on top of any object implementing this
    protocol.
    """

    def get(self, key: str, decode: Decoder | None = None) -> Any | None:
        """Retrieve cached value by key.

        Args:
            key: The cache key to retrieve.
            decode: Optional callable applied to the deserialized value
                to recover the caller's type.

        Returns:
            The cached value, or None if not found or expired.
        """
        ...

    def set(self, key: str, value: Any, ttl: timedelta | None = None) -> None:
        """Store value with optional TTL.

        Args:
            key: The cache key.
            value: The value to store. Must be serializable and not None.
            ttl: Absolute time-to-live. If None, the provider applies a
                sliding expiration window.
        """
        ...

    def remove(self, key: str) -> None:
        """Delete cached value. Absent keys are a no-op.

        Args:
            key: The cache key to delete.
        """
        ...

    def exists(self, key: str) -> bool:
        """Check if a live entry exists for key.

        Args:
            key: The cache key to check.

        Returns:
            True if the key holds an unexpired value, False otherwise.
        """
        ...

    def get_multiple(
        self,
        keys: Iterable[str],
        decode: Decoder | None = None,
    ) -> dict[str, Any]:
        """Retrieve several keys at once.

        Args:
            keys: The cache keys to retrieve.
            decode: Optional callable applied to each deserialized value.

        Returns:
            Mapping of the requested keys that hold a live value.
            Missing keys are omitted.
        """
        ...

    def remove_by_pattern(self, pattern: str) -> int:
        """Delete keys matching pattern.

        Args:
            pattern: Glob-style pattern where ``*`` matches any run of
                characters. Matched against the whole key.

        Returns:
            Number of keys deleted.
        """
        ...

    def clear(self) -> None:
        """Clear all cached values."""
        ...
