"""In-memory cache provider implementation."""

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from datetime import timedelta
from typing import Any

from cachelayer.core.entities.cache_entry import CacheEntry
from cachelayer.core.exceptions import CacheError, SerializationError, StoreError
from cachelayer.core.interfaces.cache_provider import Decoder
from cachelayer.core.interfaces.serializer import ISerializer
from cachelayer.infrastructure.backends.memory import InMemoryEntryStore
from cachelayer.infrastructure.serializers.json import JsonSerializer

logger = logging.getLogger(__name__)

DEFAULT_SLIDING_EXPIRATION = timedelta(minutes=30)


@contextmanager
def _store_call(operation: str) -> Iterator[None]:
    """Wrap unexpected store faults in StoreError."""
    try:
        yield
    except (CacheError, ValueError):
        raise
    except Exception as e:
        raise StoreError(f"Entry store failed during {operation}: {e}") from e


class InMemoryCacheProvider:
    """Cache provider backed by an InMemoryEntryStore.

    Serializes values into opaque payloads, chooses the expiration
    policy and keeps every operation on the store's single key index.
    """

    def __init__(
        self,
        store: InMemoryEntryStore | None = None,
        serializer: ISerializer | None = None,
        sliding_expiration: timedelta = DEFAULT_SLIDING_EXPIRATION,
    ) -> None:
        """Initialize the provider.

        Args:
            store: The entry store. A fresh one is created if omitted.
            serializer: Serializer for payloads. Defaults to JSON.
            sliding_expiration: Window used when ``set`` gets no TTL.
        """
        if sliding_expiration <= timedelta(0):
            raise ValueError("sliding_expiration must be positive")

        self._store = store if store is not None else InMemoryEntryStore()
        self._serializer = serializer or JsonSerializer()
        self._sliding_expiration = sliding_expiration

    @property
    def store(self) -> InMemoryEntryStore:
        """Get the underlying entry store."""
        return self._store

    def get(self, key: str, decode: Decoder | None = None) -> Any | None:
        """Retrieve cached value by key.

        Args:
            key: The cache key to retrieve.
            decode: Optional callable turning the deserialized value
                into the caller's type.

        Returns:
            The cached value, or None if not found or expired.

        Raises:
            SerializationError: If the payload cannot be decoded.
        """
        with _store_call("get"):
            entry = self._store.get(key)

        if entry is None:
            return None
        return self._decode(entry, decode)

    def set(self, key: str, value: Any, ttl: timedelta | None = None) -> None:
        """Store value under key.

        Args:
            key: The cache key.
            value: The value to store.
            ttl: Absolute time-to-live from now. If None, the entry
                uses the sliding expiration window instead.

        Raises:
            ValueError: If value is None or ttl is not positive.
            SerializationError: If the value cannot be serialized.
        """
        if value is None:
            raise ValueError(f"Cannot cache None under key {key!r}")

        payload = self._serializer.serialize(value)

        with _store_call("set"):
            entry = CacheEntry.create(
                key=key,
                payload=payload,
                ttl=ttl if ttl is not None else self._sliding_expiration,
                now=self._store.now(),
                sliding=ttl is None,
            )
            self._store.put(entry)

    def remove(self, key: str) -> None:
        """Delete cached value. Absent keys are a no-op."""
        with _store_call("remove"):
            self._store.delete(key)

    def exists(self, key: str) -> bool:
        """Check for a live entry. Does not refresh sliding expiration."""
        with _store_call("exists"):
            return self._store.contains(key)

    def get_multiple(
        self,
        keys: Iterable[str],
        decode: Decoder | None = None,
    ) -> dict[str, Any]:
        """Retrieve several keys at once.

        Args:
            keys: The cache keys to retrieve.
            decode: Optional callable applied to each value.

        Returns:
            Mapping of the requested keys that hold a live value.
        """
        result: dict[str, Any] = {}
        for key in keys:
            value = self.get(key, decode)
            if value is not None:
                result[key] = value
        return result

    def remove_by_pattern(self, pattern: str) -> int:
        """Delete every key matching the glob.

        The key set is snapshotted when the call starts; keys written
        concurrently afterwards may survive.

        Args:
            pattern: Glob where ``*`` matches any run of characters.

        Returns:
            Number of keys deleted.
        """
        with _store_call("remove_by_pattern"):
            keys_to_delete = self._store.match(pattern)

            count = 0
            for key in keys_to_delete:
                if self._store.delete(key):
                    count += 1

        logger.debug(
            "Pattern %s matched %d keys, removed %d",
            pattern,
            len(keys_to_delete),
            count,
            extra={"cache_pattern": pattern},
        )
        return count

    def clear(self) -> None:
        """Clear all cached values."""
        with _store_call("clear"):
            self._store.clear()

    def _decode(self, entry: CacheEntry, decode: Decoder | None) -> Any:
        value = self._serializer.deserialize(entry.payload)
        if decode is None:
            return value
        try:
            return decode(value)
        except Exception as e:
            raise SerializationError(
                f"Failed to decode value for key {entry.key!r}: {e}"
            ) from e

    def __len__(self) -> int:
        """Return the number of live entries."""
        return len(self._store)
