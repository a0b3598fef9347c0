"""In-memory entry store implementation."""

import logging
import threading
import time
from collections.abc import Callable
from typing import Any

from cachetools import TLRUCache  # type: ignore[import-untyped]

from cachelayer.core.entities.cache_entry import CacheEntry, EvictionReason
from cachelayer.utils.patterns import matches

logger = logging.getLogger(__name__)

EvictionListener = Callable[[str, CacheEntry, EvictionReason], None]


def _entry_deadline(key: str, entry: CacheEntry, now: float) -> float:
    return entry.expires_at


class _EvictingTLRUCache(TLRUCache):
    """TLRUCache that reports the entries it drops on its own."""

    def __init__(
        self,
        maxsize: int,
        timer: Callable[[], float],
        on_evict: Callable[[str, CacheEntry, EvictionReason], None],
    ) -> None:
        self._on_evict = on_evict
        super().__init__(maxsize=maxsize, ttu=_entry_deadline, timer=timer)

    def expire(self, time: Any = None) -> list[tuple[str, CacheEntry]]:
        expired = super().expire(time)
        for key, entry in expired:
            self._on_evict(key, entry, EvictionReason.EXPIRED)
        return expired

    def popitem(self) -> tuple[str, CacheEntry]:
        key, entry = super().popitem()
        self._on_evict(key, entry, EvictionReason.CAPACITY)
        return key, entry


class InMemoryEntryStore:
    """In-memory entry store with per-entry deadlines.

    Suitable for single-process deployments. Uses cachetools'
    TLRUCache so that every entry carries its own deadline
    (absolute or sliding) and the store stays bounded with LRU
    eviction.

    The store's live key set doubles as the key registry used for
    pattern operations: there is no second structure to keep in
    sync. Entries the store drops by itself (expiry sweep, capacity
    eviction) leave the key set in the same step and are reported to
    eviction listeners. Explicit deletes are not reported.

    All operations are guarded by one re-entrant lock, so the store
    can be shared between threads.
    """

    def __init__(
        self,
        maxsize: int = 10_000,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize the in-memory entry store.

        Args:
            maxsize: Maximum number of entries held at once.
            clock: Monotonic clock returning seconds. Defaults to
                ``time.monotonic``.
        """
        self._maxsize = maxsize
        self._clock = clock or time.monotonic
        self._lock = threading.RLock()
        self._listeners: list[EvictionListener] = []
        self._cache = self._new_cache()

    def _new_cache(self) -> _EvictingTLRUCache:
        return _EvictingTLRUCache(
            maxsize=self._maxsize,
            timer=self._clock,
            on_evict=self._notify_eviction,
        )

    def now(self) -> float:
        """Return the current reading of the store clock."""
        return self._clock()

    def get(self, key: str) -> CacheEntry | None:
        """Retrieve a live entry, refreshing it if its expiration slides.

        Args:
            key: The cache key to retrieve.

        Returns:
            The entry, or None if not found or expired.
        """
        with self._lock:
            try:
                entry = self._cache[key]
            except KeyError:
                return None

            if entry.is_sliding:
                entry = entry.touch(self._clock())
                self._cache[key] = entry
            return entry

    def peek(self, key: str) -> CacheEntry | None:
        """Retrieve a live entry without refreshing its expiration."""
        with self._lock:
            try:
                return self._cache[key]
            except KeyError:
                return None

    def put(self, entry: CacheEntry) -> None:
        """Insert or replace the entry stored under ``entry.key``."""
        with self._lock:
            self._cache[entry.key] = entry

    def delete(self, key: str) -> bool:
        """Delete an entry.

        Args:
            key: The cache key to delete.

        Returns:
            True if a live entry was deleted, False if the key was
            absent or had already expired.
        """
        with self._lock:
            try:
                del self._cache[key]
            except KeyError:
                # cachetools raises after dropping an expired item, and
                # for unknown keys; both are logically absent.
                return False
            return True

    def contains(self, key: str) -> bool:
        """Check for a live entry without refreshing its expiration."""
        with self._lock:
            return key in self._cache

    def keys(self) -> list[str]:
        """Snapshot the live keys.

        Expired entries are swept first, so eviction listeners
        observe them before the snapshot is returned.

        Returns:
            A list of keys; later writes do not affect it.
        """
        with self._lock:
            self._cache.expire()
            return list(self._cache)

    def match(self, pattern: str) -> list[str]:
        """Snapshot the live keys matching a glob.

        Args:
            pattern: Glob where ``*`` matches any run of characters,
                anchored at both ends.

        Returns:
            Matching keys at call time.
        """
        return [key for key in self.keys() if matches(key, pattern)]

    def expire(self) -> list[str]:
        """Sweep expired entries now.

        Returns:
            Keys that were swept.
        """
        with self._lock:
            return [key for key, _ in self._cache.expire()]

    def clear(self) -> None:
        """Drop every entry without notifying eviction listeners."""
        with self._lock:
            self._cache = self._new_cache()

    def add_eviction_listener(self, listener: EvictionListener) -> None:
        """Register a callable notified when the store drops an entry.

        Args:
            listener: Called as ``listener(key, entry, reason)`` while the
                store lock is held. It must not block.
        """
        with self._lock:
            self._listeners.append(listener)

    def remove_eviction_listener(self, listener: EvictionListener) -> None:
        """Unregister a listener. Unknown listeners are ignored."""
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _notify_eviction(
        self,
        key: str,
        entry: CacheEntry,
        reason: EvictionReason,
    ) -> None:
        logger.debug(
            "Evicted cache key: %s (%s)",
            key,
            reason.value,
            extra={"cache_key": key, "eviction_reason": reason.value},
        )
        for listener in list(self._listeners):
            try:
                listener(key, entry, reason)
            except Exception:
                logger.exception(
                    "Eviction listener failed for cache key: %s",
                    key,
                    extra={"cache_key": key},
                )

    def __len__(self) -> int:
        """Return the number of live entries in the store."""
        with self._lock:
            self._cache.expire()
            return len(self._cache)

    @property
    def maxsize(self) -> int:
        """Return the maximum size of the store."""
        return self._maxsize
