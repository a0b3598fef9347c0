"""Cache entry entity."""

from dataclasses import dataclass, replace
from datetime import timedelta
from enum import Enum


class ExpirationPolicy(Enum):
    """How an entry's deadline is computed.

    ABSOLUTE: Deadline fixed at insertion time.
    SLIDING: Deadline resets every time the entry is read.
    """

    ABSOLUTE = "absolute"
    SLIDING = "sliding"


class EvictionReason(Enum):
    """Why the store dropped an entry on its own."""

    EXPIRED = "expired"
    CAPACITY = "capacity"


@dataclass(frozen=True)
class CacheEntry:
    """Immutable cache entry value object.

    Holds a serialized payload together with its expiration policy.
    Timestamps are readings of the owning store's clock (monotonic
    seconds by default), not wall-clock datetimes.
    """

    key: str
    payload: bytes
    policy: ExpirationPolicy
    ttl: timedelta
    inserted_at: float
    last_access: float

    @property
    def expires_at(self) -> float:
        """Calculate the expiration deadline.

        Returns:
            Clock reading after which the entry is logically absent.
        """
        if self.policy is ExpirationPolicy.SLIDING:
            return self.last_access + self.ttl.total_seconds()
        return self.inserted_at + self.ttl.total_seconds()

    @property
    def is_sliding(self) -> bool:
        return self.policy is ExpirationPolicy.SLIDING

    def touch(self, now: float) -> "CacheEntry":
        """Return a copy whose last access is ``now``."""
        return replace(self, last_access=now)

    @classmethod
    def create(
        cls,
        key: str,
        payload: bytes,
        ttl: timedelta,
        now: float,
        sliding: bool = False,
    ) -> "CacheEntry":
        """Factory method to create a new cache entry.

        Args:
            key: The cache key.
            payload: The serialized value.
            ttl: Time-to-live, or the sliding window length.
            now: Current reading of the store clock.
            sliding: Whether the deadline slides on access.

        Returns:
            A new CacheEntry instance.

        Raises:
            ValueError: If ``ttl`` is not positive.
        """
        if ttl <= timedelta(0):
            raise ValueError(f"ttl must be positive, got {ttl!r}")

        return cls(
            key=key,
            payload=payload,
            policy=ExpirationPolicy.SLIDING if sliding else ExpirationPolicy.ABSOLUTE,
            ttl=ttl,
            inserted_at=now,
            last_access=now,
        )
