"""Cache configuration entity."""

from dataclasses import dataclass, field
from datetime import timedelta


@dataclass
class CacheConfig:
    """Cache configuration.

    Provides configuration options for the caching system:
    TTL defaults, the sliding window used when no TTL is given
    to the provider, the store size limit and a global toggle.

    Default TTL vs. sliding expiration:
        ``CacheService.set`` always passes a TTL down to the provider,
        falling back to ``default_ttl`` when the caller gives none, so
        entries written through the service expire at an absolute
        deadline. ``sliding_expiration`` only applies when the provider
        is used directly with ``ttl=None``.
    """

    enabled: bool = True
    default_ttl: timedelta = field(default_factory=lambda: timedelta(minutes=30))
    sliding_expiration: timedelta = field(
        default_factory=lambda: timedelta(minutes=30)
    )
    max_size: int = 10_000

    def __post_init__(self) -> None:
        """Validate durations and size."""
        if self.default_ttl <= timedelta(0):
            raise ValueError("default_ttl must be positive")
        if self.sliding_expiration <= timedelta(0):
            raise ValueError("sliding_expiration must be positive")
        if self.max_size <= 0:
            raise ValueError("max_size must be positive")
