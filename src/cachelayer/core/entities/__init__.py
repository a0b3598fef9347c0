"""Domain entities for cachelayer."""

from cachelayer.core.entities.cache_config import CacheConfig
from cachelayer.core.entities.cache_entry import (
    CacheEntry,
    EvictionReason,
    ExpirationPolicy,
)

__all__ = [
    "CacheConfig",
    "CacheEntry",
    "EvictionReason",
    "ExpirationPolicy",
]
