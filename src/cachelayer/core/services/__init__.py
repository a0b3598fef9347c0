"""Domain services for cachelayer."""

from cachelayer.core.services.cache_service import CacheService

__all__ = [
    "CacheService",
]
