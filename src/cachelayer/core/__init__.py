"""Core domain layer for cachelayer."""

from cachelayer.core.entities import (
    CacheConfig,
    CacheEntry,
    EvictionReason,
    ExpirationPolicy,
)
from cachelayer.core.exceptions import CacheError, SerializationError, StoreError
from cachelayer.core.interfaces import Decoder, ICacheProvider, ISerializer
from cachelayer.core.services import CacheService

__all__ = [
    # Entities
    "CacheConfig",
    "CacheEntry",
    "EvictionReason",
    "ExpirationPolicy",
    # Exceptions
    "CacheError",
    "SerializationError",
    "StoreError",
    # Interfaces
    "Decoder",
    "ICacheProvider",
    "ISerializer",
    # Services
    "CacheService",
]
