"""cachelayer - In-process caching layer for application services.

A Python library for caching application data in memory with
absolute and sliding expiration, wildcard pattern invalidation,
and a facade that keeps cache failures from breaking read paths.

Example:
    from datetime import timedelta

    from cachelayer import CacheConfig, create_cache_service, keys

    cache = create_cache_service(CacheConfig(default_ttl=timedelta(minutes=30)))

    key = keys.cart_items("u1")
    cache.set(key, [{"product_id": 7, "quantity": 2}], ttl=timedelta(hours=24))
    items = cache.get(key) or []

    # Drop everything cached for one cart
    cache.remove_by_pattern("cart:u1:*")

Cache-aside with type recovery:
    from cachelayer.decorators import cached

    @cached(cache, key="product:{product_id}:details",
            ttl=timedelta(minutes=15), decode=ProductDetails.from_dict)
    def get_product(product_id: int) -> ProductDetails:
        return repository.load(product_id)
"""

from cachelayer import keys
from cachelayer.core.entities import (
    CacheConfig,
    CacheEntry,
    EvictionReason,
    ExpirationPolicy,
)
from cachelayer.core.exceptions import CacheError, SerializationError, StoreError
from cachelayer.core.interfaces import Decoder, ICacheProvider, ISerializer
from cachelayer.core.services import CacheService
from cachelayer.decorators import cached, invalidates
from cachelayer.factory import create_cache_service
from cachelayer.infrastructure import (
    InMemoryCacheProvider,
    InMemoryEntryStore,
    JsonSerializer,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "CacheConfig",
    "CacheEntry",
    "EvictionReason",
    "ExpirationPolicy",
    # Exceptions
    "CacheError",
    "SerializationError",
    "StoreError",
    # Core interfaces
    "Decoder",
    "ICacheProvider",
    "ISerializer",
    # Core services
    "CacheService",
    # Infrastructure implementations
    "InMemoryEntryStore",
    "InMemoryCacheProvider",
    "JsonSerializer",
    # Wiring
    "create_cache_service",
    # Key naming
    "keys",
    # Decorators
    "cached",
    "invalidates",
]
