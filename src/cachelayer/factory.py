"""Construction of the cache stack.

``create_cache_service`` is the single place where the store, the
provider and the facade are wired together. Build one service at
application start-up and pass it to the components that need it.
"""

from collections.abc import Callable

from cachelayer.core.entities.cache_config import CacheConfig
from cachelayer.core.services.cache_service import CacheService
from cachelayer.infrastructure.backends.memory import InMemoryEntryStore
from cachelayer.infrastructure.providers.memory import InMemoryCacheProvider
from cachelayer.infrastructure.serializers.json import JsonSerializer


def create_cache_service(
    config: CacheConfig | None = None,
    clock: Callable[[], float] | None = None,
) -> CacheService:
    """Build an in-memory cache service.

    Args:
        config: Cache configuration. Uses defaults if not provided.
        clock: Optional monotonic clock for the entry store.

    Returns:
        A ready-to-use CacheService.

    Example:
        cache = create_cache_service(CacheConfig(max_size=50_000))
        cache.set("product:123:details", {"id": 123, "name": "Lamp"})
    """
    config = config or CacheConfig()

    store = InMemoryEntryStore(maxsize=config.max_size, clock=clock)
    provider = InMemoryCacheProvider(
        store=store,
        serializer=JsonSerializer(),
        sliding_expiration=config.sliding_expiration,
    )
    return CacheService(provider=provider, config=config)
