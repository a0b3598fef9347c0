"""Infrastructure layer implementations for cachelayer."""

from cachelayer.infrastructure.backends import InMemoryEntryStore
from cachelayer.infrastructure.providers import InMemoryCacheProvider
from cachelayer.infrastructure.serializers import JsonSerializer

__all__ = [
    "InMemoryEntryStore",
    "InMemoryCacheProvider",
    "JsonSerializer",
]
