"""Cache provider implementations."""

from cachelayer.infrastructure.providers.memory import InMemoryCacheProvider

__all__ = ["InMemoryCacheProvider"]
