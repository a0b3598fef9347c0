"""In-memory entry store backends."""

from cachelayer.infrastructure.backends.memory import EvictionListener, InMemoryEntryStore

__all__ = ["EvictionListener", "InMemoryEntryStore"]
