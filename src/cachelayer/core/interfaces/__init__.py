"""Core interfaces (Protocol classes) for cachelayer."""

from cachelayer.core.interfaces.cache_provider import Decoder, ICacheProvider
from cachelayer.core.interfaces.serializer import ISerializer

__all__ = [
    "Decoder",
    "ICacheProvider",
    "ISerializer",
]
