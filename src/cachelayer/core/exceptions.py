"""Exceptions raised by the caching layer.

A cache miss is never an exception. These types cover the two ways an
operation can actually fail: the value could not be encoded or decoded, or
the underlying store misbehaved.
"""


class CacheError(Exception):
    """Base class for all cachelayer errors."""

    pass


class SerializationError(CacheError):
    """Raised when serialization or deserialization fails."""

    pass


class StoreError(CacheError):
    """Raised when the underlying storage primitive fails unexpectedly."""

    pass
