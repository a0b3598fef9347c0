"""Value serializers."""

from cachelayer.infrastructure.serializers.json import JsonSerializer

__all__ = ["JsonSerializer"]
