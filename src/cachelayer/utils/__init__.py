"""Utilities for cachelayer."""

from cachelayer.utils.patterns import compile_pattern, matches

__all__ = ["compile_pattern", "matches"]
