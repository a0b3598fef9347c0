"""Key pattern utilities for bulk invalidation."""

import functools
import re


@functools.lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Translate a key glob into a compiled regular expression.

    Only ``*`` is a wildcard and matches zero or more of any
    character. Every other character, including ``?``, ``[`` and
    ``.``, is matched literally.

    Args:
        pattern: The glob, e.g. ``"cart:u1:*"``.

    Returns:
        A compiled pattern meant to be used with ``fullmatch``.
    """
    literal_parts = (re.escape(part) for part in pattern.split("*"))
    return re.compile(".*".join(literal_parts), re.DOTALL)


def matches(key: str, pattern: str) -> bool:
    """Check whether the whole key matches the glob.

    Args:
        key: The cache key.
        pattern: The glob pattern.

    Returns:
        True if the pattern matches the entire key.
    """
    return compile_pattern(pattern).fullmatch(key) is not None
