"""Cache-aside decorators.

These decorators wrap plain functions (repository lookups, query
handlers) with cache-aside reads and pattern invalidation. The cache
service is passed in explicitly; there is no module-level instance.
"""

import functools
import inspect
import re
from collections.abc import Callable
from datetime import timedelta
from typing import Any, TypeVar

from cachelayer.core.interfaces.cache_provider import Decoder
from cachelayer.core.services.cache_service import CacheService

F = TypeVar("F", bound=Callable[..., Any])

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def cached(
    cache: CacheService,
    key: str | Callable[..., str],
    ttl: timedelta | None = None,
    decode: Decoder | None = None,
) -> Callable[[F], F]:
    """Decorator for caching function results.

    On a hit the cached value is returned without calling the
    function. On a miss the function runs and a non-None result is
    stored.

    Args:
        cache: The cache service to use.
        key: Key template with ``{arg_name}`` placeholders bound from
            the call's arguments, or a callable receiving
            ``(*args, **kwargs)`` and returning the key.
        ttl: Time-to-live for cached results. Uses config default if None.
        decode: Optional callable applied to cached values.

    Returns:
        Decorated function.

    Example:
        @cached(cache, key="product:{product_id}:details",
                ttl=timedelta(minutes=15), decode=ProductDetails.from_dict)
        def get_product(product_id: int) -> ProductDetails:
            return repository.load(product_id)
    """

    def decorator(func: F) -> F:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            cache_key = _resolve_key(key, signature, args, kwargs)
            return cache.get_or_set(
                cache_key,
                lambda: func(*args, **kwargs),
                ttl=ttl,
                decode=decode,
            )

        return wrapper  # type: ignore

    return decorator


def invalidates(
    cache: CacheService,
    patterns: list[str],
) -> Callable[[F], F]:
    """Decorator for invalidating cache entries after a write.

    Executes the decorated function and then removes every key
    matching the given patterns. Nothing is invalidated if the
    function raises.

    Args:
        cache: The cache service to use.
        patterns: Key globs. Supports ``{arg_name}`` interpolation.

    Returns:
        Decorated function.

    Example:
        @invalidates(cache, patterns=["cart:{cart_id}:*"])
        def checkout(cart_id: str) -> Order:
            return orders.place(cart_id)
    """

    def decorator(func: F) -> F:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            result = func(*args, **kwargs)

            arguments = _bind_arguments(signature, args, kwargs)
            for pattern in patterns:
                cache.remove_by_pattern(_interpolate_string(pattern, arguments))

            return result

        return wrapper  # type: ignore

    return decorator


def _resolve_key(
    key: str | Callable[..., str],
    signature: inspect.Signature,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> str:
    if callable(key):
        return key(*args, **kwargs)
    return _interpolate_string(key, _bind_arguments(signature, args, kwargs))


def _bind_arguments(
    signature: inspect.Signature,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> dict[str, Any]:
    """Map parameter names to the values of this call, defaults included."""
    bound = signature.bind(*args, **kwargs)
    bound.apply_defaults()
    return dict(bound.arguments)


def _interpolate_string(template: str, arguments: dict[str, Any]) -> str:
    """Interpolate {arg_name} placeholders in string.

    Args:
        template: String with {arg_name} placeholders.
        arguments: Argument values by parameter name.

    Returns:
        Interpolated string. Unknown placeholders are kept as-is.
    """

    def replacer(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in arguments:
            return str(arguments[name])
        return match.group(0)

    return _PLACEHOLDER.sub(replacer, template)
