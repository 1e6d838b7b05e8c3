"""Exception types for DazzleChain.

All library errors derive from ChainError so callers can catch them as a
family. Errors raised by user supplied callables (predicates, transformers,
child extractors) are never wrapped; they propagate unchanged to whoever
called has_more()/advance() on the cursor.
"""

from typing import Any, Callable, Optional


class ChainError(Exception):
    """Base class for all DazzleChain errors."""
    pass


class ExhaustedCursor(ChainError, LookupError):
    """Raised when advance() is called on a cursor that has no more items.

    This is always a usage error on the caller's side: advance() may only be
    called after has_more() returned True.
    """
    pass


class InvalidArgument(ChainError, ValueError):
    """Raised at construction time when a required argument is missing or bad."""
    pass


class ConcurrentCacheFault(ChainError, RuntimeError):
    """Raised when a cached sequence's fill discipline is violated.

    The typical trigger is a source that, while being pulled to fill the
    cache, traverses the very cached sequence it feeds.
    """
    pass


def require_callable(fn: Optional[Callable[..., Any]], name: str) -> Callable[..., Any]:
    """Validate that a required callable argument was supplied.

    Args:
        fn: The callable to check
        name: Argument name used in the error message

    Returns:
        The callable itself

    Raises:
        InvalidArgument: If fn is None or not callable
    """
    if fn is None:
        raise InvalidArgument(f"{name} is required")
    if not callable(fn):
        raise InvalidArgument(f"{name} must be callable, got {type(fn).__name__}")
    return fn


def require_count(count: int, name: str) -> int:
    """Validate a non-negative integer count argument."""
    if isinstance(count, bool) or not isinstance(count, int):
        raise InvalidArgument(f"{name} must be an integer, got {type(count).__name__}")
    if count < 0:
        raise InvalidArgument(f"{name} cannot be negative")
    return count
