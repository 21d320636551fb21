"""
.. Utilities
"""

from __future__ import annotations

__all__ = (
    "arg_type_error",
    "arg_value_error_msg",
    "arg_value_error_range",
    "cached",
)

from functools import wraps
from threading import RLock
from types import FunctionType
from typing import Any


def cached(func: FunctionType) -> FunctionType:
    """Enables return value caching.

    Args:
        func: The function to be wrapped.

    An *_invalidate_cache* function is set as an attribute of the returned wrapper
    which when called clears the cache, so that the next call actually calls the
    wrapped function.

    NOTE:
        It's thread-safe, i.e there is no race condition between calls to the same
        decorated object across threads of the same process.

        Only works when function arguments, if any, are hashable.
    """

    @wraps(func)
    def cached_wrapper(*args, **kwargs):
        arguments = (args, tuple(kwargs.items()))
        with lock:
            try:
                return cache[arguments]
            except KeyError:
                return cache.setdefault(arguments, func(*args, **kwargs))

    def invalidate():
        with lock:
            cache.clear()

    cache = {}
    lock = RLock()
    cached_wrapper._invalidate_cache = invalidate

    return cached_wrapper


def arg_type_error(arg: str, value: Any) -> TypeError:
    return TypeError(f"Invalid type for {arg!r} (got: {type(value).__qualname__})")


def arg_value_error_msg(msg: str, value: Any) -> ValueError:
    return ValueError(f"{msg} (got: {value!r})")


def arg_value_error_range(arg: str, value: Any, got_extra: str = "") -> ValueError:
    return ValueError(
        f"{arg!r} is out of range (got: {value!r}; {got_extra})"
        if got_extra
        else f"{arg!r} is out of range (got: {value!r})"
    )
