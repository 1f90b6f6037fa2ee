"""Helpers keeping wrapped resolvers sync when nothing is awaitable."""

import inspect
from collections.abc import Callable
from typing import Any


def then(value: Any, callback: Callable[[Any], Any]) -> Any:
    """Apply ``callback`` to ``value`` once it is available.

    If ``value`` is awaitable, returns a coroutine awaiting it, then
    awaiting the callback result too when that is awaitable. Otherwise
    the callback is applied immediately and its result returned.
    """
    if inspect.isawaitable(value):
        return _then_async(value, callback)
    return callback(value)


async def _then_async(value: Any, callback: Callable[[Any], Any]) -> Any:
    result = callback(await value)
    if inspect.isawaitable(result):
        result = await result
    return result


def ensure_sync(value: Any, what: str) -> Any:
    """Reject awaitable values where only synchronous results are allowed."""
    if inspect.isawaitable(value):
        close = getattr(value, "close", None)
        if close is not None:
            close()
        raise TypeError(f"{what} must be synchronous")
    return value
