"""Lift single-value checks over lists and absent values."""

import inspect
from collections.abc import Callable
from typing import Any

from guardql.exceptions import ConstraintViolation


def validate_array_or_value(check: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Make ``check`` list-aware.

    The returned check:

    - passes ``None`` through unchanged (absence is never a violation);
    - checks every element of a list or tuple, re-raising the first
      violation with the element index prepended to its path, and
      returns the list of (possibly normalised) elements;
    - hands any other value directly to ``check``.

    Nested lists recurse. When a check returns an awaitable for some
    element, the combined result is awaitable too and elements are
    awaited in order.

    Args:
        check: Single-value check returning the value or raising
            ``ConstraintViolation``.

    Returns:
        The list-aware check.
    """

    def check_many(value: Any) -> Any:
        if value is None:
            return None
        if not isinstance(value, (list, tuple)):
            return check(value)

        results = []
        for index, item in enumerate(value):
            try:
                results.append(check_many(item))
            except ConstraintViolation as exc:
                _close_pending(results)
                raise exc.at(index) from exc
            except Exception:
                _close_pending(results)
                raise

        if any(inspect.isawaitable(result) for result in results):
            return _gather_in_order(results)
        return results

    return check_many


async def _gather_in_order(results: list[Any]) -> list[Any]:
    settled = []
    for index, result in enumerate(results):
        if not inspect.isawaitable(result):
            settled.append(result)
            continue
        try:
            settled.append(await result)
        except ConstraintViolation as exc:
            _close_pending(results[index + 1:])
            raise exc.at(index) from exc
    return settled


def _close_pending(results: list[Any]) -> None:
    for pending in results:
        if inspect.iscoroutine(pending):
            pending.close()
