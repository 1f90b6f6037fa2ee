"""Helpers for resolvers of RESOLVER-policy fields.

A field using ``@hasPermissions(..., policy: RESOLVER)`` always has its
resolver called, with the missing permissions injected as an argument.
These decorators implement the common ways of degrading.
"""

import functools
from collections.abc import Callable
from typing import Any, TypeVar

from guardql.utils.awaitables import then

F = TypeVar("F", bound=Callable[..., Any])


def masked_on_missing_permissions(
    mask: Callable[[Any], Any],
    argument: str = "missingPermissions",
) -> Callable[[F], F]:
    """Decorator masking a resolver's result when permissions are missing.

    The injected missing-permissions argument is removed before the
    resolver is called, so the resolver does not need to accept it.

    Args:
        mask: Called with the resolved value when permissions are
            missing; its result is returned instead.
        argument: Name of the injected argument.

    Returns:
        Decorator for sync or async resolvers.

    Example:
        def mask_email(email):
            user, domain = email.split("@")
            return f"{user[0]}{'*' * (len(user) - 1)}@{domain}"

        @user.field("email")
        @masked_on_missing_permissions(mask_email)
        def resolve_email(obj, info):
            return obj["email"]
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            missing = kwargs.pop(argument, None)
            result = func(*args, **kwargs)
            if not missing:
                return result
            return then(result, lambda value: None if value is None else mask(value))

        return wrapper  # type: ignore[return-value]

    return decorator


def null_on_missing_permissions(
    argument: str = "missingPermissions",
) -> Callable[[F], F]:
    """Decorator returning ``None`` without calling the resolver when
    permissions are missing.

    Example:
        @user.field("phone")
        @null_on_missing_permissions()
        async def resolve_phone(obj, info):
            return await load_phone(obj["id"])
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            if kwargs.pop(argument, None):
                return None
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator
