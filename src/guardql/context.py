"""Request context access for guarded resolvers.

The host request context is either a dict (Ariadne's default) or an
object with attributes. guardql reads the caller's granted permissions
and authentication flag from it, and keeps the request's
``PermissionsContext`` in a slot of it.

Usage with Ariadne:
    from guardql.context import inject_permissions_context
    from guardql.core.services import create_permissions_context

    def get_context_value(request, data):
        context = {"request": request}
        inject_permissions_context(
            context,
            create_permissions_context(load_permissions(request)),
        )
        return context

With ``GuardedGraphQL`` a fresh permissions context is injected for every
request; resolvers only need ``get_permissions_context`` to inspect it.
"""

import inspect
import logging
from typing import Any

from guardql.core.entities.guard_config import GuardConfig
from guardql.core.services.permissions import (
    PermissionsContext,
    create_permissions_context,
)

logger = logging.getLogger(__name__)

# Default context key of the per-request permissions context
PERMISSIONS_CONTEXT_KEY = GuardConfig.permissions_context_key

_MISSING = object()


def get_permissions_context(
    context: Any,
    config: GuardConfig | None = None,
) -> PermissionsContext:
    """Get the request's permissions context, creating it if absent.

    A lazily created context is built from the granted permissions found
    in the request context and stored back into its slot, so every field
    of the request shares it.

    Args:
        context: The request context (``info.context``).
        config: Guard configuration.

    Returns:
        The PermissionsContext of the request.
    """
    config = config or GuardConfig()

    permissions_context = _get(context, config.permissions_context_key)
    if isinstance(permissions_context, PermissionsContext):
        return permissions_context

    permissions_context = create_permissions_context(
        get_granted_permissions(context, config),
        debug=config.debug,
    )
    if not _set(context, config.permissions_context_key, permissions_context):
        logger.warning(
            "Request context cannot hold a permissions context; missing "
            "permissions will not be memoized for this request"
        )
    return permissions_context


def inject_permissions_context(
    context: Any,
    permissions_context: PermissionsContext,
    config: GuardConfig | None = None,
) -> None:
    """Inject a permissions context into the request context.

    This should be called when setting up the request context.

    Args:
        context: The request context (dict or object).
        permissions_context: The permissions context to inject.
        config: Guard configuration naming the slot.

    Raises:
        TypeError: If the context cannot hold the permissions context.
    """
    key = (config or GuardConfig()).permissions_context_key
    if not _set(context, key, permissions_context):
        raise TypeError(
            f"Cannot store a permissions context on {type(context).__name__}"
        )


def get_granted_permissions(
    context: Any,
    config: GuardConfig | None = None,
) -> Any:
    """Get the caller's granted permissions, or ``None`` if absent."""
    config = config or GuardConfig()
    granted = _get(context, config.granted_permissions_key)
    return None if granted is _MISSING else granted


def is_authenticated(context: Any, config: GuardConfig | None = None) -> Any:
    """Read the request's authentication flag.

    The flag may be a value or a callable; a callable is invoked and may
    return an awaitable.

    Returns:
        A bool, or an awaitable resolving to one.
    """
    config = config or GuardConfig()
    flag = _get(context, config.is_authenticated_key)
    if flag is _MISSING:
        return False
    if callable(flag):
        flag = flag()
    if inspect.isawaitable(flag):
        return _await_bool(flag)
    return bool(flag)


async def _await_bool(flag: Any) -> bool:
    return bool(await flag)


def _get(context: Any, key: str) -> Any:
    if context is None:
        logger.warning("Resolver called without a request context")
        return _MISSING
    if isinstance(context, dict):
        return context.get(key, _MISSING)
    return getattr(context, key, _MISSING)


def _set(context: Any, key: str, value: Any) -> bool:
    if isinstance(context, dict):
        context[key] = value
        return True
    if context is None:
        return False
    try:
        setattr(context, key, value)
    except (AttributeError, TypeError):
        return False
    return True
