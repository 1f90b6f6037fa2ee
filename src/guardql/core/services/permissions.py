"""Missing-permissions computation and per-request memoization."""

from collections.abc import Iterable, Sequence, Set
from dataclasses import dataclass, field
from typing import Any

from guardql.core.interfaces.permission_filter import (
    IErrorMessage,
    IMissingPermissionsFilter,
)
from guardql.core.interfaces.permissions_cache import IPermissionsCache
from guardql.infrastructure.backends.memory import InMemoryPermissionsCache

MISSING_PERMISSIONS_MESSAGE = "Missing Permissions"


def debug_filter_missing_permissions(
    granted: Set[str] | None,
    required: Sequence[str],
) -> list[str] | None:
    """Return every required permission not granted, in order.

    Returns ``required`` itself when nothing is granted, and ``None``
    when nothing is missing.
    """
    if not required:
        return None
    if granted is None:
        return list(required) if not isinstance(required, list) else required
    missing = [permission for permission in required if permission not in granted]
    return missing or None


def prod_filter_missing_permissions(
    granted: Set[str] | None,
    required: Sequence[str],
) -> list[str] | None:
    """Return only the first missing permission, or ``None``.

    Reporting a single permission keeps the full set of required but
    ungranted permissions away from the caller.
    """
    for permission in required:
        if granted is None or permission not in granted:
            return [permission]
    return None


def debug_get_error_message(missing: Sequence[str]) -> str:
    return f"{MISSING_PERMISSIONS_MESSAGE}: {', '.join(missing)}"


def prod_get_error_message(missing: Sequence[str] | None = None) -> str:
    return MISSING_PERMISSIONS_MESSAGE


@dataclass
class PermissionsContext:
    """Request-scoped permissions state.

    One instance is created per request and stored in the request
    context. It is passed by reference to every wrapped resolver of the
    request and discarded with it.

    Attributes:
        granted_permissions: Permissions held by the caller. ``None``
            means nothing is granted.
        filter_missing_permissions: Strategy computing missing permissions.
        get_error_message: Strategy rendering access-denied messages.
        cache: Memoized missing permissions, keyed by requirement.
    """

    granted_permissions: frozenset[str] | None = None
    filter_missing_permissions: IMissingPermissionsFilter = (
        prod_filter_missing_permissions
    )
    get_error_message: IErrorMessage = prod_get_error_message
    cache: IPermissionsCache = field(default_factory=InMemoryPermissionsCache)

    def check_missing_permissions(
        self,
        required_permissions: Sequence[str],
        cache_key: str,
        source: Any = None,
        args: dict[str, Any] | None = None,
        context: Any = None,
        info: Any = None,
    ) -> Any:
        """Return the missing permissions for one requirement.

        The first call for ``cache_key`` computes and stores the result,
        including ``None``; later calls return the stored object. When
        the filter is asynchronous the result is a coroutine, and
        concurrent calls for the same key share one computation.

        ``source``, ``args``, ``context`` and ``info`` describe the field
        being resolved. The filter strategy only sees the granted and
        required permissions; they are reserved for subclasses overriding
        this method.
        """
        return self.cache.get_or_compute(
            cache_key,
            lambda: self.filter_missing_permissions(
                self.granted_permissions, required_permissions
            ),
        )


def create_permissions_context(
    granted_permissions: Iterable[str] | None = None,
    *,
    filter_missing_permissions: IMissingPermissionsFilter | None = None,
    get_error_message: IErrorMessage | None = None,
    debug: bool = False,
) -> PermissionsContext:
    """Create a fresh permissions context for one request.

    Args:
        granted_permissions: Permissions held by the caller.
        filter_missing_permissions: Custom filter strategy. Defaults to
            the debug or production filter depending on ``debug``.
        get_error_message: Custom message strategy. Defaults to the
            debug or production message depending on ``debug``.
        debug: Select the debug strategies.

    Returns:
        A new PermissionsContext with an empty cache.
    """
    if filter_missing_permissions is None:
        filter_missing_permissions = (
            debug_filter_missing_permissions
            if debug
            else prod_filter_missing_permissions
        )
    if get_error_message is None:
        get_error_message = (
            debug_get_error_message if debug else prod_get_error_message
        )

    return PermissionsContext(
        granted_permissions=(
            frozenset(granted_permissions)
            if granted_permissions is not None
            else None
        ),
        filter_missing_permissions=filter_missing_permissions,
        get_error_message=get_error_message,
    )
