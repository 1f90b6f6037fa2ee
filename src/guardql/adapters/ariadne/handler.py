"""Permission-aware HTTP handler for Ariadne GraphQL."""

import copy
import inspect
import logging
from collections.abc import Callable
from typing import Any

from ariadne.asgi.handlers import GraphQLHTTPHandler

from guardql.context import get_granted_permissions, inject_permissions_context
from guardql.core.entities.guard_config import GuardConfig
from guardql.core.services.permissions import (
    PermissionsContext,
    create_permissions_context,
)

logger = logging.getLogger(__name__)

GrantedPermissionsCallback = Callable[[Any, Any], Any]
IsAuthenticatedCallback = Callable[[Any, Any], Any]


class GuardedGraphQLHTTPHandler(GraphQLHTTPHandler):
    """HTTP handler giving every request its own permissions context.

    The request context is built by Ariadne as usual (``context_value``),
    then completed with:

    - the caller's granted permissions, from ``granted_permissions``
      (called with the request and the context, may be async) or, if not
      given, from the context itself;
    - the authentication flag, from ``is_authenticated`` when given;
    - a fresh ``PermissionsContext`` with an empty cache.

    A static ``context_value`` shared by all requests is copied first so
    no permissions state leaks between requests.
    """

    def __init__(
        self,
        granted_permissions: GrantedPermissionsCallback | None = None,
        is_authenticated: IsAuthenticatedCallback | None = None,
        config: GuardConfig | None = None,
        debug: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._granted_permissions = granted_permissions
        self._is_authenticated = is_authenticated
        self._config = config or GuardConfig()
        self._debug = debug

    @property
    def config(self) -> GuardConfig:
        return self._config

    def _log(self, message: str) -> None:
        if self._debug:
            print(f"[GUARD] {message}")

    async def get_context_for_request(self, request: Any, data: Any) -> Any:
        context = await super().get_context_for_request(request, data)
        if context is None:
            context = {"request": request}
        elif context is self.context_value:
            context = copy.copy(context)

        config = self._config
        if self._granted_permissions is not None:
            granted = await _maybe_await(self._granted_permissions(request, context))
        else:
            granted = get_granted_permissions(context, config)

        if self._is_authenticated is not None:
            authenticated = await _maybe_await(self._is_authenticated(request, context))
            _set(context, config.is_authenticated_key, bool(authenticated))

        permissions_context = self.create_permissions_context(granted)
        inject_permissions_context(context, permissions_context, config)

        self._log(
            f"Granted: {sorted(granted) if granted is not None else None}"
        )
        return context

    def create_permissions_context(self, granted: Any) -> PermissionsContext:
        """Create the permissions context of one request.

        Override to plug custom filter or message strategies.
        """
        return create_permissions_context(granted, debug=self._config.debug)


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def _set(context: Any, key: str, value: Any) -> None:
    if isinstance(context, dict):
        context[key] = value
    else:
        setattr(context, key, value)
