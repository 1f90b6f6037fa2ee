"""Guarded GraphQL ASGI app for Ariadne."""

from typing import Any

from ariadne.asgi import GraphQL

from guardql.adapters.ariadne.handler import (
    GrantedPermissionsCallback,
    GuardedGraphQLHTTPHandler,
    IsAuthenticatedCallback,
)
from guardql.core.entities.guard_config import GuardConfig


class GuardedGraphQL(GraphQL):
    """Drop-in replacement for Ariadne's GraphQL creating one permissions
    context per request.

    Example::

        app = GuardedGraphQL(
            make_guarded_schema(type_defs, query),
            granted_permissions=lambda request, context: load(request),
            config=GuardConfig(debug=True),
        )
    """

    def __init__(
        self,
        schema: Any,
        granted_permissions: GrantedPermissionsCallback | None = None,
        is_authenticated: IsAuthenticatedCallback | None = None,
        config: GuardConfig | None = None,
        **kwargs: Any,
    ) -> None:
        debug = kwargs.get("debug", False)

        http_handler = GuardedGraphQLHTTPHandler(
            granted_permissions=granted_permissions,
            is_authenticated=is_authenticated,
            config=config,
            debug=debug,
        )

        super().__init__(schema, http_handler=http_handler, **kwargs)

        self._guarded_handler = http_handler

    @property
    def config(self) -> GuardConfig:
        return self._guarded_handler.config
