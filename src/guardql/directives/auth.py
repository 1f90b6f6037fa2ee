"""The ``@auth`` access directive."""

from collections.abc import Sequence
from typing import Any

from guardql.context import is_authenticated
from guardql.core.entities.constraint_use import ConstraintUse, FieldTarget
from guardql.core.entities.declaration import (
    Resolver,
    ResolverLayer,
    access_declaration,
)
from guardql.core.entities.guard_config import GuardConfig
from guardql.exceptions import AuthenticationError
from guardql.utils.awaitables import then


def build_auth_layer(
    uses: Sequence[ConstraintUse],
    target: FieldTarget,
    config: GuardConfig,
) -> ResolverLayer:
    """Block the resolver unless the request is authenticated."""

    def layer(resolve: Resolver) -> Resolver:
        def wrapped(source: Any, info: Any, **args: Any) -> Any:
            def proceed(authenticated: bool) -> Any:
                if not authenticated:
                    raise AuthenticationError()
                return resolve(source, info, **args)

            return then(is_authenticated(info.context, config), proceed)

        return wrapped

    return layer


AUTH = access_declaration(
    "auth",
    build_auth_layer,
    description="ensures the request is authenticated before calling the resolver",
)
