"""Executable schema factory for Ariadne."""

from typing import Any

from ariadne import make_executable_schema
from graphql import GraphQLSchema

from guardql.core.entities.guard_config import GuardConfig
from guardql.core.services.directive_compiler import apply_directives
from guardql.core.services.registry import DeclarationRegistry
from guardql.directives import create_default_registry


def make_guarded_schema(
    type_defs: str | list[str],
    *bindables: Any,
    registry: DeclarationRegistry | None = None,
    config: GuardConfig | None = None,
    **kwargs: Any,
) -> GraphQLSchema:
    """Build an executable schema with constraint directives applied.

    Equivalent to Ariadne's ``make_executable_schema``, except that the
    directive declarations of ``registry`` are prepended to ``type_defs``
    and their uses are enforced by wrapping resolvers once bindables are
    bound.

    Args:
        type_defs: SDL of the application schema.
        *bindables: Ariadne bindables (QueryType, ObjectType...).
        registry: Directives to declare and enforce. Defaults to the
            built-in directives.
        config: Guard configuration.
        **kwargs: Passed to ``make_executable_schema``.

    Returns:
        The guarded schema.

    Raises:
        SchemaBuildError: If the directives cannot be applied.

    Example::

        schema = make_guarded_schema(type_defs, query, user)
        app = GuardedGraphQL(schema, granted_permissions=load_permissions)
    """
    registry = registry if registry is not None else create_default_registry()
    if isinstance(type_defs, str):
        type_defs = [type_defs]

    schema = make_executable_schema(
        [registry.type_defs, *type_defs],
        *bindables,
        **kwargs,
    )
    return apply_directives(schema, registry=registry, config=config)
