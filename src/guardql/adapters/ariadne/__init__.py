"""Ariadne framework adapter for guardql."""

from guardql.adapters.ariadne.graphql import GuardedGraphQL
from guardql.adapters.ariadne.handler import GuardedGraphQLHTTPHandler
from guardql.adapters.ariadne.schema import make_guarded_schema

__all__ = [
    "GuardedGraphQL",
    "GuardedGraphQLHTTPHandler",
    "make_guarded_schema",
]
