"""Pytest configuration for guardql tests."""

from collections.abc import Callable

import pytest
from graphql import GraphQLSchema, build_schema

from guardql.core.services.registry import DeclarationRegistry
from guardql.directives import create_default_registry


@pytest.fixture
def registry() -> DeclarationRegistry:
    """Registry holding the built-in directives."""
    return create_default_registry()


@pytest.fixture
def build(registry: DeclarationRegistry) -> Callable[[str], GraphQLSchema]:
    """Build a plain graphql-core schema declaring the registry's directives."""

    def _build(sdl: str) -> GraphQLSchema:
        return build_schema(registry.type_defs + "\n\n" + sdl)

    return _build
