"""Domain entities for guardql."""

from guardql.core.entities.constraint_use import ConstraintUse, FieldTarget
from guardql.core.entities.declaration import (
    ACCESS_LOCATIONS,
    VALUE_LOCATIONS,
    ArgumentSpec,
    CheckFactory,
    CheckFunction,
    ConstraintDeclaration,
    ConstraintKind,
    LayerFactory,
    Resolver,
    ResolverLayer,
    access_declaration,
    value_declaration,
)
from guardql.core.entities.guard_config import GuardConfig
from guardql.core.entities.policy import Policy

__all__ = [
    "ArgumentSpec",
    "ConstraintDeclaration",
    "ConstraintKind",
    "ConstraintUse",
    "FieldTarget",
    "GuardConfig",
    "Policy",
    "access_declaration",
    "value_declaration",
    "ACCESS_LOCATIONS",
    "VALUE_LOCATIONS",
    # Type aliases
    "CheckFactory",
    "CheckFunction",
    "LayerFactory",
    "Resolver",
    "ResolverLayer",
]
