"""Built-in constraint directives."""

from guardql.core.entities.declaration import ConstraintDeclaration
from guardql.core.services.registry import DeclarationRegistry
from guardql.directives.allowed_values import ALLOWED_VALUES
from guardql.directives.auth import AUTH
from guardql.directives.has_permissions import (
    HAS_PERMISSIONS,
    HAS_PERMISSIONS_POLICY_ENUM,
)
from guardql.directives.list_length import LIST_LENGTH
from guardql.directives.pattern import PATTERN
from guardql.directives.range import RANGE
from guardql.directives.string_length import STRING_LENGTH
from guardql.directives.trim import TRIM, TrimMode

DEFAULT_DIRECTIVES: tuple[ConstraintDeclaration, ...] = (
    HAS_PERMISSIONS,
    AUTH,
    STRING_LENGTH,
    LIST_LENGTH,
    RANGE,
    PATTERN,
    TRIM,
    ALLOWED_VALUES,
)


def create_default_registry() -> DeclarationRegistry:
    """Create a registry holding every built-in directive."""
    return DeclarationRegistry(DEFAULT_DIRECTIVES)


__all__ = [
    "ALLOWED_VALUES",
    "AUTH",
    "HAS_PERMISSIONS",
    "HAS_PERMISSIONS_POLICY_ENUM",
    "LIST_LENGTH",
    "PATTERN",
    "RANGE",
    "STRING_LENGTH",
    "TRIM",
    "TrimMode",
    "DEFAULT_DIRECTIVES",
    "create_default_registry",
]
