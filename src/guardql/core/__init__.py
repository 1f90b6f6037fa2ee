"""Core domain layer for guardql."""

from guardql.core.entities import (
    ConstraintDeclaration,
    ConstraintKind,
    ConstraintUse,
    GuardConfig,
    Policy,
)
from guardql.core.interfaces import (
    IErrorMessage,
    IKeyBuilder,
    IMissingPermissionsFilter,
    IPermissionsCache,
)
from guardql.core.services import (
    DeclarationRegistry,
    DirectiveCompiler,
    PermissionsContext,
    apply_directives,
)

__all__ = [
    # Entities
    "ConstraintDeclaration",
    "ConstraintKind",
    "ConstraintUse",
    "GuardConfig",
    "Policy",
    # Interfaces
    "IErrorMessage",
    "IKeyBuilder",
    "IMissingPermissionsFilter",
    "IPermissionsCache",
    # Services
    "DeclarationRegistry",
    "DirectiveCompiler",
    "PermissionsContext",
    "apply_directives",
]
