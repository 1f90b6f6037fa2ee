"""Domain services for guardql."""

from guardql.core.services.directive_collector import (
    DirectiveCollector,
    SchemaConstraints,
)
from guardql.core.services.directive_compiler import (
    CompiledDirectives,
    CompiledField,
    DirectiveCompiler,
    apply_directives,
    is_installed,
)
from guardql.core.services.elementwise import validate_array_or_value
from guardql.core.services.permissions import (
    PermissionsContext,
    create_permissions_context,
    debug_filter_missing_permissions,
    debug_get_error_message,
    prod_filter_missing_permissions,
    prod_get_error_message,
)
from guardql.core.services.registry import DeclarationRegistry

__all__ = [
    "DeclarationRegistry",
    "validate_array_or_value",
    # Two-pass directive application
    "DirectiveCollector",
    "SchemaConstraints",
    "DirectiveCompiler",
    "CompiledDirectives",
    "CompiledField",
    "apply_directives",
    "is_installed",
    # Permissions
    "PermissionsContext",
    "create_permissions_context",
    "debug_filter_missing_permissions",
    "prod_filter_missing_permissions",
    "debug_get_error_message",
    "prod_get_error_message",
]
