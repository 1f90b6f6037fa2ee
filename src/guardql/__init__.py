"""guardql - Declarative constraint directives for GraphQL APIs.

A Python library enforcing constraints declared in SDL by wrapping field
resolvers: value constraints (@stringLength, @range, @pattern...) and
access control (@hasPermissions, @auth). Constraints declared on an
object type apply to every field of the type unless the field declares
its own.

Example with Ariadne:
    from ariadne import QueryType
    from guardql import GuardConfig
    from guardql.adapters.ariadne import GuardedGraphQL, make_guarded_schema

    type_defs = '''
        type Query {
            me: User
        }

        type User @hasPermissions(permissions: ["user:read"]) {
            id: ID!
            name: String! @trim
            email(missingPermissions: [String!]): String
                @hasPermissions(permissions: ["user:email"], policy: RESOLVER)
        }
    '''

    query = QueryType()

    @query.field("me")
    def resolve_me(_, info):
        return {"id": "1", "name": " Ada ", "email": "ada@example.com"}

    # Directive declarations are prepended to type_defs
    schema = make_guarded_schema(type_defs, query)

    # One permissions context per request
    app = GuardedGraphQL(
        schema,
        granted_permissions=lambda request, context: {"user:read"},
        config=GuardConfig(debug=True),
    )

Degrading RESOLVER-policy fields:
    from guardql.decorators import masked_on_missing_permissions

    @user.field("email")
    @masked_on_missing_permissions(lambda email: "***")
    def resolve_email(obj, info):
        return obj["email"]
"""

from guardql.context import (
    PERMISSIONS_CONTEXT_KEY,
    get_permissions_context,
    inject_permissions_context,
)
from guardql.core.entities import (
    ArgumentSpec,
    ConstraintDeclaration,
    ConstraintKind,
    ConstraintUse,
    GuardConfig,
    Policy,
    access_declaration,
    value_declaration,
)
from guardql.core.interfaces import (
    IErrorMessage,
    IKeyBuilder,
    IMissingPermissionsFilter,
    IPermissionsCache,
)
from guardql.core.services import (
    CompiledDirectives,
    DeclarationRegistry,
    DirectiveCollector,
    DirectiveCompiler,
    PermissionsContext,
    SchemaConstraints,
    apply_directives,
    create_permissions_context,
    debug_filter_missing_permissions,
    debug_get_error_message,
    prod_filter_missing_permissions,
    prod_get_error_message,
    validate_array_or_value,
)
from guardql.decorators import (
    masked_on_missing_permissions,
    null_on_missing_permissions,
)
from guardql.directives import DEFAULT_DIRECTIVES, create_default_registry
from guardql.exceptions import (
    AuthenticationError,
    ConstraintViolation,
    DeclarationConflictError,
    ForbiddenError,
    GuardQLError,
    InvalidDirectiveArgumentError,
    SchemaBuildError,
    SchemaShapeError,
    ValidationError,
)
from guardql.infrastructure import DefaultCacheKeyBuilder, InMemoryPermissionsCache

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "ArgumentSpec",
    "ConstraintDeclaration",
    "ConstraintKind",
    "ConstraintUse",
    "GuardConfig",
    "Policy",
    "access_declaration",
    "value_declaration",
    # Registry and directive application
    "DeclarationRegistry",
    "DEFAULT_DIRECTIVES",
    "create_default_registry",
    "validate_array_or_value",
    "DirectiveCollector",
    "SchemaConstraints",
    "DirectiveCompiler",
    "CompiledDirectives",
    "apply_directives",
    # Permissions
    "PermissionsContext",
    "create_permissions_context",
    "debug_filter_missing_permissions",
    "prod_filter_missing_permissions",
    "debug_get_error_message",
    "prod_get_error_message",
    "PERMISSIONS_CONTEXT_KEY",
    "get_permissions_context",
    "inject_permissions_context",
    # Core interfaces
    "IErrorMessage",
    "IKeyBuilder",
    "IMissingPermissionsFilter",
    "IPermissionsCache",
    # Infrastructure implementations
    "DefaultCacheKeyBuilder",
    "InMemoryPermissionsCache",
    # Decorators
    "masked_on_missing_permissions",
    "null_on_missing_permissions",
    # Errors
    "GuardQLError",
    "SchemaBuildError",
    "DeclarationConflictError",
    "SchemaShapeError",
    "InvalidDirectiveArgumentError",
    "ConstraintViolation",
    "ValidationError",
    "ForbiddenError",
    "AuthenticationError",
]
