"""The ``@hasPermissions`` access directive.

Usage:
    type User @hasPermissions(permissions: ["user:read"]) {
        name: String
        email(missingPermissions: [String!]): String
            @hasPermissions(permissions: ["user:email"], policy: RESOLVER)
        avatar: String @hasPermissions(permissions: [])
    }

A field-level use replaces the type-level one: ``email`` above requires
``user:email`` only and ``avatar`` is public. Several uses at the same
location are concatenated.
"""

import logging
from collections.abc import Sequence
from typing import Any

from guardql.context import get_permissions_context
from guardql.core.entities.constraint_use import ConstraintUse, FieldTarget
from guardql.core.entities.declaration import (
    ArgumentSpec,
    Resolver,
    ResolverLayer,
    access_declaration,
)
from guardql.core.entities.guard_config import GuardConfig
from guardql.core.entities.policy import Policy
from guardql.core.services.type_shapes import is_string_list_argument
from guardql.exceptions import (
    DeclarationConflictError,
    ForbiddenError,
    SchemaShapeError,
)
from guardql.infrastructure.key_builders.default import DefaultCacheKeyBuilder
from guardql.utils.awaitables import then

logger = logging.getLogger(__name__)

HAS_PERMISSIONS_POLICY_ENUM = '''enum HasPermissionsDirectivePolicy {
  """Field resolver is responsible to evaluate it using `missingPermissions` injected argument"""
  RESOLVER
  """Field resolver is not called if permissions are missing, it throws `ForbiddenError`"""
  THROW
}'''


def build_has_permissions_layer(
    uses: Sequence[ConstraintUse],
    target: FieldTarget,
    config: GuardConfig,
) -> ResolverLayer:
    """Build the access layer enforcing every ``@hasPermissions`` use of a field.

    Args:
        uses: Uses of the directive applying to the field, all from one
            location (the field, or its type).
        target: The field being wrapped.
        config: Guard configuration.

    Returns:
        The resolver layer.

    Raises:
        DeclarationConflictError: If the uses disagree on the policy.
        SchemaShapeError: If RESOLVER is used on a field without a
            nullable ``[String]`` injection argument.
    """
    directive_name = uses[0].name
    permissions: list[str] = []
    policies = set()
    for use in uses:
        permissions.extend(use.arguments["permissions"])
        policies.add(Policy.coerce(use.arguments.get("policy", Policy.THROW)))

    if len(policies) > 1:
        raise DeclarationConflictError(
            f"@{directive_name} uses on {target.coordinate} mix policies: "
            f"{', '.join(sorted(policy.name for policy in policies))}"
        )
    policy = policies.pop()

    if config.dedupe_permissions:
        permissions = list(dict.fromkeys(permissions))
    required = tuple(permissions)

    injection_key = None
    if policy is Policy.RESOLVER:
        argument_name = config.missing_permissions_argument
        argument = target.field.args.get(argument_name)
        if argument is None:
            raise SchemaShapeError(
                f"{target.coordinate} uses @{directive_name}(policy: RESOLVER) "
                f"but has no `{argument_name}: [String!]` argument"
            )
        if not is_string_list_argument(argument):
            raise SchemaShapeError(
                f"{target.coordinate}({argument_name}:) must be a nullable list "
                f"of String, got {argument.type}"
            )
        injection_key = argument.out_name or argument_name

    cache_key = DefaultCacheKeyBuilder(config.key_prefix).build_permissions_key(
        directive_name, required
    )
    logger.debug(
        f"@{directive_name} on {target.coordinate}: {list(required)} ({policy.name})"
    )

    def layer(resolve: Resolver) -> Resolver:
        def wrapped(source: Any, info: Any, **args: Any) -> Any:
            if not required:
                if injection_key is not None:
                    args[injection_key] = None
                return resolve(source, info, **args)

            permissions_context = get_permissions_context(info.context, config)
            missing = permissions_context.check_missing_permissions(
                required, cache_key, source, args, info.context, info
            )

            def proceed(missing: list[str] | None) -> Any:
                if injection_key is not None:
                    args[injection_key] = missing or None
                elif missing:
                    raise ForbiddenError(
                        permissions_context.get_error_message(missing),
                        missing_permissions=list(missing),
                    )
                return resolve(source, info, **args)

            return then(missing, proceed)

        return wrapped

    return layer


HAS_PERMISSIONS = access_declaration(
    "hasPermissions",
    build_has_permissions_layer,
    description="ensures it has permissions before calling the resolver",
    arguments=[
        ArgumentSpec(
            "permissions",
            "[String!]!",
            description=(
                "All permissions required by this field (or object). "
                "All must be fulfilled"
            ),
        ),
        ArgumentSpec(
            "policy",
            "HasPermissionsDirectivePolicy",
            default="THROW",
            description="How to handle missing permissions",
        ),
    ],
    repeatable=True,
    type_defs=[HAS_PERMISSIONS_POLICY_ENUM],
)
