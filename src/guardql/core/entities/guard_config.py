"""Guard configuration entity."""

from dataclasses import dataclass


@dataclass
class GuardConfig:
    """Configuration shared by the directive compiler and request handlers.

    Debug vs production:
        With ``debug=True`` missing permissions are reported in full
        ("Missing Permissions: a, b"). Otherwise only the first missing
        permission is computed and the error message carries no detail.

    Request context keys:
        The host request context (a dict, or an object with attributes)
        carries the caller's granted permissions under
        ``granted_permissions_key`` and the authentication flag under
        ``is_authenticated_key``. The per-request permissions context is
        stored under ``permissions_context_key``.
    """

    debug: bool = False

    # Request context keys
    permissions_context_key: str = "_guardql_permissions"
    granted_permissions_key: str = "granted_permissions"
    is_authenticated_key: str = "is_authenticated"

    # Reserved argument names injected into field resolvers
    missing_permissions_argument: str = "missingPermissions"
    validation_errors_argument: str = "validationErrors"

    # Remove repeated permissions after concatenating @hasPermissions uses
    dedupe_permissions: bool = False

    # Prefix for missing-permissions cache keys
    key_prefix: str = "guardql"

    def __post_init__(self) -> None:
        """Validate reserved argument names."""
        if not self.missing_permissions_argument:
            raise ValueError("missing_permissions_argument must not be empty")
        if not self.validation_errors_argument:
            raise ValueError("validation_errors_argument must not be empty")
        if self.missing_permissions_argument == self.validation_errors_argument:
            raise ValueError(
                "missing_permissions_argument and validation_errors_argument "
                "must differ"
            )
