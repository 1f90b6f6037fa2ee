"""Core interfaces (Protocol classes) for guardql."""

from guardql.core.interfaces.key_builder import IKeyBuilder
from guardql.core.interfaces.permission_filter import (
    IErrorMessage,
    IMissingPermissionsFilter,
)
from guardql.core.interfaces.permissions_cache import IPermissionsCache

__all__ = [
    "IErrorMessage",
    "IKeyBuilder",
    "IMissingPermissionsFilter",
    "IPermissionsCache",
]
