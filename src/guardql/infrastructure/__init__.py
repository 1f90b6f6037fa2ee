"""Infrastructure layer implementations for guardql."""

from guardql.infrastructure.backends.memory import InMemoryPermissionsCache
from guardql.infrastructure.key_builders.default import DefaultCacheKeyBuilder

__all__ = [
    "InMemoryPermissionsCache",
    "DefaultCacheKeyBuilder",
]
