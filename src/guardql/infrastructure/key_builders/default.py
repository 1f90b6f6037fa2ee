"""Default key builder implementation."""

from collections.abc import Sequence

from guardql.utils.hashing import digest_permissions


class DefaultCacheKeyBuilder:
    """Key builder hashing the ordered list of required permissions.

    Keys look like ``guardql:hasPermissions:<hash>``. Order matters:
    ``["a", "b"]`` and ``["b", "a"]`` get different keys because the
    production filter reports the first missing permission.
    """

    def __init__(self, prefix: str = "guardql") -> None:
        """Initialize the key builder.

        Args:
            prefix: Prefix for all cache keys.
        """
        self._prefix = prefix

    def build_permissions_key(
        self,
        directive_name: str,
        permissions: Sequence[str],
    ) -> str:
        """Build the cache key for one permissions requirement.

        Args:
            directive_name: Name of the access directive.
            permissions: Ordered list of required permissions.

        Returns:
            A deterministic string key.
        """
        return ":".join(
            [self._prefix, directive_name, digest_permissions(permissions)]
        )
