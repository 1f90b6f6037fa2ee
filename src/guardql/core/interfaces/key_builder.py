"""Key builder interface."""

from collections.abc import Sequence
from typing import Protocol


class IKeyBuilder(Protocol):
    """Contract for building missing-permissions cache keys.

    Two fields requiring the same ordered permission list through the
    same directive must get the same key, so that one request computes
    their missing permissions only once.
    """

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
        ...
