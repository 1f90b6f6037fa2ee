"""Missing-permissions strategy interfaces."""

from collections.abc import Sequence, Set
from typing import Any, Protocol


class IMissingPermissionsFilter(Protocol):
    """Compute which required permissions the caller lacks."""

    def __call__(
        self,
        granted: Set[str] | None,
        required: Sequence[str],
    ) -> Any:
        """Filter the required permissions against the granted set.

        Args:
            granted: Permissions held by the caller. ``None`` means nothing
                is granted.
            required: Ordered list of required permissions.

        Returns:
            A list of missing permissions, ``None`` when nothing is
            missing, or an awaitable resolving to either.
        """
        ...


class IErrorMessage(Protocol):
    """Render the message of an access-denied error."""

    def __call__(self, missing: list[str]) -> str: ...
