"""Missing-permissions cache interface."""

from collections.abc import Callable
from typing import Any, Protocol


class IPermissionsCache(Protocol):
    """Contract for the per-request missing-permissions cache.

    A cache lives exactly as long as one request. Entries map a cache
    key to the computed list of missing permissions, or to ``None`` when
    nothing is missing.
    """

    def get_or_compute(self, key: str, compute: Callable[[], Any]) -> Any:
        """Return the value stored under ``key``, computing it once.

        Args:
            key: The cache key.
            compute: Zero-argument callable producing the value. It may
                return an awaitable; concurrent callers then await the
                same pending computation.

        Returns:
            The cached value, or an awaitable resolving to it.
        """
        ...

    def __contains__(self, key: object) -> bool:
        """Check whether a completed value is stored under ``key``."""
        ...

    def clear(self) -> None:
        """Drop every entry."""
        ...
