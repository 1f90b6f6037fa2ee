"""Policies for handling missing permissions."""

from enum import Enum
from typing import Any


class Policy(Enum):
    """How a wrapped resolver reacts to missing permissions.

    RESOLVER: The original resolver is always called and receives the
        missing permissions through an injected argument.
    THROW: The original resolver is not called; the field fails with
        ``ForbiddenError``.
    """

    RESOLVER = "RESOLVER"
    THROW = "THROW"

    @classmethod
    def coerce(cls, value: Any) -> "Policy":
        """Convert a coerced directive argument into a Policy.

        graphql-core gives enum arguments of SDL-built schemas as their
        names, while bound Ariadne enums may give Python enum members.

        Args:
            value: The directive argument value.

        Returns:
            The matching Policy.

        Raises:
            ValueError: If the value names no policy.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, Enum):
            value = value.name
        return cls(str(value).upper())
