"""The ``@allowedValues`` value directive."""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from guardql.core.entities.declaration import (
    ArgumentSpec,
    CheckFunction,
    value_declaration,
)
from guardql.directives.common import COMMON_TYPES, ENUM_OR_STRING_TYPES
from guardql.exceptions import ConstraintViolation


def create_allowed_values_check(args: Mapping[str, Any]) -> CheckFunction | None:
    values = list(args["values"])
    allowed = frozenset(values)

    def check(value: Any) -> Any:
        key = value.name if isinstance(value, Enum) else value
        if key not in allowed:
            raise ConstraintViolation(f"Must be one of: {', '.join(values)}")
        return value

    return check


ALLOWED_VALUES = value_declaration(
    "allowedValues",
    [
        ArgumentSpec("values", "[String!]!", description="The accepted values"),
    ],
    create_allowed_values_check,
    description="ensures value is one of the given values",
    accepts=ENUM_OR_STRING_TYPES,
    common_types=COMMON_TYPES,
)
