"""The ``@stringLength`` value directive."""

from collections.abc import Mapping
from typing import Any

from guardql.core.entities.declaration import (
    ArgumentSpec,
    CheckFunction,
    value_declaration,
)
from guardql.directives.common import COMMON_TYPES, STRING_TYPES, get_bounds
from guardql.exceptions import ConstraintViolation


def create_string_length_check(args: Mapping[str, Any]) -> CheckFunction | None:
    minimum, maximum = get_bounds("stringLength", args)
    if minimum is None and maximum is None:
        return None

    def check(value: Any) -> Any:
        length = len(str(value))
        if minimum is not None and length < minimum:
            raise ConstraintViolation(f"String Length is Less than {minimum}")
        if maximum is not None and length > maximum:
            raise ConstraintViolation(f"String Length is More than {maximum}")
        return value

    return check


STRING_LENGTH = value_declaration(
    "stringLength",
    [
        ArgumentSpec(
            "min",
            "Int",
            description="The minimum string length (inclusive) to accept",
        ),
        ArgumentSpec(
            "max",
            "Int",
            description="The maximum string length (inclusive) to accept",
        ),
    ],
    create_string_length_check,
    description="ensures string length is within boundaries",
    accepts=STRING_TYPES,
    common_types=COMMON_TYPES,
)
