"""The ``@listLength`` value directive."""

from collections.abc import Mapping
from typing import Any

from guardql.core.entities.declaration import (
    ArgumentSpec,
    CheckFunction,
    value_declaration,
)
from guardql.directives.common import COMMON_TYPES, get_bounds
from guardql.exceptions import ConstraintViolation


def create_list_length_check(args: Mapping[str, Any]) -> CheckFunction | None:
    minimum, maximum = get_bounds("listLength", args)
    if minimum is None and maximum is None:
        return None

    def check(value: Any) -> Any:
        if value is None:
            return None
        length = len(value)
        if minimum is not None and length < minimum:
            raise ConstraintViolation(f"List Length is Less than {minimum}")
        if maximum is not None and length > maximum:
            raise ConstraintViolation(f"List Length is More than {maximum}")
        return value

    return check


# Checks the list itself, so it is not applied elementwise
LIST_LENGTH = value_declaration(
    "listLength",
    [
        ArgumentSpec(
            "min",
            "Int",
            description="The minimum list length (inclusive) to accept",
        ),
        ArgumentSpec(
            "max",
            "Int",
            description="The maximum list length (inclusive) to accept",
        ),
    ],
    create_list_length_check,
    description="ensures list length is within boundaries",
    elementwise=False,
    list_only=True,
    common_types=COMMON_TYPES,
)
