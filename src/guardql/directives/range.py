"""The ``@range`` value directive."""

from collections.abc import Mapping
from typing import Any

from guardql.core.entities.declaration import (
    ArgumentSpec,
    CheckFunction,
    value_declaration,
)
from guardql.directives.common import COMMON_TYPES, NUMBER_TYPES, get_bounds
from guardql.exceptions import ConstraintViolation


def create_range_check(args: Mapping[str, Any]) -> CheckFunction | None:
    minimum, maximum = get_bounds("range", args)
    if minimum is None and maximum is None:
        return None

    def check(value: Any) -> Any:
        try:
            if minimum is not None and value < minimum:
                raise ConstraintViolation(f"Less than {minimum:g}")
            if maximum is not None and value > maximum:
                raise ConstraintViolation(f"More than {maximum:g}")
        except TypeError as exc:
            raise ConstraintViolation(f"Not a number: {value!r}") from exc
        return value

    return check


RANGE = value_declaration(
    "range",
    [
        ArgumentSpec(
            "min",
            "Float",
            description="The minimum value (inclusive) to accept",
        ),
        ArgumentSpec(
            "max",
            "Float",
            description="The maximum value (inclusive) to accept",
        ),
    ],
    create_range_check,
    description="ensures value is within boundaries",
    accepts=NUMBER_TYPES,
    common_types=COMMON_TYPES,
)
