"""The ``@pattern`` value directive."""

import re
from collections.abc import Mapping
from typing import Any

from guardql.core.entities.declaration import (
    ArgumentSpec,
    CheckFunction,
    value_declaration,
)
from guardql.directives.common import COMMON_TYPES, STRING_TYPES
from guardql.exceptions import ConstraintViolation, InvalidDirectiveArgumentError

# Flag letters understood in the `flags` argument
FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    # Python patterns are unicode-aware and searched once
    "u": 0,
    "g": 0,
}


def parse_flags(flags: str | None) -> int:
    """Translate ECMAScript-style flag letters into ``re`` flags."""
    result = 0
    for letter in flags or "":
        if letter not in FLAGS:
            raise InvalidDirectiveArgumentError(
                f"@pattern: unsupported flag {letter!r} in {flags!r}"
            )
        result |= FLAGS[letter]
    return result


def create_pattern_check(args: Mapping[str, Any]) -> CheckFunction | None:
    source = args["regexp"]
    try:
        regexp = re.compile(source, parse_flags(args.get("flags")))
    except re.error as exc:
        raise InvalidDirectiveArgumentError(
            f"@pattern: invalid regexp {source!r}: {exc}"
        ) from exc

    def check(value: Any) -> Any:
        if not regexp.search(str(value)):
            raise ConstraintViolation(f"Does not match pattern: /{source}/")
        return value

    return check


PATTERN = value_declaration(
    "pattern",
    [
        ArgumentSpec(
            "regexp",
            "String!",
            description="The regular expression the value must match",
        ),
        ArgumentSpec(
            "flags",
            "String",
            description="Regular expression flags: i, m, s",
        ),
    ],
    create_pattern_check,
    description="ensures value matches pattern",
    accepts=STRING_TYPES,
    common_types=COMMON_TYPES,
)
