"""The ``@trim`` value directive.

Unlike the other value directives it never rejects a value: it returns
the value without surrounding whitespace.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from guardql.core.entities.declaration import (
    ArgumentSpec,
    CheckFunction,
    value_declaration,
)
from guardql.directives.common import COMMON_TYPES, STRING_TYPES


class TrimMode(Enum):
    TRIM_ALL = "TRIM_ALL"
    TRIM_END = "TRIM_END"
    TRIM_START = "TRIM_START"


TRIM_MODE_ENUM = '''enum TrimDirectiveMode {
  """trims both start and end"""
  TRIM_ALL
  """trims the end of the string"""
  TRIM_END
  """trims the start of the string"""
  TRIM_START
}'''


def create_trim_check(args: Mapping[str, Any]) -> CheckFunction | None:
    mode = args.get("mode", TrimMode.TRIM_ALL)
    mode = TrimMode(mode.name if isinstance(mode, Enum) else mode)

    strip = {
        TrimMode.TRIM_ALL: str.strip,
        TrimMode.TRIM_END: str.rstrip,
        TrimMode.TRIM_START: str.lstrip,
    }[mode]

    def check(value: Any) -> Any:
        if isinstance(value, str):
            return strip(value)
        return value

    return check


TRIM = value_declaration(
    "trim",
    [
        ArgumentSpec(
            "mode",
            "TrimDirectiveMode",
            default="TRIM_ALL",
            description="How to trim the string",
        ),
    ],
    create_trim_check,
    description="trims whitespace around the string",
    accepts=STRING_TYPES,
    type_defs=[TRIM_MODE_ENUM],
    common_types=COMMON_TYPES,
)
