"""Shared pieces of the value directives."""

from collections.abc import Mapping
from typing import Any

from guardql.core.services.type_shapes import ENUM_MARKER
from guardql.exceptions import InvalidDirectiveArgumentError

STRING_TYPES = frozenset({"String", "ID"})
NUMBER_TYPES = frozenset({"Int", "Float"})
ENUM_OR_STRING_TYPES = STRING_TYPES | {ENUM_MARKER}

VALIDATED_INPUT_ERROR = (
    "ValidatedInputError",
    '''"""Input value rejected by a validation directive"""
input ValidatedInputError {
  """Path to the rejected value, starting with the argument name"""
  path: [String!]!
  """Description of the violated constraint"""
  message: String!
}''',
)

COMMON_TYPES = (VALIDATED_INPUT_ERROR,)


def get_bounds(
    directive_name: str,
    args: Mapping[str, Any],
) -> tuple[Any, Any]:
    """Read ``min``/``max`` arguments.

    Raises:
        InvalidDirectiveArgumentError: If ``min`` is greater than ``max``.
    """
    minimum = args.get("min")
    maximum = args.get("max")
    if minimum is not None and maximum is not None and minimum > maximum:
        raise InvalidDirectiveArgumentError(
            f"@{directive_name}: min ({minimum}) is greater than max ({maximum})"
        )
    return minimum, maximum
