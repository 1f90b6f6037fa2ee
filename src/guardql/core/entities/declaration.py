"""Constraint declaration entities.

A declaration describes one directive: its name, its arguments and where
it may be attached. Declarations are plain data interpreted by the
directive compiler; the ``kind`` tag decides how a use is enforced:

- VALUE declarations carry a ``check_factory`` turning the arguments of
  one use into a check (or ``None`` for "nothing to check").
- ACCESS declarations carry a ``layer_factory`` building a resolver
  layer that may block the original resolver.
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from guardql.core.entities.constraint_use import ConstraintUse, FieldTarget
    from guardql.core.entities.guard_config import GuardConfig

Resolver = Callable[..., Any]
ResolverLayer = Callable[[Resolver], Resolver]

# A check returns the (possibly normalised) value or raises ConstraintViolation.
CheckFunction = Callable[[Any], Any]
CheckFactory = Callable[[Mapping[str, Any]], CheckFunction | None]
LayerFactory = Callable[
    ["Sequence[ConstraintUse]", "FieldTarget", "GuardConfig"], ResolverLayer
]

ACCESS_LOCATIONS = ("OBJECT", "FIELD_DEFINITION")
VALUE_LOCATIONS = (
    "ARGUMENT_DEFINITION",
    "FIELD_DEFINITION",
    "INPUT_FIELD_DEFINITION",
    "OBJECT",
)


class ConstraintKind(Enum):
    """Constraint families with diverging enforcement."""

    VALUE = "VALUE"
    ACCESS = "ACCESS"


@dataclass(frozen=True)
class ArgumentSpec:
    """One argument of a directive declaration.

    Attributes:
        name: Argument name.
        type: SDL type reference, e.g. ``"[String!]!"``.
        default: SDL literal used as default value, e.g. ``"THROW"``.
        description: Optional description emitted as a block string.
    """

    name: str
    type: str
    default: str | None = None
    description: str | None = None

    def to_sdl(self, indent: str = "  ") -> str:
        """Render the argument definition."""
        lines = []
        if self.description:
            lines.append(f'{indent}"""{self.description}"""')
        definition = f"{indent}{self.name}: {self.type}"
        if self.default is not None:
            definition += f" = {self.default}"
        lines.append(definition)
        return "\n".join(lines)


@dataclass(frozen=True)
class ConstraintDeclaration:
    """Declaration of one constraint directive.

    Attributes:
        name: Directive name without ``@``.
        kind: VALUE or ACCESS.
        description: Directive description.
        arguments: Argument specs in declaration order.
        locations: Directive locations.
        repeatable: Whether the directive may be used several times at
            one location.
        type_defs: Extra SDL (enums, inputs) this directive needs.
        common_types: Shared ``(name, sdl)`` type definitions, emitted at
            most once per schema whichever declarations need them.
        check_factory: VALUE only. Builds a check from use arguments.
        elementwise: VALUE only. Apply the check to each list element.
        accepts: VALUE only. Built-in scalar names the check supports.
            ``None`` accepts every type.
        list_only: VALUE only. The check needs a list value.
        layer_factory: ACCESS only. Builds the resolver layer.
    """

    name: str
    kind: ConstraintKind
    description: str = ""
    arguments: tuple[ArgumentSpec, ...] = ()
    locations: tuple[str, ...] = ACCESS_LOCATIONS
    repeatable: bool = False
    type_defs: tuple[str, ...] = ()
    common_types: tuple[tuple[str, str], ...] = ()
    check_factory: CheckFactory | None = None
    elementwise: bool = True
    accepts: frozenset[str] | None = None
    list_only: bool = False
    layer_factory: LayerFactory | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Directive name must not be empty")
        if self.kind is ConstraintKind.VALUE and self.check_factory is None:
            raise ValueError(f"VALUE directive @{self.name} needs a check_factory")
        if self.kind is ConstraintKind.ACCESS and self.layer_factory is None:
            raise ValueError(f"ACCESS directive @{self.name} needs a layer_factory")

    @property
    def argument_names(self) -> tuple[str, ...]:
        return tuple(argument.name for argument in self.arguments)

    def renamed(self, name: str) -> "ConstraintDeclaration":
        """Return the same declaration under another directive name."""
        return replace(self, name=name)

    def to_sdl(self) -> str:
        """Render the ``directive @name(...) on ...`` definition."""
        lines = []
        if self.description:
            lines.append(f'"""{self.description}"""')

        header = f"directive @{self.name}"
        suffix = " repeatable" if self.repeatable else ""
        suffix += " on " + " | ".join(self.locations)

        if self.arguments:
            lines.append(header + "(")
            lines.extend(argument.to_sdl() for argument in self.arguments)
            lines.append(")" + suffix)
        else:
            lines.append(header + suffix)

        return "\n".join(lines)


def value_declaration(
    name: str,
    arguments: Sequence[ArgumentSpec],
    check_factory: CheckFactory,
    *,
    description: str = "",
    elementwise: bool = True,
    accepts: frozenset[str] | None = None,
    list_only: bool = False,
    locations: Sequence[str] = VALUE_LOCATIONS,
    type_defs: Sequence[str] = (),
    common_types: Sequence[tuple[str, str]] = (),
) -> ConstraintDeclaration:
    """Create a VALUE declaration.

    Args:
        name: Directive name.
        arguments: Argument specs.
        check_factory: Turns use arguments into a check, or ``None``.
        description: Directive description.
        elementwise: Wrap the check with the elementwise combinator.
        accepts: Built-in scalar names the check supports.
        list_only: The check needs a list value.
        locations: Directive locations.
        type_defs: Extra SDL this directive needs.
        common_types: Shared ``(name, sdl)`` type definitions.

    Returns:
        A new ConstraintDeclaration.
    """
    return ConstraintDeclaration(
        name=name,
        kind=ConstraintKind.VALUE,
        description=description,
        arguments=tuple(arguments),
        locations=tuple(locations),
        type_defs=tuple(type_defs),
        common_types=tuple(common_types),
        check_factory=check_factory,
        elementwise=elementwise,
        accepts=accepts,
        list_only=list_only,
    )


def access_declaration(
    name: str,
    layer_factory: LayerFactory,
    *,
    description: str = "",
    arguments: Sequence[ArgumentSpec] = (),
    repeatable: bool = False,
    type_defs: Sequence[str] = (),
) -> ConstraintDeclaration:
    """Create an ACCESS declaration attached to ``OBJECT | FIELD_DEFINITION``."""
    return ConstraintDeclaration(
        name=name,
        kind=ConstraintKind.ACCESS,
        description=description,
        arguments=tuple(arguments),
        locations=ACCESS_LOCATIONS,
        repeatable=repeatable,
        type_defs=tuple(type_defs),
        layer_factory=layer_factory,
    )
