"""Constraint use value objects."""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from graphql import GraphQLField

from guardql.core.entities.declaration import ConstraintDeclaration, ConstraintKind


@dataclass(frozen=True)
class ConstraintUse:
    """One directive occurrence with its arguments bound at build time.

    Attributes:
        declaration: The declaration this use refers to.
        arguments: Coerced directive arguments (read-only).
        coordinate: Schema coordinate of the annotated element, e.g.
            ``"User"``, ``"User.email"`` or ``"Query.user(id:)"``.
        location: Directive location name, e.g. ``"FIELD_DEFINITION"``.
    """

    declaration: ConstraintDeclaration
    arguments: Mapping[str, Any]
    coordinate: str
    location: str

    @property
    def name(self) -> str:
        return self.declaration.name

    @property
    def kind(self) -> ConstraintKind:
        return self.declaration.kind

    @property
    def is_type_level(self) -> bool:
        """Whether the use was declared on an object type."""
        return self.location == "OBJECT"

    @classmethod
    def create(
        cls,
        declaration: ConstraintDeclaration,
        arguments: Mapping[str, Any],
        coordinate: str,
        location: str,
    ) -> "ConstraintUse":
        """Factory method freezing the argument mapping."""
        return cls(
            declaration=declaration,
            arguments=MappingProxyType(dict(arguments)),
            coordinate=coordinate,
            location=location,
        )


@dataclass(frozen=True)
class FieldTarget:
    """An object field whose resolver is being wrapped."""

    type_name: str
    field_name: str
    field: GraphQLField

    @property
    def coordinate(self) -> str:
        return f"{self.type_name}.{self.field_name}"
