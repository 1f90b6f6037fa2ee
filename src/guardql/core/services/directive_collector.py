"""Collect constraint directive uses from a built schema.

This is the first pass of applying directives: it only reads. Every
registered directive found on object types, their fields, field
arguments and input object fields is turned into a ``ConstraintUse``
with its arguments coerced by graphql-core.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from graphql import (
    DirectiveNode,
    GraphQLInputObjectType,
    GraphQLObjectType,
    GraphQLSchema,
)
from graphql.execution.values import get_argument_values

from guardql.core.entities.constraint_use import ConstraintUse
from guardql.core.services.registry import DeclarationRegistry
from guardql.exceptions import DeclarationConflictError

logger = logging.getLogger(__name__)


@dataclass
class SchemaConstraints:
    """Constraint uses of a schema, by schema coordinate."""

    # Type-level uses: type_name -> uses
    type_uses: dict[str, list[ConstraintUse]] = field(default_factory=dict)

    # Field-level uses: "TypeName.fieldName" -> uses
    field_uses: dict[str, list[ConstraintUse]] = field(default_factory=dict)

    # Argument uses: "TypeName.fieldName(argName:)" -> uses
    argument_uses: dict[str, list[ConstraintUse]] = field(default_factory=dict)

    # Input object field uses: "InputName.fieldName" -> uses
    input_field_uses: dict[str, list[ConstraintUse]] = field(default_factory=dict)

    def get_uses_for_field(
        self,
        type_name: str,
        field_name: str,
    ) -> list[ConstraintUse]:
        """Get the uses applying to an object field, outermost first.

        Type-level uses come first and act as defaults: a type-level use
        is dropped when the field carries its own use of the same
        directive. Uses of different directives stack.

        Args:
            type_name: The parent type name.
            field_name: The field name.

        Returns:
            Type defaults, then field uses, each in declaration order.
        """
        field_uses = self.field_uses.get(f"{type_name}.{field_name}", [])
        overridden = {use.name for use in field_uses}
        defaults = [
            use
            for use in self.type_uses.get(type_name, [])
            if use.name not in overridden
        ]
        return defaults + list(field_uses)

    def get_uses_for_argument(
        self,
        type_name: str,
        field_name: str,
        argument_name: str,
    ) -> list[ConstraintUse]:
        return self.argument_uses.get(
            f"{type_name}.{field_name}({argument_name}:)", []
        )

    def get_uses_for_input_field(
        self,
        type_name: str,
        field_name: str,
    ) -> list[ConstraintUse]:
        return self.input_field_uses.get(f"{type_name}.{field_name}", [])

    def __bool__(self) -> bool:
        return bool(
            self.type_uses
            or self.field_uses
            or self.argument_uses
            or self.input_field_uses
        )


class DirectiveCollector:
    """Reads registered constraint directives from a graphql-core schema."""

    def __init__(self, registry: DeclarationRegistry) -> None:
        """Initialize the collector.

        Args:
            registry: Declarations to look for. Other directives are
                ignored.
        """
        self._registry = registry

    def collect(self, schema: GraphQLSchema) -> SchemaConstraints:
        """Collect every constraint use of a schema.

        Args:
            schema: The built schema.

        Returns:
            SchemaConstraints holding all uses.

        Raises:
            DeclarationConflictError: If a used directive is not defined
                by the schema, or its definition does not match the
                registered declaration.
        """
        self._check_definitions(schema)
        constraints = SchemaConstraints()

        for type_name, type_def in schema.type_map.items():
            # Skip introspection types
            if type_name.startswith("__"):
                continue

            if isinstance(type_def, GraphQLObjectType):
                self._add(
                    constraints.type_uses,
                    type_name,
                    self._read(schema, type_def, type_name, "OBJECT"),
                )
                for field_name, field_def in type_def.fields.items():
                    coordinate = f"{type_name}.{field_name}"
                    self._add(
                        constraints.field_uses,
                        coordinate,
                        self._read(schema, field_def, coordinate, "FIELD_DEFINITION"),
                    )
                    for arg_name, arg_def in field_def.args.items():
                        arg_coordinate = f"{coordinate}({arg_name}:)"
                        self._add(
                            constraints.argument_uses,
                            arg_coordinate,
                            self._read(
                                schema, arg_def, arg_coordinate, "ARGUMENT_DEFINITION"
                            ),
                        )

            elif isinstance(type_def, GraphQLInputObjectType):
                for field_name, input_field in type_def.fields.items():
                    coordinate = f"{type_name}.{field_name}"
                    self._add(
                        constraints.input_field_uses,
                        coordinate,
                        self._read(
                            schema, input_field, coordinate, "INPUT_FIELD_DEFINITION"
                        ),
                    )

        return constraints

    def _check_definitions(self, schema: GraphQLSchema) -> None:
        for declaration in self._registry:
            directive_def = schema.get_directive(declaration.name)
            if directive_def is None:
                continue
            missing = [
                name
                for name in declaration.argument_names
                if name not in directive_def.args
            ]
            if missing:
                raise DeclarationConflictError(
                    f"Schema definition of @{declaration.name} lacks "
                    f"argument(s): {', '.join(missing)}"
                )

    def _read(
        self,
        schema: GraphQLSchema,
        element: Any,
        coordinate: str,
        location: str,
    ) -> list[ConstraintUse]:
        uses = []
        for node in self._directive_nodes(element):
            name = node.name.value
            declaration = self._registry.get(name)
            if declaration is None:
                continue

            directive_def = schema.get_directive(name)
            if directive_def is None:
                raise DeclarationConflictError(
                    f"@{name} is used on {coordinate} but not defined by the schema"
                )
            if location not in declaration.locations:
                raise DeclarationConflictError(
                    f"@{name} cannot be used on {coordinate}: allowed on "
                    f"{' | '.join(declaration.locations)}"
                )

            arguments = get_argument_values(directive_def, node)
            uses.append(
                ConstraintUse.create(declaration, arguments, coordinate, location)
            )
            logger.debug(f"Found @{name} on {coordinate}")
        return uses

    @staticmethod
    def _directive_nodes(element: Any) -> Iterable[DirectiveNode]:
        nodes = [getattr(element, "ast_node", None)]
        nodes.extend(getattr(element, "extension_ast_nodes", None) or ())
        for node in nodes:
            if node is None:
                continue
            yield from getattr(node, "directives", None) or ()

    @staticmethod
    def _add(
        mapping: dict[str, list[ConstraintUse]],
        key: str,
        uses: list[ConstraintUse],
    ) -> None:
        if uses:
            mapping[key] = uses
