"""Build-time checks on the GraphQL types constraints attach to."""

from graphql import (
    GraphQLArgument,
    GraphQLEnumType,
    GraphQLInputObjectType,
    GraphQLInputType,
    GraphQLList,
    GraphQLNonNull,
    GraphQLOutputType,
    GraphQLScalarType,
    GraphQLString,
    get_named_type,
    get_nullable_type,
    specified_scalar_types,
)

from guardql.core.entities.declaration import ConstraintDeclaration

# Marker accepted in ``ConstraintDeclaration.accepts`` to allow enum types.
ENUM_MARKER = "Enum"

# ``specified_scalar_types`` maps names to types
BUILTIN_SCALARS = frozenset(specified_scalar_types)


def is_list(type_: GraphQLInputType | GraphQLOutputType) -> bool:
    return isinstance(get_nullable_type(type_), GraphQLList)  # type: ignore[arg-type]


def accepts_type(
    declaration: ConstraintDeclaration,
    type_: GraphQLInputType | GraphQLOutputType,
) -> bool:
    """Check whether a value constraint can check values of ``type_``.

    ``list_only`` constraints need a list. Otherwise the named type is
    compared with ``declaration.accepts``: built-in scalars must be
    listed, enums need the ``"Enum"`` marker, custom scalars are always
    accepted and composite types never are.
    """
    if declaration.list_only and not is_list(type_):
        return False
    if declaration.accepts is None:
        return True

    named = get_named_type(type_)
    if isinstance(named, GraphQLEnumType):
        return ENUM_MARKER in declaration.accepts
    if isinstance(named, GraphQLScalarType):
        if named.name in BUILTIN_SCALARS:
            return named.name in declaration.accepts
        return True
    return False


def is_string_list_argument(argument: GraphQLArgument) -> bool:
    """Check for a nullable, flat list of strings, e.g. ``[String!]``."""
    if isinstance(argument.type, GraphQLNonNull):
        return False
    if not isinstance(argument.type, GraphQLList):
        return False
    item = argument.type.of_type
    if isinstance(item, GraphQLNonNull):
        item = item.of_type
    return item is GraphQLString


def is_errors_list_argument(argument: GraphQLArgument) -> bool:
    """Check for a nullable, flat list of input objects, e.g.
    ``[ValidatedInputError]``."""
    if not isinstance(argument.type, GraphQLList):
        return False
    item = argument.type.of_type
    if isinstance(item, GraphQLNonNull):
        item = item.of_type
    return isinstance(item, GraphQLInputObjectType)
