"""Tests for build-time type compatibility checks."""

from graphql import GraphQLArgument

from guardql.core.services.type_shapes import (
    BUILTIN_SCALARS,
    accepts_type,
    is_errors_list_argument,
    is_string_list_argument,
)
from guardql.directives import ALLOWED_VALUES, LIST_LENGTH, RANGE, STRING_LENGTH

SDL = """
    scalar Email

    enum Color { RED BLUE }

    input Problem { message: String }

    type Point { x: Int }

    type Query {
        text: String
        id: ID
        count: Int
        ratio: Float
        flag: Boolean
        email: Email
        color: Color
        point: Point
        tags: [String!]
        check(
            strings: [String!]
            required: [String!]!
            flags: [Boolean]
            problems: [Problem]
            problem: Problem
        ): Int
    }
"""


def _field_type(build, name):
    return build(SDL).query_type.fields[name].type


def _argument(build, name) -> GraphQLArgument:
    return build(SDL).query_type.fields["check"].args[name]


class TestBuiltinScalars:
    def test_names(self) -> None:
        assert BUILTIN_SCALARS == {"String", "ID", "Int", "Float", "Boolean"}


class TestAcceptsType:
    def test_builtin_scalars_must_be_listed(self, build) -> None:
        assert accepts_type(STRING_LENGTH, _field_type(build, "text"))
        assert accepts_type(STRING_LENGTH, _field_type(build, "id"))
        assert not accepts_type(STRING_LENGTH, _field_type(build, "count"))
        assert accepts_type(RANGE, _field_type(build, "ratio"))
        assert not accepts_type(RANGE, _field_type(build, "flag"))

    def test_custom_scalars_are_accepted(self, build) -> None:
        assert accepts_type(STRING_LENGTH, _field_type(build, "email"))
        assert accepts_type(RANGE, _field_type(build, "email"))

    def test_enums_need_the_marker(self, build) -> None:
        assert accepts_type(ALLOWED_VALUES, _field_type(build, "color"))
        assert not accepts_type(STRING_LENGTH, _field_type(build, "color"))

    def test_composite_types_are_rejected(self, build) -> None:
        assert not accepts_type(STRING_LENGTH, _field_type(build, "point"))

    def test_lists_use_the_item_type(self, build) -> None:
        assert accepts_type(STRING_LENGTH, _field_type(build, "tags"))

    def test_list_only(self, build) -> None:
        assert accepts_type(LIST_LENGTH, _field_type(build, "tags"))
        assert not accepts_type(LIST_LENGTH, _field_type(build, "text"))


class TestInjectionArguments:
    def test_string_list(self, build) -> None:
        assert is_string_list_argument(_argument(build, "strings"))
        assert not is_string_list_argument(_argument(build, "required"))
        assert not is_string_list_argument(_argument(build, "flags"))

    def test_errors_list(self, build) -> None:
        assert is_errors_list_argument(_argument(build, "problems"))
        assert not is_errors_list_argument(_argument(build, "strings"))
        assert not is_errors_list_argument(_argument(build, "problem"))
