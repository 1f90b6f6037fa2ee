"""Exceptions raised by guardql.

Two families live here:

- Build-time errors (``SchemaBuildError`` and subclasses) are raised
  synchronously while directives are applied to a schema. They are fatal
  to whoever builds the schema.
- Runtime errors (``ValidationError``, ``ForbiddenError`` and
  ``AuthenticationError``) are ``GraphQLError`` subclasses raised from
  wrapped resolvers. graphql-core reports them as field errors, so
  sibling fields keep resolving.
"""

from typing import Any

from graphql import GraphQLError


class GuardQLError(Exception):
    """Base exception for all guardql errors."""

    pass


class SchemaBuildError(GuardQLError):
    """Raised when directives cannot be applied to a schema."""

    pass


class DeclarationConflictError(SchemaBuildError):
    """Raised when two incompatible declarations of one directive meet.

    Examples: registering ``@range`` twice with different signatures,
    a schema that defines the directive without an argument the
    declaration needs, or two ``@hasPermissions`` uses on the same
    field with different policies.
    """

    pass


class SchemaShapeError(SchemaBuildError):
    """Raised when a field cannot carry one of its constraints.

    For instance ``policy: RESOLVER`` on a field without a
    ``missingPermissions: [String!]`` argument, or ``@range`` on a
    ``String`` field.
    """

    pass


class InvalidDirectiveArgumentError(SchemaBuildError):
    """Raised when a directive use has unusable argument values."""

    pass


class ConstraintViolation(ValueError):
    """Raised by a value check when a value breaks its constraint.

    Attributes:
        message: Human readable description of the violation.
        path: Location of the offending value inside the checked value
            (list indexes, input field names). Empty for scalars.
    """

    def __init__(self, message: str, path: tuple[str | int, ...] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def at(self, key: str | int) -> "ConstraintViolation":
        """Return a copy of this violation nested under ``key``."""
        return ConstraintViolation(self.message, (key, *self.path))


class ValidationError(GraphQLError):
    """A value constraint rejected a field argument or result."""

    def __init__(
        self,
        message: str,
        constraint: str | None = None,
        value_path: tuple[str | int, ...] = (),
    ) -> None:
        extensions: dict[str, Any] = {"code": "BAD_USER_INPUT"}
        if constraint is not None:
            extensions["constraint"] = constraint
        if value_path:
            extensions["valuePath"] = list(value_path)
        super().__init__(message, extensions=extensions)
        self.constraint = constraint
        self.value_path = value_path

    @classmethod
    def from_violation(
        cls,
        constraint: str,
        violation: ConstraintViolation,
    ) -> "ValidationError":
        """Build the field error reported for a ``ConstraintViolation``."""
        return cls(
            f"@{constraint}: {violation.message}",
            constraint=constraint,
            value_path=violation.path,
        )


class ForbiddenError(GraphQLError):
    """The caller lacks permissions required by a field."""

    def __init__(
        self,
        message: str = "Forbidden",
        missing_permissions: list[str] | None = None,
    ) -> None:
        super().__init__(message, extensions={"code": "FORBIDDEN"})
        # Kept off the extensions so production messages stay terse.
        self.missing_permissions = missing_permissions


class AuthenticationError(GraphQLError):
    """The caller is not authenticated."""

    def __init__(self, message: str = "Unauthenticated") -> None:
        super().__init__(message, extensions={"code": "UNAUTHENTICATED"})
