"""Constraint declaration registry.

The registry is the single source of directive declarations for a
schema. It renders their SDL for the schema parser and hands them to
the directive collector and compiler.

Example:
    registry = DeclarationRegistry()
    registry.register(
        "upper",
        [],
        lambda args: check_upper,
        accepts=frozenset({"String"}),
    )
    type_defs = [registry.type_defs, app_type_defs]
"""

from collections.abc import Iterable, Iterator, Sequence

from cachetools import LRUCache, cachedmethod  # type: ignore[import-untyped]

from guardql.core.entities.declaration import (
    VALUE_LOCATIONS,
    ArgumentSpec,
    CheckFactory,
    ConstraintDeclaration,
    value_declaration,
)
from guardql.exceptions import DeclarationConflictError


class DeclarationRegistry:
    """Registry of constraint declarations keyed by directive name."""

    def __init__(self, declarations: Iterable[ConstraintDeclaration] = ()) -> None:
        """Initialize the registry.

        Args:
            declarations: Declarations registered right away, in order.
        """
        self._declarations: dict[str, ConstraintDeclaration] = {}
        self._common_types: dict[str, str] = {}
        self._sdl_cache: LRUCache[str, str] = LRUCache(maxsize=256)
        for declaration in declarations:
            self.register_declaration(declaration)

    def register(
        self,
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
        """Register a value constraint.

        Args:
            name: Directive name.
            arguments: Argument specs of the directive.
            check_factory: Turns the arguments of one use into a check.
                Returning ``None`` means nothing to check for them.
            description: Directive description.
            elementwise: Apply the check to each element of list values.
            accepts: Built-in scalar names the check supports.
            list_only: The check needs list values.
            locations: Directive locations.
            type_defs: Extra SDL the directive needs.
            common_types: Shared ``(name, sdl)`` type definitions.

        Returns:
            The registered declaration.

        Raises:
            DeclarationConflictError: If ``name`` is already registered
                with a different declaration.
        """
        declaration = value_declaration(
            name,
            arguments,
            check_factory,
            description=description,
            elementwise=elementwise,
            accepts=accepts,
            list_only=list_only,
            locations=locations,
            type_defs=type_defs,
            common_types=common_types,
        )
        return self.register_declaration(declaration)

    def register_declaration(
        self,
        declaration: ConstraintDeclaration,
        name: str | None = None,
    ) -> ConstraintDeclaration:
        """Register any declaration, optionally under another name.

        Re-registering an identical declaration is a no-op.

        Raises:
            DeclarationConflictError: On a different declaration with the
                same name, or a shared type with a different definition.
        """
        if name is not None and name != declaration.name:
            declaration = declaration.renamed(name)

        existing = self._declarations.get(declaration.name)
        if existing is not None:
            if existing == declaration:
                return existing
            if existing.to_sdl() != declaration.to_sdl():
                raise DeclarationConflictError(
                    f"Directive @{declaration.name} is already registered "
                    f"with a different signature:\n{existing.to_sdl()}"
                )
            raise DeclarationConflictError(
                f"Directive @{declaration.name} is already registered "
                "with a different implementation"
            )

        for type_name, sdl in declaration.common_types:
            known = self._common_types.get(type_name)
            if known is not None and known != sdl:
                raise DeclarationConflictError(
                    f"Shared type {type_name} is already defined differently"
                )

        self._declarations[declaration.name] = declaration
        self._common_types.update(declaration.common_types)
        self._sdl_cache.clear()
        return declaration

    def get(self, name: str) -> ConstraintDeclaration | None:
        return self._declarations.get(name)

    def __getitem__(self, name: str) -> ConstraintDeclaration:
        return self._declarations[name]

    def __contains__(self, name: object) -> bool:
        return name in self._declarations

    def __iter__(self) -> Iterator[ConstraintDeclaration]:
        return iter(list(self._declarations.values()))

    def __len__(self) -> int:
        return len(self._declarations)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._declarations)

    @cachedmethod(lambda self: self._sdl_cache)
    def get_declaration_sdl(self, name: str) -> str:
        """Return the SDL of one declaration and the types it needs.

        Shared common types are not included; see ``get_type_defs``.

        Raises:
            KeyError: If no directive is registered under ``name``.
        """
        declaration = self._declarations[name]
        return "\n\n".join([*declaration.type_defs, declaration.to_sdl()])

    def get_type_defs(self, *names: str) -> str:
        """Return the SDL of several declarations for one schema.

        Type definitions shared by several declarations, and common
        types, are emitted once.

        Args:
            *names: Directive names. All registered directives if empty.

        Returns:
            The SDL document.
        """
        selected = [self._declarations[name] for name in names or self.names]

        parts: list[str] = []
        seen: set[str] = set()

        def emit(sdl: str) -> None:
            if sdl not in seen:
                seen.add(sdl)
                parts.append(sdl)

        for declaration in selected:
            for type_def in declaration.type_defs:
                emit(type_def)
            emit(declaration.to_sdl())

        emitted_common: set[str] = set()
        for declaration in selected:
            for type_name, _ in declaration.common_types:
                if type_name not in emitted_common:
                    emitted_common.add(type_name)
                    emit(self._common_types[type_name])

        return "\n\n".join(parts)

    @property
    def type_defs(self) -> str:
        """SDL of every registered declaration."""
        return self.get_type_defs()

    def copy(self) -> "DeclarationRegistry":
        """Return a registry holding the same declarations."""
        return DeclarationRegistry(self._declarations.values())
