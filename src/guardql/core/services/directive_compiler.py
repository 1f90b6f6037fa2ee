"""Directive compiler.

Second pass of applying directives: folds the collected constraint
uses of every object field into one wrapped resolver, then installs the
wrapped resolvers into the schema.

Layers of a field, outermost first:

1. Access layers (``@hasPermissions``, ``@auth``...), type defaults
   before field uses. They run before calling inward and may block the
   original resolver.
2. Output value layers. They call inward, then check (and possibly
   normalise) the result, so the last declared check sees the raw
   result first.
3. The input layer. It checks field arguments and nested input object
   fields before calling the original resolver.
"""

import inspect
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, cast

from graphql import (
    GraphQLField,
    GraphQLInputObjectType,
    GraphQLInputType,
    GraphQLObjectType,
    GraphQLSchema,
    default_field_resolver,
    get_named_type,
)

from guardql.core.entities.constraint_use import ConstraintUse, FieldTarget
from guardql.core.entities.declaration import (
    CheckFactory,
    CheckFunction,
    ConstraintKind,
    LayerFactory,
    Resolver,
    ResolverLayer,
)
from guardql.core.entities.guard_config import GuardConfig
from guardql.core.services.directive_collector import (
    DirectiveCollector,
    SchemaConstraints,
)
from guardql.core.services.elementwise import validate_array_or_value
from guardql.core.services.registry import DeclarationRegistry
from guardql.core.services.type_shapes import accepts_type, is_errors_list_argument
from guardql.exceptions import (
    ConstraintViolation,
    SchemaBuildError,
    SchemaShapeError,
    ValidationError,
)
from guardql.utils.awaitables import ensure_sync, then

logger = logging.getLogger(__name__)

# Key recorded in ``schema.extensions`` once wrapped resolvers are installed
INSTALLED_MARKER = "guardql"


def is_installed(schema: GraphQLSchema) -> bool:
    """Check whether directives were already installed on ``schema``."""
    return bool((schema.extensions or {}).get(INSTALLED_MARKER))


@dataclass(frozen=True)
class CompiledField:
    """The wrapped resolver built for one object field."""

    target: FieldTarget
    resolve: Resolver
    uses: tuple[ConstraintUse, ...] = ()
    checks_input: bool = False


@dataclass
class CompiledDirectives:
    """Result of compiling a schema's constraints.

    Nothing is changed in the schema until ``install`` is called.
    """

    schema: GraphQLSchema
    fields: tuple[CompiledField, ...] = ()

    @property
    def installed(self) -> bool:
        return is_installed(self.schema)

    def get(self, coordinate: str) -> CompiledField | None:
        for compiled in self.fields:
            if compiled.target.coordinate == coordinate:
                return compiled
        return None

    def install(self) -> GraphQLSchema:
        """Swap the wrapped resolvers into the schema.

        Each field is replaced by a copy carrying the wrapped resolver;
        the original ``GraphQLField`` objects are left untouched.

        Returns:
            The schema.

        Raises:
            SchemaBuildError: If directives are already installed.
        """
        if self.installed:
            raise SchemaBuildError("Directives are already installed on this schema")

        for compiled in self.fields:
            target = compiled.target
            type_def = cast(GraphQLObjectType, self.schema.type_map[target.type_name])
            kwargs = {**target.field.to_kwargs(), "resolve": compiled.resolve}
            type_def.fields[target.field_name] = GraphQLField(**kwargs)
            logger.debug(f"Installed wrapped resolver on {target.coordinate}")

        if self.schema.extensions is None:
            self.schema.extensions = {}
        self.schema.extensions[INSTALLED_MARKER] = True
        return self.schema


@dataclass
class _InputViolation:
    constraint: str
    path: tuple[str | int, ...]
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": [str(key) for key in self.path],
            "message": f"@{self.constraint}: {self.message}",
        }


@dataclass
class _ValuePlan:
    """Checks for one argument or input field value."""

    checks: tuple[tuple[str, CheckFunction], ...] = ()
    nested: "_InputObjectPlan | None" = None

    def validate(
        self,
        value: Any,
        path: tuple[str | int, ...],
        errors: list[_InputViolation],
    ) -> Any:
        if value is None:
            return None
        for name, check in self.checks:
            try:
                value = ensure_sync(check(value), f"@{name} input check")
            except ConstraintViolation as exc:
                errors.append(_InputViolation(name, path + exc.path, exc.message))
                return None
        if self.nested is not None:
            value = self.nested.validate(value, path, errors)
        return value


@dataclass
class _InputObjectPlan:
    """Checks for the fields of one input object type."""

    # out_name -> (field name, plan)
    fields: dict[str, tuple[str, _ValuePlan]] = field(default_factory=dict)

    def validate(
        self,
        value: Any,
        path: tuple[str | int, ...],
        errors: list[_InputViolation],
    ) -> Any:
        if isinstance(value, (list, tuple)):
            return [
                None if item is None else self.validate(item, (*path, index), errors)
                for index, item in enumerate(value)
            ]
        if not isinstance(value, dict):
            return value

        result = dict(value)
        for out_name, (name, plan) in self.fields.items():
            if out_name in result:
                result[out_name] = plan.validate(
                    result[out_name], (*path, name), errors
                )
        return result


class DirectiveCompiler:
    """Builds wrapped resolvers from collected constraint uses."""

    def __init__(self, config: GuardConfig | None = None) -> None:
        """Initialize the compiler.

        Args:
            config: Guard configuration. Defaults to ``GuardConfig()``.
        """
        self._config = config or GuardConfig()

    def compile(
        self,
        schema: GraphQLSchema,
        constraints: SchemaConstraints,
    ) -> CompiledDirectives:
        """Compile every constrained object field of a schema.

        Args:
            schema: The schema the constraints were collected from.
            constraints: Collected constraint uses.

        Returns:
            The compiled wrapped resolvers, not yet installed.

        Raises:
            SchemaShapeError: If a field cannot carry one of its
                constraints.
            DeclarationConflictError: If uses of one directive on a field
                cannot be combined.
        """
        input_plans: dict[str, _InputObjectPlan | None] = {}
        fields = []

        for type_name, type_def in schema.type_map.items():
            if type_name.startswith("__"):
                continue
            if not isinstance(type_def, GraphQLObjectType):
                continue

            for field_name, field_def in type_def.fields.items():
                target = FieldTarget(type_name, field_name, field_def)
                compiled = self._compile_field(target, constraints, input_plans)
                if compiled is not None:
                    fields.append(compiled)

        return CompiledDirectives(schema=schema, fields=tuple(fields))

    def _compile_field(
        self,
        target: FieldTarget,
        constraints: SchemaConstraints,
        input_plans: dict[str, "_InputObjectPlan | None"],
    ) -> CompiledField | None:
        uses = constraints.get_uses_for_field(target.type_name, target.field_name)
        layers: list[ResolverLayer] = []

        for group in _group_by_name(uses):
            declaration = group[0].declaration
            if declaration.kind is ConstraintKind.ACCESS:
                layer_factory = cast(LayerFactory, declaration.layer_factory)
                layers.append(layer_factory(group, target, self._config))
                continue
            for use in group:
                layer = self._output_layer(use, target)
                if layer is not None:
                    layers.append(layer)

        input_layer = self._input_layer(target, constraints, input_plans)
        if input_layer is not None:
            layers.append(input_layer)

        if not layers:
            return None

        resolve: Resolver = target.field.resolve or default_field_resolver
        for layer in reversed(layers):
            resolve = layer(resolve)

        logger.debug(
            f"Compiled {target.coordinate}: "
            f"{', '.join('@' + use.name for use in uses) or 'input checks'}"
        )
        return CompiledField(
            target=target,
            resolve=resolve,
            uses=tuple(uses),
            checks_input=input_layer is not None,
        )

    def _build_check(self, use: ConstraintUse) -> CheckFunction | None:
        declaration = use.declaration
        check_factory = cast(CheckFactory, declaration.check_factory)
        check = check_factory(use.arguments)
        if check is None:
            return None
        if declaration.elementwise:
            return validate_array_or_value(check)
        return check

    def _output_layer(
        self,
        use: ConstraintUse,
        target: FieldTarget,
    ) -> ResolverLayer | None:
        if not accepts_type(use.declaration, target.field.type):
            if use.is_type_level:
                logger.debug(
                    f"Skipping @{use.name} from type {target.type_name} on "
                    f"{target.coordinate} of type {target.field.type}"
                )
                return None
            raise SchemaShapeError(
                f"@{use.name} cannot check {target.coordinate} "
                f"of type {target.field.type}"
            )

        check = self._build_check(use)
        if check is None:
            return None
        return _output_check_layer(use.name, check)

    def _input_layer(
        self,
        target: FieldTarget,
        constraints: SchemaConstraints,
        input_plans: dict[str, "_InputObjectPlan | None"],
    ) -> ResolverLayer | None:
        errors_name = self._config.validation_errors_argument
        plans: dict[str, tuple[str, _ValuePlan]] = {}

        for arg_name, argument in target.field.args.items():
            if arg_name == errors_name:
                continue
            plan = self._plan_value(
                argument.type,
                constraints.get_uses_for_argument(
                    target.type_name, target.field_name, arg_name
                ),
                f"{target.coordinate}({arg_name}:)",
                constraints,
                input_plans,
            )
            if plan is not None:
                plans[argument.out_name or arg_name] = (arg_name, plan)

        if not plans:
            return None

        errors_argument = target.field.args.get(errors_name)
        errors_key = None
        if errors_argument is not None:
            if not is_errors_list_argument(errors_argument):
                raise SchemaShapeError(
                    f"{target.coordinate}({errors_name}:) must be a nullable list "
                    f"of input objects, got {errors_argument.type}"
                )
            errors_key = errors_argument.out_name or errors_name

        return _input_check_layer(plans, errors_key)

    def _plan_value(
        self,
        type_: GraphQLInputType,
        uses: Iterable[ConstraintUse],
        coordinate: str,
        constraints: SchemaConstraints,
        input_plans: dict[str, "_InputObjectPlan | None"],
    ) -> _ValuePlan | None:
        checks = []
        for use in uses:
            if not accepts_type(use.declaration, type_):
                raise SchemaShapeError(
                    f"@{use.name} cannot check {coordinate} of type {type_}"
                )
            check = self._build_check(use)
            if check is not None:
                checks.append((use.name, check))

        nested = None
        named = get_named_type(type_)
        if isinstance(named, GraphQLInputObjectType):
            nested = self._plan_input_object(named, constraints, input_plans)

        if not checks and nested is None:
            return None
        return _ValuePlan(checks=tuple(checks), nested=nested)

    def _plan_input_object(
        self,
        input_type: GraphQLInputObjectType,
        constraints: SchemaConstraints,
        input_plans: dict[str, "_InputObjectPlan | None"],
    ) -> "_InputObjectPlan | None":
        if input_type.name in input_plans:
            return input_plans[input_type.name]

        # Registered before recursing so self-referencing inputs terminate
        plan = _InputObjectPlan()
        input_plans[input_type.name] = plan

        for field_name, input_field in input_type.fields.items():
            value_plan = self._plan_value(
                input_field.type,
                constraints.get_uses_for_input_field(input_type.name, field_name),
                f"{input_type.name}.{field_name}",
                constraints,
                input_plans,
            )
            if value_plan is not None:
                plan.fields[input_field.out_name or field_name] = (
                    field_name,
                    value_plan,
                )

        if not plan.fields:
            input_plans[input_type.name] = None
            return None
        return plan


def _group_by_name(uses: Iterable[ConstraintUse]) -> list[list[ConstraintUse]]:
    """Group uses by directive name, access groups first.

    Groups keep the order of first appearance within each kind.
    """
    groups: dict[str, list[ConstraintUse]] = {}
    for use in uses:
        groups.setdefault(use.name, []).append(use)
    return sorted(
        groups.values(),
        key=lambda group: group[0].kind is not ConstraintKind.ACCESS,
    )


def _output_check_layer(name: str, check: CheckFunction) -> ResolverLayer:
    async def settle(pending: Any) -> Any:
        try:
            return await pending
        except ConstraintViolation as exc:
            raise ValidationError.from_violation(name, exc) from exc

    def apply(value: Any) -> Any:
        try:
            result = check(value)
        except ConstraintViolation as exc:
            raise ValidationError.from_violation(name, exc) from exc
        if inspect.isawaitable(result):
            return settle(result)
        return result

    def layer(resolve: Resolver) -> Resolver:
        def wrapped(source: Any, info: Any, **args: Any) -> Any:
            return then(resolve(source, info, **args), apply)

        return wrapped

    return layer


def _input_check_layer(
    plans: dict[str, tuple[str, _ValuePlan]],
    errors_key: str | None,
) -> ResolverLayer:
    def layer(resolve: Resolver) -> Resolver:
        def wrapped(source: Any, info: Any, **args: Any) -> Any:
            errors: list[_InputViolation] = []
            for out_name, (name, plan) in plans.items():
                if out_name in args:
                    args[out_name] = plan.validate(args[out_name], (name,), errors)

            if errors_key is not None:
                args[errors_key] = [error.to_dict() for error in errors] or None
            elif errors:
                first = errors[0]
                raise ValidationError(
                    f"@{first.constraint}: {first.message}",
                    constraint=first.constraint,
                    value_path=first.path,
                )
            return resolve(source, info, **args)

        return wrapped

    return layer


def apply_directives(
    schema: GraphQLSchema,
    registry: DeclarationRegistry | None = None,
    config: GuardConfig | None = None,
) -> GraphQLSchema:
    """Collect, compile and install the constraint directives of a schema.

    Args:
        schema: A built schema whose SDL includes the registry's type defs.
        registry: Declarations to enforce. Defaults to the built-in
            directives.
        config: Guard configuration.

    Returns:
        The schema, with wrapped resolvers installed.

    Raises:
        SchemaBuildError: If the directives cannot be applied.
    """
    if registry is None:
        from guardql.directives import create_default_registry

        registry = create_default_registry()

    constraints = DirectiveCollector(registry).collect(schema)
    compiled = DirectiveCompiler(config).compile(schema, constraints)
    return compiled.install()
