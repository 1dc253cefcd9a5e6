# src/logwright/engine/section.py
"""Conversion of structured configuration nodes.

Rules, first match wins:
1. ConfigurationSection target: the node itself
2. Callable[[X], ...] over a builder receiver: a nested reader over the node
3. tuple targets: one element per child
4. containers: built-in collections and user container classes
5. everything else: object construction from the node's fields
"""

import inspect
from typing import TYPE_CHECKING, Any, get_args

from logwright.contracts.errors import (
    AmbiguousTypeError,
    ConfigurationError,
    ConfigurationValueError,
    NoMatchingConstructorError,
    UnsupportedCallbackTypeError,
)
from logwright.contracts.methods import ParameterSpec
from logwright.core.configuration import ConfigurationSection, expand_environment_variables
from logwright.core.logging import get_logger
from logwright.engine.arguments import ArgumentValue
from logwright.engine.type_helpers import (
    ContainerShape,
    callable_payload,
    constructor_parameters,
    container_shape,
    find_type,
    has_named_parameters,
    is_polymorphic,
    is_scalar_type,
    type_display_name,
    union_members,
    unwrap_optional,
)
from logwright.pipeline.configuration import (
    LoggerAuditSinkConfiguration,
    LoggerConfiguration,
    LoggerEnrichmentConfiguration,
    LoggerSinkConfiguration,
)

if TYPE_CHECKING:
    from logwright.engine.context import ResolutionContext
    from logwright.plugins.manager import PluginManager

logger = get_logger(__name__)

# Names the concrete type of a structured node; every other key is a constructor field
TYPE_DISCRIMINATOR = "$type"


def _score_constructor(parameters: tuple[ParameterSpec, ...], field_names: set[str]) -> tuple[int, int] | None:
    if any(not p.has_default and p.name.casefold() not in field_names for p in parameters):
        return None
    matched = [p for p in parameters if p.name.casefold() in field_names]
    return len(matched), sum(1 for p in matched if unwrap_optional(p.annotation)[0] is str)


class SectionArgumentValue(ArgumentValue):
    """A configuration node with children."""

    def __init__(self, section: ConfigurationSection, plugins: "PluginManager") -> None:
        self.section = section
        self.plugins = plugins

    def _child(self, section: ConfigurationSection) -> ArgumentValue:
        return ArgumentValue.from_section(section, self.plugins)

    def convert_to(self, target: Any, context: "ResolutionContext") -> Any:
        target, _ = unwrap_optional(target)

        if target is ConfigurationSection:
            return self.section

        is_callable, payload = callable_payload(target)
        if is_callable:
            return self._nested_callback(payload, target, context)

        members = union_members(target)
        if members:
            return self._convert_to_first_member(members, context)

        if target is tuple or (isinstance(target, type) and issubclass(target, tuple) and not hasattr(target, "_fields")):
            return self._to_tuple(target, context)
        if getattr(target, "__origin__", None) is tuple:
            return self._to_tuple(target, context)

        if target in (Any, object) or target is inspect.Parameter.empty:
            if self._discriminator() is None:
                return self._to_plain(self.section)
            return self._construct_object(object, context)

        shape = container_shape(target)
        if shape is not None:
            return self._fill_container(shape, target, context)

        return self._construct_object(target, context)

    def _convert_to_first_member(self, members: tuple[Any, ...], context: "ResolutionContext") -> Any:
        errors: list[str] = []
        for member in members:
            try:
                return self.convert_to(member, context)
            except ConfigurationError as e:
                errors.append(str(e))
        raise ConfigurationValueError(
            f"The section at {self.section.path} matches none of the accepted types: " + "; ".join(errors),
            path=self.section.path,
        )

    # =========================================================================
    # Nested callbacks
    # =========================================================================

    def _nested_callback(self, payload: Any, target: Any, context: "ResolutionContext") -> Any:
        # Deferred to avoid a module cycle: the reader builds argument values
        from logwright.engine.reader import ConfigurationReader

        reader = ConfigurationReader(self.section, self.plugins, context)
        if payload is LoggerConfiguration:
            return reader.configure
        if payload is LoggerSinkConfiguration:
            return reader.apply_sinks
        if payload is LoggerEnrichmentConfiguration:
            return reader.apply_enrichment
        if payload is LoggerAuditSinkConfiguration:
            return reader.apply_audit_sinks

        shown = type_display_name(payload) if payload is not None else type_display_name(target)
        raise UnsupportedCallbackTypeError(
            f"Configuration resolution for Callable[[{shown}], ...] parameter type at the path "
            f"{self.section.path} is not implemented.",
            path=self.section.path,
        )

    # =========================================================================
    # Arrays and containers
    # =========================================================================

    def _to_tuple(self, target: Any, context: "ResolutionContext") -> tuple[Any, ...]:
        args = get_args(target)
        children = self.section.get_children()
        if not args:
            return tuple(self._child(child).convert_to(Any, context) for child in children)
        if len(args) == 2 and args[1] is Ellipsis:
            return tuple(self._child(child).convert_to(args[0], context) for child in children)
        if len(children) != len(args):
            raise ConfigurationValueError(
                f"Expected {len(args)} elements at {self.section.path}, found {len(children)}.",
                path=self.section.path,
            )
        return tuple(self._child(child).convert_to(arg, context) for child, arg in zip(children, args, strict=True))

    def _convert_key(self, key: str, key_type: Any, context: "ResolutionContext") -> Any:
        from logwright.engine.scalar import ScalarArgumentValue

        if key_type in (str, Any):
            return key
        return ScalarArgumentValue(key, self.plugins).convert_to(key_type, context)

    def _fill_container(self, shape: ContainerShape, target: Any, context: "ResolutionContext") -> Any:
        children = self.section.get_children()

        if shape.kind == "abstract":
            raise AmbiguousTypeError(
                f"Cannot create a container of abstract type {type_display_name(target)} at {self.section.path}. "
                "Use a concrete container type.",
                path=self.section.path,
            )
        if shape.kind in ("dict", "setitem"):
            container = shape.factory()
            for child in children:
                container[self._convert_key(child.key, shape.key_type, context)] = self._child(child).convert_to(
                    shape.element_type, context
                )
            return container

        elements = [self._child(child).convert_to(shape.element_type, context) for child in children]
        if shape.kind in ("list", "set", "frozenset"):
            return shape.factory(elements)

        container = shape.factory()
        if shape.kind == "append":
            for element in elements:
                container.append(element)
        elif shape.kind == "add":
            for element in elements:
                container.add(element)
        else:
            logger.debug(
                "Container type has no insertion operation, leaving it empty",
                container=type_display_name(target),
                path=self.section.path,
            )
        return container

    def _to_plain(self, section: ConfigurationSection) -> Any:
        children = section.get_children()
        if not children:
            value = section.value
            return None if value is None else expand_environment_variables(value)
        keys = [child.key for child in children]
        if keys == [str(i) for i in range(len(keys))]:
            return [self._to_plain(child) for child in children]
        return {child.key: self._to_plain(child) for child in children}

    # =========================================================================
    # Object construction
    # =========================================================================

    def _discriminator(self) -> str | None:
        return self.section.get_section(TYPE_DISCRIMINATOR).value or None

    def _resolve_discriminated(self, type_name: str, target: Any, context: "ResolutionContext") -> type:
        path = self.section.path
        cls = find_type(type_name, self.plugins, allow_internal=context.options.allow_internal_types)
        if not isinstance(cls, type):
            raise ConfigurationValueError(f"`{type_name}` at {path} does not name a class.", path=path)
        if is_polymorphic(cls):
            raise AmbiguousTypeError(
                f"Cannot create an instance of {type_display_name(cls)} at {path} because it is abstract. "
                "The '$type' element must name a concrete type.",
                path=path,
            )
        # Protocols cannot be checked with issubclass unless runtime_checkable
        if isinstance(target, type) and not getattr(target, "_is_protocol", False) and not issubclass(cls, target):
            raise ConfigurationValueError(
                f"The type {type_display_name(cls)} named at {path} is not a {type_display_name(target)}.",
                path=path,
            )
        return cls

    def _construct_object(self, target: Any, context: "ResolutionContext") -> Any:
        path = self.section.path
        type_name = self._discriminator()
        if type_name is not None:
            cls = self._resolve_discriminated(type_name, target, context)
        else:
            cls = target
            if not isinstance(cls, type) or is_polymorphic(cls):
                raise AmbiguousTypeError(
                    f"Cannot create an instance of {type_display_name(target)} at {path} because it is "
                    "abstract and no concrete type was specified. Add a '$type' element naming the concrete type.",
                    path=path,
                )

        if is_scalar_type(cls):
            raise ConfigurationValueError(
                f"The section at {path} cannot be converted to {type_display_name(cls)}; a scalar value is required.",
                path=path,
            )
        if not has_named_parameters(cls):
            raise NoMatchingConstructorError(
                f"The constructor of {type_display_name(cls)} takes no named fields, so it cannot be built from "
                f"the section at {path}.",
                path=path,
            )

        fields = {
            child.key.casefold(): child
            for child in self.section.get_children()
            if type_name is None or child.key.casefold() != TYPE_DISCRIMINATOR
        }

        best: tuple[tuple[int, int], tuple[ParameterSpec, ...]] | None = None
        for parameters in constructor_parameters(cls):
            score = _score_constructor(parameters, set(fields))
            if score is not None and (best is None or score > best[0]):
                best = (score, parameters)

        if best is None:
            supplied = ", ".join(child.key for child in fields.values()) or "none"
            raise NoMatchingConstructorError(
                f"No constructor of {type_display_name(cls)} can be called with the fields supplied at "
                f"{path} (supplied: {supplied}).",
                path=path,
            )

        positional: list[Any] = []
        keywords: dict[str, Any] = {}
        for parameter in best[1]:
            field = fields.get(parameter.name.casefold())
            if field is None:
                if parameter.positional_only:
                    positional.append(parameter.default)
                continue
            value = self._child(field).convert_to(parameter.annotation, context)
            if parameter.positional_only:
                positional.append(value)
            else:
                keywords[parameter.name] = value
        try:
            return cls(*positional, **keywords)
        except (TypeError, ValueError) as e:
            raise ConfigurationValueError(
                f"Creating {type_display_name(cls)} from the section at {path} failed: {e}",
                path=path,
            ) from e

    def __repr__(self) -> str:
        return f"SectionArgumentValue({self.section.path!r})"
