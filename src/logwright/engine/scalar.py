# src/logwright/engine/scalar.py
"""Conversion of scalar configuration values."""

import inspect
import re
from collections.abc import Callable
from datetime import timedelta
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from typing import TYPE_CHECKING, Any, get_args, get_origin

from pydantic import AnyUrl, TypeAdapter, ValidationError
from pydantic.errors import PydanticSchemaGenerationError

from logwright.contracts.errors import (
    ConfigurationError,
    ConfigurationValueError,
    NoDefaultConstructorError,
    TypeLoadError,
)
from logwright.core.configuration import expand_environment_variables
from logwright.core.switches import LoggingFilterSwitch, LoggingLevelSwitch
from logwright.engine.arguments import ArgumentValue
from logwright.engine.type_helpers import (
    constructor_parameters,
    find_type,
    is_polymorphic,
    parse_static_member_accessor,
    resolve_static_member,
    type_display_name,
    union_members,
    unwrap_optional,
)

if TYPE_CHECKING:
    from logwright.engine.context import ResolutionContext
    from logwright.plugins.manager import PluginManager

# [-][d.]hh:mm[:ss[.fffffff]]
_TIMESPAN = re.compile(
    r"^(?P<sign>-)?(?:(?P<days>\d+)\.)?(?P<hours>\d{1,2}):(?P<minutes>\d{1,2})"
    r"(?::(?P<seconds>\d{1,2})(?:\.(?P<fraction>\d{1,7}))?)?$"
)
_WHOLE_DAYS = re.compile(r"^(?P<sign>-)?(?P<days>\d+)$")
_INTEGER = re.compile(r"^[+-]?\d+$")


def parse_timespan(value: str) -> timedelta:
    """Parse "[-][d.]hh:mm[:ss[.f]]", a whole number of days, or an ISO 8601 duration.

    Raises:
        ConfigurationValueError: If value matches none of the formats.
    """
    text = value.strip()
    days_only = _WHOLE_DAYS.match(text)
    if days_only is not None:
        result = timedelta(days=int(days_only.group("days")))
        return -result if days_only.group("sign") else result

    match = _TIMESPAN.match(text)
    if match is None:
        try:
            return TypeAdapter(timedelta).validate_python(text)
        except ValidationError as e:
            raise ConfigurationValueError(f"The value {value!r} is not a valid time span.") from e

    hours, minutes = int(match.group("hours")), int(match.group("minutes"))
    seconds = int(match.group("seconds") or 0)
    if hours > 23 or minutes > 59 or seconds > 59:
        raise ConfigurationValueError(f"The value {value!r} is not a valid time span.")
    fraction = match.group("fraction") or "0"
    result = timedelta(
        days=int(match.group("days") or 0),
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        microseconds=round(int(fraction.ljust(7, "0")) / 10),
    )
    return -result if match.group("sign") else result


def _convert_type_reference(value: str, target: Any, plugins: "PluginManager", context: "ResolutionContext") -> Any:
    resolved = find_type(value, plugins, allow_internal=context.options.allow_internal_types)
    if not isinstance(resolved, type):
        raise ConfigurationValueError(f"`{value}` does not name a class.")
    bound = get_args(target)
    if bound and isinstance(bound[0], type) and not issubclass(resolved, bound[0]):
        raise ConfigurationValueError(f"`{value}` is not a subclass of {type_display_name(bound[0])}.")
    return resolved


# Conversions beyond what the number format and pydantic provide, keyed by
# the base class they apply to
_EXTENDED_CONVERSIONS: dict[type, Callable[[str, Any, "PluginManager", "ResolutionContext"], Any]] = {
    timedelta: lambda value, target, plugins, context: parse_timespan(value),
    AnyUrl: lambda value, target, plugins, context: TypeAdapter(target).validate_python(value.strip()),
    PurePath: lambda value, target, plugins, context: target(value),
}


def _extended_conversion(target: Any) -> Callable[[str, Any, "PluginManager", "ResolutionContext"], Any] | None:
    if target is type or get_origin(target) is type:
        return _convert_type_reference
    if not isinstance(target, type):
        return None
    for base, converter in _EXTENDED_CONVERSIONS.items():
        if issubclass(target, base):
            return converter
    return None


def _parse_enum(target: type[Enum], value: str) -> Enum:
    text = value.strip()
    if text in target.__members__:
        return target[text]
    if _INTEGER.match(text):
        number = int(text)
        for member in target:
            if member.value == number:
                return member
    try:
        return target(text)
    except ValueError as e:
        raise ConfigurationValueError(f"The value {value!r} is not a valid {target.__name__}.") from e


class ScalarArgumentValue(ArgumentValue):
    """A configuration node with a string value."""

    def __init__(self, value: str, plugins: "PluginManager") -> None:
        self.value = value
        self.plugins = plugins

    def convert_to(self, target: Any, context: "ResolutionContext") -> Any:
        value = expand_environment_variables(self.value)

        target, optional = unwrap_optional(target)
        if optional and value == "":
            return None

        if target is LoggingLevelSwitch:
            return context.lookup_level_switch(value)
        if target is LoggingFilterSwitch:
            return context.lookup_filter_switch(value)

        if target in (str, Any, object) or target is inspect.Parameter.empty:
            return value

        members = union_members(target)
        if members:
            return self._convert_to_first_member(members, context)

        if isinstance(target, type) and issubclass(target, Enum):
            return _parse_enum(target, value)

        converter = _extended_conversion(target)
        if converter is not None:
            try:
                return converter(value, target, self.plugins, context)
            except (ValidationError, ValueError, TypeError) as e:
                raise ConfigurationValueError(f"The value {value!r} cannot be converted to {type_display_name(target)}.") from e

        accessor = parse_static_member_accessor(value)
        if accessor is not None:
            return resolve_static_member(
                accessor,
                target,
                self.plugins,
                allow_internal_types=context.options.allow_internal_types,
            )

        if is_polymorphic(target) and value.strip():
            return self._construct_named_type(value, context)

        return self._convert_plain(value, target, context)

    def _convert_to_first_member(self, members: tuple[Any, ...], context: "ResolutionContext") -> Any:
        errors: list[str] = []
        for member in members:
            try:
                return self.convert_to(member, context)
            except ConfigurationError as e:
                errors.append(str(e))
        raise ConfigurationValueError(f"The value {self.value!r} matches none of the accepted types: " + "; ".join(errors))

    def _construct_named_type(self, value: str, context: "ResolutionContext") -> Any:
        resolved = find_type(value, self.plugins, allow_internal=context.options.allow_internal_types)
        if not isinstance(resolved, type):
            raise TypeLoadError(value, f"`{value}` does not name a class.")
        if inspect.isabstract(resolved):
            raise NoDefaultConstructorError(f"{resolved.__qualname__} is abstract and cannot be constructed.")
        for parameters in constructor_parameters(resolved):
            if all(p.has_default for p in parameters):
                return resolved()
        raise NoDefaultConstructorError(f"A default constructor was not found on {resolved.__module__}.{resolved.__qualname__}.")

    def _convert_plain(self, value: str, target: Any, context: "ResolutionContext") -> Any:
        number_format = context.options.format_provider
        if target is bool:
            return number_format.parse_bool(value)
        if target is int:
            return number_format.parse_int(value)
        if target is float:
            return number_format.parse_float(value)
        if target is Decimal:
            return number_format.parse_decimal(value)
        try:
            return TypeAdapter(target).validate_python(value)
        except (ValidationError, PydanticSchemaGenerationError) as e:
            raise ConfigurationValueError(f"The value {value!r} cannot be converted to {type_display_name(target)}.") from e

    def __repr__(self) -> str:
        return f"ScalarArgumentValue({self.value!r})"
