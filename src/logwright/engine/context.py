# src/logwright/engine/context.py
"""Reader options and the per-read resolution context.

One ResolutionContext is created per top-level read and handed by reference
to every nested reader, so switches declared once are visible to all nested
sections built from the same read.
"""

import re
from collections.abc import Callable
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, Field

from logwright.contracts.errors import (
    ConfigurationValueError,
    ImplicitConfigurationError,
    InvalidSwitchNameError,
    UndeclaredSwitchError,
)
from logwright.core.configuration import ConfigurationRoot
from logwright.core.switches import LoggingFilterSwitch, LoggingLevelSwitch

SWITCH_NAME_PATTERN = re.compile(r"^\$?[A-Za-z]+[A-Za-z0-9]*$")

_TRUE_VALUES = frozenset({"true", "yes", "on", "1"})
_FALSE_VALUES = frozenset({"false", "no", "off", "0"})


class NumberFormat(BaseModel):
    """Separators used when parsing numbers from configuration scalars.

    The default is the invariant format: '.' decimal separator, ',' group
    separator. A German-style document would use
    NumberFormat(decimal_separator=",", group_separator=".").
    """

    model_config = {"frozen": True}

    decimal_separator: str = Field(default=".", min_length=1, max_length=1)
    group_separator: str = Field(default=",", max_length=1)

    def _normalize(self, value: str) -> str:
        text = value.strip()
        if self.group_separator:
            text = text.replace(self.group_separator, "")
        if self.decimal_separator != ".":
            text = text.replace(self.decimal_separator, ".")
        return text

    def parse_decimal(self, value: str) -> Decimal:
        try:
            return Decimal(self._normalize(value))
        except InvalidOperation:
            raise ConfigurationValueError(f"The value {value!r} is not a valid number.") from None

    def parse_float(self, value: str) -> float:
        try:
            return float(self._normalize(value))
        except ValueError:
            raise ConfigurationValueError(f"The value {value!r} is not a valid number.") from None

    def parse_int(self, value: str) -> int:
        normalized = self._normalize(value)
        try:
            return int(normalized)
        except ValueError:
            raise ConfigurationValueError(f"The value {value!r} is not a valid integer.") from None

    def parse_bool(self, value: str) -> bool:
        folded = value.strip().casefold()
        if folded in _TRUE_VALUES:
            return True
        if folded in _FALSE_VALUES:
            return False
        raise ConfigurationValueError(f"The value {value!r} is not a valid boolean.")


class ReaderOptions(BaseModel):
    """Options for read_configuration().

    Attributes:
        section_name: Name of the section holding the logger configuration.
        format_provider: Number format used for scalar conversion.
        allow_internal_types: Also scan non-public (underscore) classes for
            nested type names and static member owners.
        allow_internal_methods: Also register non-public (underscore)
            configuration functions as candidates.
        modules: Modules scanned for configuration methods in addition to
            the ones named in the "Using" section.
        on_level_switch_created: Called with (name, switch) for every level
            switch the reader creates.
        on_filter_switch_created: Called with (name, switch) for every filter
            switch the reader creates.
    """

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    section_name: str = "Logging"
    format_provider: NumberFormat = Field(default_factory=NumberFormat)
    allow_internal_types: bool = False
    allow_internal_methods: bool = False
    modules: tuple[str, ...] = ()
    on_level_switch_created: Callable[[str, LoggingLevelSwitch], Any] | None = None
    on_filter_switch_created: Callable[[str, LoggingFilterSwitch], Any] | None = None


def is_valid_switch_name(name: str) -> bool:
    return SWITCH_NAME_PATTERN.fullmatch(name) is not None


def to_switch_reference(name: str) -> str:
    return name if name.startswith("$") else f"${name}"


class ResolutionContext:
    """Declared switches, the application configuration and the reader options."""

    def __init__(
        self,
        app_configuration: ConfigurationRoot | None = None,
        options: ReaderOptions | None = None,
    ) -> None:
        self._app_configuration = app_configuration
        self.options = options or ReaderOptions()
        self._level_switches: dict[str, LoggingLevelSwitch] = {}
        self._filter_switches: dict[str, LoggingFilterSwitch] = {}

    @property
    def has_app_configuration(self) -> bool:
        return self._app_configuration is not None

    @property
    def app_configuration(self) -> ConfigurationRoot:
        if self._app_configuration is None:
            raise ImplicitConfigurationError("The application configuration is not available.")
        return self._app_configuration

    @property
    def level_switches(self) -> dict[str, LoggingLevelSwitch]:
        return dict(self._level_switches)

    @property
    def filter_switches(self) -> dict[str, LoggingFilterSwitch]:
        return dict(self._filter_switches)

    def add_level_switch(self, name: str, switch: LoggingLevelSwitch) -> str:
        """Register a level switch and return its $-prefixed reference name."""
        if not is_valid_switch_name(name):
            raise InvalidSwitchNameError(
                f'"{name}" is not a valid name for a Level Switch declaration. The first character of the name '
                'must be a letter or \'$\' sign, like "LevelSwitches" : {"$switchName" : "InitialLevel"}'
            )
        reference = to_switch_reference(name)
        self._level_switches[reference] = switch
        return reference

    def add_filter_switch(self, name: str, switch: LoggingFilterSwitch) -> str:
        """Register a filter switch and return its $-prefixed reference name."""
        if not is_valid_switch_name(name):
            raise InvalidSwitchNameError(
                f'"{name}" is not a valid name for a Filter Switch declaration. The first character of the name '
                'must be a letter or \'$\' sign, like "FilterSwitches" : {"$switchName" : "{FilterExpression}"}'
            )
        reference = to_switch_reference(name)
        self._filter_switches[reference] = switch
        return reference

    def lookup_level_switch(self, name: str) -> LoggingLevelSwitch:
        """Find a declared level switch by name, with or without the '$' prefix.

        Raises:
            UndeclaredSwitchError: If no switch of that name was declared.
        """
        reference = to_switch_reference(name.strip())
        switch = self._level_switches.get(reference)
        if switch is None:
            raise UndeclaredSwitchError(
                reference,
                f'No LoggingLevelSwitch has been declared with name "{reference}". '
                f'You might be missing a section "LevelSwitches":{{"{reference}":"InitialLevel"}}',
            )
        return switch

    def lookup_filter_switch(self, name: str) -> LoggingFilterSwitch:
        """Find a declared filter switch by name, with or without the '$' prefix.

        Raises:
            UndeclaredSwitchError: If no switch of that name was declared.
        """
        reference = to_switch_reference(name.strip())
        switch = self._filter_switches.get(reference)
        if switch is None:
            raise UndeclaredSwitchError(
                reference,
                f'No LoggingFilterSwitch has been declared with name "{reference}". '
                f'You might be missing a section "FilterSwitches":{{"{reference}":"{{FilterExpression}}"}}',
            )
        return switch
