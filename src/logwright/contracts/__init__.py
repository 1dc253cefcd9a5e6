"""Shared contracts for cross-boundary data types.

This package is a LEAF MODULE with no outbound dependencies to core/engine.
Enums, records and the error taxonomy used by more than one subsystem live
here.
"""

from logwright.contracts.enums import Capability, LogEventLevel, parse_level
from logwright.contracts.errors import (
    AmbiguousTypeError,
    AmbiguousValueError,
    ConfigurationError,
    ConfigurationValueError,
    ImplicitConfigurationError,
    InvalidSwitchNameError,
    MemberNotFoundError,
    MissingNameError,
    NoDefaultConstructorError,
    NoMatchingConstructorError,
    PluginLoadError,
    TypeLoadError,
    UndeclaredSwitchError,
    UnsupportedCallbackTypeError,
)
from logwright.contracts.events import LogEvent
from logwright.contracts.methods import CandidateMethod, ParameterSpec, parameter_specs

__all__ = [
    # Enums
    "Capability",
    "LogEventLevel",
    "parse_level",
    # Records
    "CandidateMethod",
    "LogEvent",
    "ParameterSpec",
    "parameter_specs",
    # Errors
    "AmbiguousTypeError",
    "AmbiguousValueError",
    "ConfigurationError",
    "ConfigurationValueError",
    "ImplicitConfigurationError",
    "InvalidSwitchNameError",
    "MemberNotFoundError",
    "MissingNameError",
    "NoDefaultConstructorError",
    "NoMatchingConstructorError",
    "PluginLoadError",
    "TypeLoadError",
    "UndeclaredSwitchError",
    "UnsupportedCallbackTypeError",
]
