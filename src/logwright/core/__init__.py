# src/logwright/core/__init__.py
"""Core infrastructure: configuration tree, switches, filter expressions, logging."""

from logwright.core.configuration import (
    ConfigurationRoot,
    ConfigurationSection,
    ConfigurationSource,
    DynaconfSource,
    JsonSource,
    MemorySource,
    YamlFileSource,
    expand_environment_variables,
    load_configuration,
)
from logwright.core.expressions import (
    ExpressionEvaluationError,
    ExpressionSecurityError,
    ExpressionSyntaxError,
    FilterExpression,
)
from logwright.core.logging import configure_logging, get_logger
from logwright.core.switches import LoggingFilterSwitch, LoggingLevelSwitch

__all__ = [
    # Configuration
    "ConfigurationRoot",
    "ConfigurationSection",
    "ConfigurationSource",
    "DynaconfSource",
    "JsonSource",
    "MemorySource",
    "YamlFileSource",
    "expand_environment_variables",
    "load_configuration",
    # Expressions
    "ExpressionEvaluationError",
    "ExpressionSecurityError",
    "ExpressionSyntaxError",
    "FilterExpression",
    # Logging
    "configure_logging",
    "get_logger",
    # Switches
    "LoggingFilterSwitch",
    "LoggingLevelSwitch",
]
