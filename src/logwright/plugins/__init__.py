# src/logwright/plugins/__init__.py
"""Plugin system: candidate configuration methods, named types, extension protocols."""

from logwright.plugins.discovery import (
    RECEIVER_CAPABILITIES,
    candidates_from_function,
    create_module_hookimpl,
    discover_configuration_methods,
    discover_types,
)
from logwright.plugins.hookspecs import PROJECT_NAME, hookimpl, hookspec
from logwright.plugins.manager import PluginManager
from logwright.plugins.protocols import (
    DestructuringPolicy,
    LogEventEnricher,
    LogEventFilter,
    LogEventSink,
)

__all__ = [
    # Discovery
    "RECEIVER_CAPABILITIES",
    "candidates_from_function",
    "create_module_hookimpl",
    "discover_configuration_methods",
    "discover_types",
    # Hooks
    "PROJECT_NAME",
    "hookimpl",
    "hookspec",
    # Manager
    "PluginManager",
    # Protocols
    "DestructuringPolicy",
    "LogEventEnricher",
    "LogEventFilter",
    "LogEventSink",
]
