# src/logwright/plugins/builtin/sinks.py
"""Built-in WriteTo configuration methods."""

from collections.abc import Callable
from typing import Any

from logwright.contracts.enums import LogEventLevel
from logwright.core.switches import LoggingLevelSwitch
from logwright.pipeline.configuration import LoggerConfiguration, LoggerSinkConfiguration
from logwright.pipeline.sinks import ConsoleSink, StdlibSink
from logwright.plugins.protocols import LogEventSink


def sink(
    write_to: LoggerSinkConfiguration,
    sink: LogEventSink,
    restricted_to_minimum_level: LogEventLevel = LogEventLevel.VERBOSE,
    level_switch: LoggingLevelSwitch | None = None,
) -> LoggerConfiguration:
    """Write to a sink named by type, e.g. {"Name": "sink", "Args": {"sink": "my_app.sinks.AuditFile"}}."""
    return write_to.sink(sink, restricted_to_minimum_level, level_switch)


def logger(
    write_to: LoggerSinkConfiguration,
    configure_logger: Callable[[LoggerConfiguration], Any],
    restricted_to_minimum_level: LogEventLevel = LogEventLevel.VERBOSE,
    level_switch: LoggingLevelSwitch | None = None,
) -> LoggerConfiguration:
    """Write to a sub-logger configured from the nested configure_logger section."""
    return write_to.logger(configure_logger, restricted_to_minimum_level, level_switch)


def console(
    write_to: LoggerSinkConfiguration,
    json_output: bool = False,
    colors: bool = False,
    restricted_to_minimum_level: LogEventLevel = LogEventLevel.VERBOSE,
    level_switch: LoggingLevelSwitch | None = None,
) -> LoggerConfiguration:
    return write_to.sink(ConsoleSink(json_output=json_output, colors=colors), restricted_to_minimum_level, level_switch)


def stdlib(
    write_to: LoggerSinkConfiguration,
    logger_name: str = "logwright",
    restricted_to_minimum_level: LogEventLevel = LogEventLevel.VERBOSE,
    level_switch: LoggingLevelSwitch | None = None,
) -> LoggerConfiguration:
    """Forward events to the standard library logger named logger_name."""
    return write_to.sink(StdlibSink(logger_name), restricted_to_minimum_level, level_switch)
