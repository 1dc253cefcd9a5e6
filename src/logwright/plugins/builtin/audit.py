# src/logwright/plugins/builtin/audit.py
"""Built-in AuditTo configuration methods."""

from logwright.contracts.enums import LogEventLevel
from logwright.core.switches import LoggingLevelSwitch
from logwright.pipeline.configuration import LoggerAuditSinkConfiguration, LoggerConfiguration
from logwright.plugins.protocols import LogEventSink


def sink(
    audit_to: LoggerAuditSinkConfiguration,
    sink: LogEventSink,
    restricted_to_minimum_level: LogEventLevel = LogEventLevel.VERBOSE,
    level_switch: LoggingLevelSwitch | None = None,
) -> LoggerConfiguration:
    return audit_to.sink(sink, restricted_to_minimum_level, level_switch)
