# src/logwright/pipeline/logger.py
"""The logger produced by LoggerConfiguration.create_logger().

Event flow for one write:
1. level check against the minimum level switch, or the override switch
   with the longest SourceContext prefix match
2. enrichers, in registration order
3. filters; the first filter returning False drops the event
4. destructuring of property values
5. sinks, then audit sinks

Failures of ordinary sinks are reported on the diagnostic channel and never
reach the caller. Audit sink failures propagate.
"""

import re
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from logwright.contracts.enums import LogEventLevel
from logwright.contracts.events import LogEvent
from logwright.core.logging import get_logger
from logwright.core.switches import LoggingLevelSwitch
from logwright.pipeline.destructuring import Destructurer

if TYPE_CHECKING:
    from logwright.plugins.protocols import LogEventEnricher, LogEventFilter, LogEventSink

logger = get_logger(__name__)

SOURCE_CONTEXT_PROPERTY = "SourceContext"

_TEMPLATE_TOKEN = re.compile(r"\{@?([A-Za-z_][A-Za-z0-9_]*)\}")


def _matches_prefix(source_context: str, prefix: str) -> bool:
    return source_context == prefix or source_context.startswith(prefix + ".")


class Logger:
    def __init__(
        self,
        *,
        level_switch: LoggingLevelSwitch,
        overrides: dict[str, LoggingLevelSwitch],
        sinks: Sequence["LogEventSink"],
        audit_sinks: Sequence["LogEventSink"],
        enrichers: Sequence["LogEventEnricher"],
        filters: Sequence["LogEventFilter"],
        destructurer: Destructurer,
        context_properties: dict[str, Any] | None = None,
    ) -> None:
        self._level_switch = level_switch
        # Longest prefix first so the most specific override wins
        self._overrides = dict(sorted(overrides.items(), key=lambda item: len(item[0]), reverse=True))
        self._sinks = list(sinks)
        self._audit_sinks = list(audit_sinks)
        self._enrichers = list(enrichers)
        self._filters = list(filters)
        self._destructurer = destructurer
        self._context_properties = dict(context_properties or {})
        self._effective_switch = self._switch_for(self._context_properties.get(SOURCE_CONTEXT_PROPERTY))

    def _switch_for(self, source_context: Any) -> LoggingLevelSwitch:
        if isinstance(source_context, str):
            for prefix, switch in self._overrides.items():
                if _matches_prefix(source_context, prefix):
                    return switch
        return self._level_switch

    def is_enabled(self, level: LogEventLevel) -> bool:
        return self._effective_switch.is_enabled(level)

    def for_context(self, name: str, value: Any) -> "Logger":
        """Return a logger that adds a property to every event it writes."""
        return Logger(
            level_switch=self._level_switch,
            overrides=self._overrides,
            sinks=self._sinks,
            audit_sinks=self._audit_sinks,
            enrichers=self._enrichers,
            filters=self._filters,
            destructurer=self._destructurer,
            context_properties={**self._context_properties, name: value},
        )

    def for_source(self, source_context: str) -> "Logger":
        return self.for_context(SOURCE_CONTEXT_PROPERTY, source_context)

    def write(
        self,
        level: LogEventLevel,
        message_template: str,
        *args: Any,
        exception: BaseException | None = None,
        **properties: Any,
    ) -> None:
        """Write an event. Positional args bind to template tokens in order."""
        if not self.is_enabled(level):
            return
        bound = dict(self._context_properties)
        tokens = _TEMPLATE_TOKEN.findall(message_template)
        for name, value in zip(tokens, args, strict=False):
            bound[name] = value
        bound.update(properties)
        self._pipeline(LogEvent(level=level, message_template=message_template, properties=bound, exception=exception))

    def dispatch(self, event: LogEvent) -> None:
        """Run an already-built event through this logger's pipeline."""
        if not self._switch_for(event.properties.get(SOURCE_CONTEXT_PROPERTY)).is_enabled(event.level):
            return
        self._pipeline(event)

    def _pipeline(self, event: LogEvent) -> None:
        for enricher in self._enrichers:
            enricher.enrich(event)

        for event_filter in self._filters:
            if not event_filter.is_enabled(event):
                return

        event.properties = self._destructurer.destructure_properties(event.message_template, event.properties)

        for sink in self._sinks:
            try:
                sink.emit(event)
            except Exception as e:
                logger.warning("Sink failed while emitting", sink=type(sink).__name__, error=str(e))

        for audit_sink in self._audit_sinks:
            audit_sink.emit(event)

    def verbose(self, message_template: str, *args: Any, **properties: Any) -> None:
        self.write(LogEventLevel.VERBOSE, message_template, *args, **properties)

    def debug(self, message_template: str, *args: Any, **properties: Any) -> None:
        self.write(LogEventLevel.DEBUG, message_template, *args, **properties)

    def information(self, message_template: str, *args: Any, **properties: Any) -> None:
        self.write(LogEventLevel.INFORMATION, message_template, *args, **properties)

    def warning(self, message_template: str, *args: Any, **properties: Any) -> None:
        self.write(LogEventLevel.WARNING, message_template, *args, **properties)

    def error(self, message_template: str, *args: Any, exception: BaseException | None = None, **properties: Any) -> None:
        self.write(LogEventLevel.ERROR, message_template, *args, exception=exception, **properties)

    def fatal(self, message_template: str, *args: Any, exception: BaseException | None = None, **properties: Any) -> None:
        self.write(LogEventLevel.FATAL, message_template, *args, exception=exception, **properties)
