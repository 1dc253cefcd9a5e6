# src/logwright/pipeline/sinks.py
"""Built-in sinks and sink wrappers."""

import logging
import sys
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, TextIO

from logwright.contracts.enums import LogEventLevel
from logwright.contracts.events import LogEvent
from logwright.core.logging import build_renderer, get_logger, to_stdlib_level
from logwright.core.switches import LoggingLevelSwitch

if TYPE_CHECKING:
    from logwright.pipeline.logger import Logger
    from logwright.plugins.protocols import LogEventSink

logger = get_logger(__name__)


class RestrictedSink:
    """Passes events on only at or above a fixed level and a switch's level."""

    def __init__(
        self,
        sink: "LogEventSink",
        restricted_to_minimum_level: LogEventLevel = LogEventLevel.VERBOSE,
        level_switch: LoggingLevelSwitch | None = None,
    ) -> None:
        self.sink = sink
        self.restricted_to_minimum_level = restricted_to_minimum_level
        self.level_switch = level_switch

    def emit(self, event: LogEvent) -> None:
        if event.level < self.restricted_to_minimum_level:
            return
        if self.level_switch is not None and not self.level_switch.is_enabled(event.level):
            return
        self.sink.emit(event)


class AggregateSink:
    """Fans one event out to several sinks.

    A failing sink is reported and does not stop the remaining sinks.
    """

    def __init__(self, sinks: Sequence["LogEventSink"]) -> None:
        self.sinks = list(sinks)

    def emit(self, event: LogEvent) -> None:
        for sink in self.sinks:
            try:
                sink.emit(event)
            except Exception as e:
                logger.warning("Sink failed while emitting", sink=type(sink).__name__, error=str(e))


class SecondaryLoggerSink:
    """Forwards events into a sub-logger's pipeline.

    Each event is copied so the sub-logger's enrichers cannot modify what the
    parent's other sinks see.
    """

    def __init__(self, sub_logger: "Logger") -> None:
        self.sub_logger = sub_logger

    def emit(self, event: LogEvent) -> None:
        self.sub_logger.dispatch(event.copy())


class ConsoleSink:
    """Renders events with structlog's console or JSON renderer."""

    def __init__(self, *, json_output: bool = False, colors: bool = False, stream: TextIO | None = None) -> None:
        self.json_output = json_output
        self._renderer = build_renderer(json_output=json_output, colors=colors)
        self._stream = stream

    def emit(self, event: LogEvent) -> None:
        event_dict: dict[str, Any] = {
            "event": event.render_message(),
            "level": event.level.name.lower(),
            "timestamp": event.timestamp.isoformat(),
            **event.properties,
        }
        if event.exception is not None:
            event_dict["exception"] = repr(event.exception)
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(str(self._renderer(None, event.level.name.lower(), event_dict)) + "\n")
        stream.flush()


class StdlibSink:
    """Forwards events to a stdlib logger, properties passed as extra."""

    def __init__(self, logger_name: str = "logwright") -> None:
        self.logger_name = logger_name

    def emit(self, event: LogEvent) -> None:
        target = logging.getLogger(self.logger_name)
        level = to_stdlib_level(event.level)
        if not target.isEnabledFor(level):
            return
        exc_info = None
        if event.exception is not None:
            exc_info = (type(event.exception), event.exception, event.exception.__traceback__)
        target.log(level, event.render_message(), exc_info=exc_info, extra={"properties": dict(event.properties)})
