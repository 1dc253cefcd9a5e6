# src/logwright/plugins/protocols.py
"""Protocols for the pipeline extension points.

Configuration methods receive and construct objects satisfying these
protocols. They are runtime-checkable so the pipeline can reject objects that
do not fit, and they count as polymorphic targets during coercion: a
parameter annotated with one of them is filled by naming a concrete type.

Extension points:
- Sink: receives every event that passes filtering
- Enricher: adds properties to events before filtering
- Filter: decides whether an event is kept
- DestructuringPolicy: turns property values into loggable structures
"""

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from logwright.contracts.events import LogEvent


@runtime_checkable
class LogEventSink(Protocol):
    """Protocol for sinks.

    Example:
        class ListSink:
            def __init__(self) -> None:
                self.events: list[LogEvent] = []

            def emit(self, event: LogEvent) -> None:
                self.events.append(event)
    """

    def emit(self, event: "LogEvent") -> None: ...


@runtime_checkable
class LogEventEnricher(Protocol):
    """Protocol for enrichers. Enrichers mutate the event's properties in place."""

    def enrich(self, event: "LogEvent") -> None: ...


@runtime_checkable
class LogEventFilter(Protocol):
    """Protocol for filters. Returning False drops the event."""

    def is_enabled(self, event: "LogEvent") -> bool: ...


@runtime_checkable
class DestructuringPolicy(Protocol):
    """Protocol for destructuring policies.

    Returns (True, result) when the policy handled the value, (False, None)
    otherwise.
    """

    def try_destructure(self, value: Any) -> tuple[bool, Any]: ...
