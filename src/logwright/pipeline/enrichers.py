# src/logwright/pipeline/enrichers.py
"""Built-in enrichers."""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import structlog

from logwright.contracts.enums import LogEventLevel
from logwright.contracts.events import LogEvent

if TYPE_CHECKING:
    from logwright.plugins.protocols import LogEventEnricher


class PropertyEnricher:
    """Adds a fixed property unless the event already carries it."""

    def __init__(self, name: str, value: Any, destructure_objects: bool = False) -> None:
        self.name = name
        self.value = value
        self.destructure_objects = destructure_objects

    def enrich(self, event: LogEvent) -> None:
        event.add_property_if_absent(self.name, self.value)


class LogContextEnricher:
    """Copies structlog context variables into the event.

    Values bound with structlog.contextvars.bind_contextvars() (or the
    bound_contextvars() context manager) become event properties. Properties
    already on the event win.
    """

    def enrich(self, event: LogEvent) -> None:
        for name, value in structlog.contextvars.get_contextvars().items():
            event.add_property_if_absent(name, value)


class ConditionalEnricher:
    """Applies wrapped enrichers only to events at or above a level."""

    def __init__(self, minimum_level: LogEventLevel, enrichers: Sequence["LogEventEnricher"]) -> None:
        self.minimum_level = minimum_level
        self.enrichers = list(enrichers)

    def enrich(self, event: LogEvent) -> None:
        if event.level < self.minimum_level:
            return
        for enricher in self.enrichers:
            enricher.enrich(event)
