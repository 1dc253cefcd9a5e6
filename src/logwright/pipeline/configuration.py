# src/logwright/pipeline/configuration.py
"""Fluent builder for loggers.

LoggerConfiguration owns one receiver object per extension point. Each
receiver method registers something on the owning configuration and returns
it, so calls chain:

    logger = (
        LoggerConfiguration()
        .minimum_level.set_level(LogEventLevel.DEBUG)
        .write_to.sink(ConsoleSink())
        .create_logger()
    )

Configuration methods discovered from plugins take one of these receivers as
their first parameter. The receiver annotation is what decides the kind of
directive ("WriteTo", "Enrich", ...) a method answers to.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from logwright.contracts.enums import LogEventLevel
from logwright.contracts.events import LogEvent
from logwright.core.switches import LoggingFilterSwitch, LoggingLevelSwitch
from logwright.pipeline.destructuring import Destructurer
from logwright.pipeline.enrichers import ConditionalEnricher, LogContextEnricher, PropertyEnricher
from logwright.pipeline.filters import FilterSwitchFilter, PredicateFilter
from logwright.pipeline.logger import Logger
from logwright.pipeline.sinks import AggregateSink, RestrictedSink, SecondaryLoggerSink

if TYPE_CHECKING:
    from logwright.plugins.protocols import (
        DestructuringPolicy,
        LogEventEnricher,
        LogEventFilter,
        LogEventSink,
    )


@dataclass
class _DestructuringSettings:
    policies: list["DestructuringPolicy"] = field(default_factory=list)
    maximum_depth: int = 10
    maximum_string_length: int | None = None
    maximum_collection_count: int | None = None
    scalar_types: list[type] = field(default_factory=list)


class LoggerMinimumLevelConfiguration:
    """Minimum level and per-source-context overrides."""

    def __init__(self, owner: "LoggerConfiguration") -> None:
        self._owner = owner

    def set_level(self, level: LogEventLevel) -> "LoggerConfiguration":
        self._owner._level_switch = None
        self._owner._minimum_level = level
        return self._owner

    def controlled_by(self, level_switch: LoggingLevelSwitch) -> "LoggerConfiguration":
        self._owner._level_switch = level_switch
        return self._owner

    def override(self, source: str, level: LogEventLevel | LoggingLevelSwitch) -> "LoggerConfiguration":
        """Use a different minimum for events whose SourceContext starts with source."""
        if not source.strip():
            raise ValueError("A source context prefix must be supplied for a minimum level override.")
        if isinstance(level, LoggingLevelSwitch):
            self._owner._overrides[source] = level
        else:
            self._owner._overrides[source] = LoggingLevelSwitch(level)
        return self._owner


class LoggerSinkConfiguration:
    """Receiver for WriteTo directives."""

    def __init__(self, owner: "LoggerConfiguration", register: Callable[["LogEventSink"], None]) -> None:
        self._owner = owner
        self._register = register

    def sink(
        self,
        sink: "LogEventSink",
        restricted_to_minimum_level: LogEventLevel = LogEventLevel.VERBOSE,
        level_switch: LoggingLevelSwitch | None = None,
    ) -> "LoggerConfiguration":
        if restricted_to_minimum_level > LogEventLevel.VERBOSE or level_switch is not None:
            sink = RestrictedSink(sink, restricted_to_minimum_level, level_switch)
        self._register(sink)
        return self._owner

    def logger(
        self,
        configure_logger: Callable[["LoggerConfiguration"], Any],
        restricted_to_minimum_level: LogEventLevel = LogEventLevel.VERBOSE,
        level_switch: LoggingLevelSwitch | None = None,
    ) -> "LoggerConfiguration":
        """Write events to a sub-logger built by configure_logger."""
        sub_configuration = LoggerConfiguration()
        sub_configuration.minimum_level.set_level(LogEventLevel.VERBOSE)
        configure_logger(sub_configuration)
        return self.sink(SecondaryLoggerSink(sub_configuration.create_logger()), restricted_to_minimum_level, level_switch)

    def wrap(
        self,
        wrap_sink: Callable[["LogEventSink"], "LogEventSink"],
        configure_wrapped: Callable[["LoggerSinkConfiguration"], Any],
        restricted_to_minimum_level: LogEventLevel = LogEventLevel.VERBOSE,
        level_switch: LoggingLevelSwitch | None = None,
    ) -> "LoggerConfiguration":
        """Collect the sinks configure_wrapped registers and wrap them as one sink."""
        collected: list[LogEventSink] = []
        capturing = LoggerSinkConfiguration(self._owner, collected.append)
        configure_wrapped(capturing)
        if not collected:
            return self._owner
        inner = collected[0] if len(collected) == 1 else AggregateSink(collected)
        return self.sink(wrap_sink(inner), restricted_to_minimum_level, level_switch)


class LoggerAuditSinkConfiguration:
    """Receiver for AuditTo directives. Audit sink failures propagate to the caller."""

    def __init__(self, owner: "LoggerConfiguration") -> None:
        self._owner = owner

    def sink(
        self,
        sink: "LogEventSink",
        restricted_to_minimum_level: LogEventLevel = LogEventLevel.VERBOSE,
        level_switch: LoggingLevelSwitch | None = None,
    ) -> "LoggerConfiguration":
        if restricted_to_minimum_level > LogEventLevel.VERBOSE or level_switch is not None:
            sink = RestrictedSink(sink, restricted_to_minimum_level, level_switch)
        self._owner._audit_sinks.append(sink)
        return self._owner


class LoggerEnrichmentConfiguration:
    """Receiver for Enrich directives."""

    def __init__(self, owner: "LoggerConfiguration", register: Callable[["LogEventEnricher"], None]) -> None:
        self._owner = owner
        self._register = register

    def with_enrichers(self, *enrichers: "LogEventEnricher") -> "LoggerConfiguration":
        for enricher in enrichers:
            self._register(enricher)
        return self._owner

    def with_property(self, name: str, value: Any, destructure_objects: bool = False) -> "LoggerConfiguration":
        return self.with_enrichers(PropertyEnricher(name, value, destructure_objects))

    def from_log_context(self) -> "LoggerConfiguration":
        return self.with_enrichers(LogContextEnricher())

    def at_level(
        self,
        configure_enricher: Callable[["LoggerEnrichmentConfiguration"], Any],
        enrich_from_level: LogEventLevel,
    ) -> "LoggerConfiguration":
        """Apply the enrichers configure_enricher registers only at or above a level."""
        collected: list[LogEventEnricher] = []
        configure_enricher(LoggerEnrichmentConfiguration(self._owner, collected.append))
        return self.with_enrichers(ConditionalEnricher(enrich_from_level, collected))


class LoggerFilterConfiguration:
    """Receiver for Filter directives."""

    def __init__(self, owner: "LoggerConfiguration") -> None:
        self._owner = owner

    def with_filters(self, *filters: "LogEventFilter") -> "LoggerConfiguration":
        self._owner._filters.extend(filters)
        return self._owner

    def by_excluding(self, exclusion_predicate: Callable[[LogEvent], bool]) -> "LoggerConfiguration":
        return self.with_filters(PredicateFilter(exclusion_predicate, include=False))

    def by_including_only(self, inclusion_predicate: Callable[[LogEvent], bool]) -> "LoggerConfiguration":
        return self.with_filters(PredicateFilter(inclusion_predicate, include=True))

    def controlled_by(self, switch: LoggingFilterSwitch) -> "LoggerConfiguration":
        return self.with_filters(FilterSwitchFilter(switch))


class LoggerDestructuringConfiguration:
    """Receiver for Destructure directives."""

    def __init__(self, owner: "LoggerConfiguration") -> None:
        self._owner = owner

    def with_policies(self, *policies: "DestructuringPolicy") -> "LoggerConfiguration":
        self._owner._destructuring.policies.extend(policies)
        return self._owner

    def to_maximum_depth(self, maximum_destructuring_depth: int) -> "LoggerConfiguration":
        if maximum_destructuring_depth < 0:
            raise ValueError("maximum_destructuring_depth must not be negative")
        self._owner._destructuring.maximum_depth = maximum_destructuring_depth
        return self._owner

    def to_maximum_string_length(self, maximum_string_length: int) -> "LoggerConfiguration":
        if maximum_string_length < 2:
            raise ValueError("maximum_string_length must be at least 2")
        self._owner._destructuring.maximum_string_length = maximum_string_length
        return self._owner

    def to_maximum_collection_count(self, maximum_collection_count: int) -> "LoggerConfiguration":
        if maximum_collection_count < 1:
            raise ValueError("maximum_collection_count must be at least 1")
        self._owner._destructuring.maximum_collection_count = maximum_collection_count
        return self._owner

    def as_scalar(self, scalar_type: type) -> "LoggerConfiguration":
        self._owner._destructuring.scalar_types.append(scalar_type)
        return self._owner


class LoggerConfiguration:
    """Accumulates pipeline settings until create_logger() is called."""

    def __init__(self) -> None:
        self._minimum_level = LogEventLevel.INFORMATION
        self._level_switch: LoggingLevelSwitch | None = None
        self._overrides: dict[str, LoggingLevelSwitch] = {}
        self._sinks: list[LogEventSink] = []
        self._audit_sinks: list[LogEventSink] = []
        self._enrichers: list[LogEventEnricher] = []
        self._filters: list[LogEventFilter] = []
        self._destructuring = _DestructuringSettings()
        self._logger_created = False

        self.minimum_level = LoggerMinimumLevelConfiguration(self)
        self.write_to = LoggerSinkConfiguration(self, self._sinks.append)
        self.audit_to = LoggerAuditSinkConfiguration(self)
        self.enrich = LoggerEnrichmentConfiguration(self, self._enrichers.append)
        self.filter = LoggerFilterConfiguration(self)
        self.destructure = LoggerDestructuringConfiguration(self)

    @property
    def overrides(self) -> dict[str, LoggingLevelSwitch]:
        return dict(self._overrides)

    @property
    def sinks(self) -> list["LogEventSink"]:
        return list(self._sinks)

    @property
    def audit_sinks(self) -> list["LogEventSink"]:
        return list(self._audit_sinks)

    @property
    def enrichers(self) -> list["LogEventEnricher"]:
        return list(self._enrichers)

    @property
    def filters(self) -> list["LogEventFilter"]:
        return list(self._filters)

    def create_logger(self) -> Logger:
        """Build the logger. A configuration can only be used once.

        Raises:
            RuntimeError: If create_logger() was already called.
        """
        if self._logger_created:
            raise RuntimeError("create_logger() was previously called and can only be called once.")
        self._logger_created = True

        level_switch = self._level_switch or LoggingLevelSwitch(self._minimum_level)
        destructurer = Destructurer(
            policies=self._destructuring.policies,
            maximum_depth=self._destructuring.maximum_depth,
            maximum_string_length=self._destructuring.maximum_string_length,
            maximum_collection_count=self._destructuring.maximum_collection_count,
            scalar_types=tuple(self._destructuring.scalar_types),
        )
        return Logger(
            level_switch=level_switch,
            overrides=dict(self._overrides),
            sinks=list(self._sinks),
            audit_sinks=list(self._audit_sinks),
            enrichers=list(self._enrichers),
            filters=list(self._filters),
            destructurer=destructurer,
        )
