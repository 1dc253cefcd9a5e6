# src/logwright/plugins/builtin/enrich.py
"""Built-in Enrich configuration methods."""

from collections.abc import Callable
from typing import Any

from logwright.contracts.enums import LogEventLevel
from logwright.pipeline.configuration import LoggerConfiguration, LoggerEnrichmentConfiguration
from logwright.plugins.protocols import LogEventEnricher


def from_log_context(enrich: LoggerEnrichmentConfiguration) -> LoggerConfiguration:
    """Copy structlog context variables onto every event."""
    return enrich.from_log_context()


def with_property(
    enrich: LoggerEnrichmentConfiguration,
    name: str,
    value: str | None,
    destructure_objects: bool = False,
) -> LoggerConfiguration:
    return enrich.with_property(name, value, destructure_objects)


def with_enricher(enrich: LoggerEnrichmentConfiguration, enricher: LogEventEnricher) -> LoggerConfiguration:
    return enrich.with_enrichers(enricher)


def at_level(
    enrich: LoggerEnrichmentConfiguration,
    configure_enricher: Callable[[LoggerEnrichmentConfiguration], Any],
    enrich_from_level: LogEventLevel,
) -> LoggerConfiguration:
    """Apply the nested enrichers only to events at or above enrich_from_level."""
    return enrich.at_level(configure_enricher, enrich_from_level)
