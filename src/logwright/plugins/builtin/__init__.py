# src/logwright/plugins/builtin/__init__.py
"""Configuration methods and types available to every reader.

These are the pipeline builder's own methods exposed as candidates, so that
"WriteTo": ["console"] works without a "Using" section.
"""

from logwright.pipeline.enrichers import LogContextEnricher, PropertyEnricher
from logwright.pipeline.sinks import ConsoleSink, StdlibSink
from logwright.plugins.builtin import audit, destructure, enrich, filters, sinks
from logwright.plugins.hookspecs import hookimpl

BUILTIN_MODULES = (sinks, audit, enrich, filters, destructure)


class BuiltinTypes:
    """Pipeline classes configuration may name without a module path."""

    @hookimpl
    def logwright_get_types(self) -> list[type]:
        return [ConsoleSink, StdlibSink, PropertyEnricher, LogContextEnricher]


__all__ = ["BUILTIN_MODULES", "BuiltinTypes"]
