# src/logwright/pipeline/__init__.py
"""Logging pipeline: the builder that configuration methods act on, and the logger it creates."""

from logwright.pipeline.configuration import (
    LoggerAuditSinkConfiguration,
    LoggerConfiguration,
    LoggerDestructuringConfiguration,
    LoggerEnrichmentConfiguration,
    LoggerFilterConfiguration,
    LoggerMinimumLevelConfiguration,
    LoggerSinkConfiguration,
)
from logwright.pipeline.logger import SOURCE_CONTEXT_PROPERTY, Logger
from logwright.pipeline.sinks import ConsoleSink, StdlibSink

__all__ = [
    "SOURCE_CONTEXT_PROPERTY",
    "ConsoleSink",
    "Logger",
    "LoggerAuditSinkConfiguration",
    "LoggerConfiguration",
    "LoggerDestructuringConfiguration",
    "LoggerEnrichmentConfiguration",
    "LoggerFilterConfiguration",
    "LoggerMinimumLevelConfiguration",
    "LoggerSinkConfiguration",
    "StdlibSink",
]
