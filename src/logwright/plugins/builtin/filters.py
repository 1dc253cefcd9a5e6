# src/logwright/plugins/builtin/filters.py
"""Built-in Filter configuration methods."""

from logwright.core.expressions import FilterExpression
from logwright.core.switches import LoggingFilterSwitch
from logwright.pipeline.configuration import LoggerConfiguration, LoggerFilterConfiguration
from logwright.plugins.protocols import LogEventFilter


def with_filter(filter_to: LoggerFilterConfiguration, event_filter: LogEventFilter) -> LoggerConfiguration:
    return filter_to.with_filters(event_filter)


def by_excluding(filter_to: LoggerFilterConfiguration, expression: str) -> LoggerConfiguration:
    """Drop events matching a filter expression, e.g. "level == 'Debug'"."""
    return filter_to.by_excluding(FilterExpression(expression).matches)


def by_including_only(filter_to: LoggerFilterConfiguration, expression: str) -> LoggerConfiguration:
    """Keep only events matching a filter expression."""
    return filter_to.by_including_only(FilterExpression(expression).matches)


def controlled_by(filter_to: LoggerFilterConfiguration, switch: LoggingFilterSwitch) -> LoggerConfiguration:
    """Filter through a switch declared under FilterSwitches."""
    return filter_to.controlled_by(switch)
