# src/logwright/pipeline/filters.py
"""Built-in filters."""

from collections.abc import Callable

from logwright.contracts.events import LogEvent
from logwright.core.switches import LoggingFilterSwitch


class PredicateFilter:
    """Keeps events for which the predicate holds (include) or does not hold (exclude)."""

    def __init__(self, predicate: Callable[[LogEvent], bool], *, include: bool) -> None:
        self.predicate = predicate
        self.include = include

    def is_enabled(self, event: LogEvent) -> bool:
        return bool(self.predicate(event)) == self.include


class FilterSwitchFilter:
    """Keeps events matching the switch's current expression."""

    def __init__(self, switch: LoggingFilterSwitch) -> None:
        self.switch = switch

    def is_enabled(self, event: LogEvent) -> bool:
        return self.switch.is_enabled(event)
