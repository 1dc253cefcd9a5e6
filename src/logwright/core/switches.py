# src/logwright/core/switches.py
"""Mutable switches read by the pipeline on every event.

A switch holds exactly one reference. Readers load it without locking and
writers replace it in a single assignment, so a reader on another thread
observes either the old or the new value, never a mixture.
"""

from logwright.contracts.enums import LogEventLevel
from logwright.contracts.events import LogEvent
from logwright.core.expressions import FilterExpression


class LoggingLevelSwitch:
    """Minimum level that can be changed while loggers are running."""

    def __init__(self, minimum_level: LogEventLevel = LogEventLevel.INFORMATION) -> None:
        self._minimum_level = minimum_level

    @property
    def minimum_level(self) -> LogEventLevel:
        return self._minimum_level

    @minimum_level.setter
    def minimum_level(self, value: LogEventLevel) -> None:
        self._minimum_level = value

    def is_enabled(self, level: LogEventLevel) -> bool:
        return level >= self._minimum_level

    def __repr__(self) -> str:
        return f"LoggingLevelSwitch({self._minimum_level.label})"


class LoggingFilterSwitch:
    """Filter expression that can be changed while loggers are running.

    An empty or missing expression lets every event through.
    """

    def __init__(self, expression: str | None = None) -> None:
        self._state: tuple[str | None, FilterExpression | None] = self._compile(expression)

    @staticmethod
    def _compile(expression: str | None) -> tuple[str | None, FilterExpression | None]:
        if expression is None or not expression.strip():
            return expression, None
        return expression, FilterExpression(expression)

    @property
    def expression(self) -> str | None:
        return self._state[0]

    @expression.setter
    def expression(self, value: str | None) -> None:
        # Compile before swapping so a bad expression leaves the old state intact
        self._state = self._compile(value)

    def is_enabled(self, event: LogEvent) -> bool:
        compiled = self._state[1]
        if compiled is None:
            return True
        return compiled.matches(event)

    def __repr__(self) -> str:
        return f"LoggingFilterSwitch({self._state[0]!r})"
