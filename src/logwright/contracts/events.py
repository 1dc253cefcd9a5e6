"""Log event record passed through the pipeline."""

import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from logwright.contracts.enums import LogEventLevel

_PROPERTY_TOKEN = re.compile(r"\{@?([A-Za-z_][A-Za-z0-9_]*)\}")


@dataclass
class LogEvent:
    """A single event moving from a logger to its sinks.

    Properties are mutable so enrichers can add to them; sinks must treat the
    event as read-only.
    """

    level: LogEventLevel
    message_template: str
    properties: dict[str, Any] = field(default_factory=dict)
    exception: BaseException | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def add_property_if_absent(self, name: str, value: Any) -> None:
        if name not in self.properties:
            self.properties[name] = value

    def add_or_update_property(self, name: str, value: Any) -> None:
        self.properties[name] = value

    def render_message(self) -> str:
        """Substitute {Name} tokens from properties; unknown tokens stay verbatim."""

        def replacer(match: re.Match[str]) -> str:
            name = match.group(1)
            if name in self.properties:
                return str(self.properties[name])
            return match.group(0)

        return _PROPERTY_TOKEN.sub(replacer, self.message_template)

    def copy(self) -> "LogEvent":
        return LogEvent(
            level=self.level,
            message_template=self.message_template,
            properties=dict(self.properties),
            exception=self.exception,
            timestamp=self.timestamp,
        )
