"""Levels and capability kinds shared across subsystem boundaries."""

from enum import IntEnum, StrEnum


class LogEventLevel(IntEnum):
    """Severity of a log event, ordered from least to most severe.

    Configuration documents spell levels in title case ("Information",
    "Warning"). Lookups through the enum value are case-sensitive and accept
    only that spelling; parse_level() is the case-insensitive entry point used
    for MinimumLevel and switch declarations.
    """

    VERBOSE = 0
    DEBUG = 1
    INFORMATION = 2
    WARNING = 3
    ERROR = 4
    FATAL = 5

    @property
    def label(self) -> str:
        return self.name.title()

    @classmethod
    def _missing_(cls, value: object) -> "LogEventLevel | None":
        if isinstance(value, str):
            member = cls.__members__.get(value.upper())
            if member is not None and member.label == value:
                return member
        return None


def parse_level(value: str) -> LogEventLevel:
    """Parse a level name case-insensitively.

    Raises:
        ValueError: If value does not name a level.
    """
    member = LogEventLevel.__members__.get(value.strip().upper())
    if member is None:
        raise ValueError(f"The value {value!r} is not a valid level.")
    return member


class Capability(StrEnum):
    """Receiver kind a configuration method extends.

    Determined from the annotation of the method's first parameter.
    """

    SINK = "sink"
    FILTER = "filter"
    ENRICH = "enrich"
    DESTRUCTURE = "destructure"
    AUDIT_SINK = "audit_sink"
