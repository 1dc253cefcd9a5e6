# src/logwright/core/logging.py
"""Diagnostics channel for logwright itself.

Everything logwright treats as non-fatal is reported here rather than
raised: a directive skipped because no configuration method matched it, a
switch value that no longer parses after a reload, a sink that raised while
emitting. Modules obtain a logger with get_logger(__name__).

configure_logging() is optional. Without it structlog's defaults apply and
diagnostics still go somewhere visible. With it, structlog events and
records from stdlib loggers (dynaconf, plugin libraries) share one
ProcessorFormatter-based handler and therefore one output format.

The final renderer is also used by ConsoleSink, so pipeline output and
diagnostics render the same way.
"""

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.stdlib import ProcessorFormatter

from logwright.contracts.enums import LogEventLevel, parse_level

# stdlib has nothing below DEBUG
VERBOSE = 5

STDLIB_LEVELS: dict[LogEventLevel, int] = {
    LogEventLevel.VERBOSE: VERBOSE,
    LogEventLevel.DEBUG: logging.DEBUG,
    LogEventLevel.INFORMATION: logging.INFO,
    LogEventLevel.WARNING: logging.WARNING,
    LogEventLevel.ERROR: logging.ERROR,
    LogEventLevel.FATAL: logging.CRITICAL,
}

# Libraries that log per call at DEBUG
_CHATTY_LIBRARIES: tuple[str, ...] = ("dynaconf", "urllib3", "asyncio")


def to_stdlib_level(level: LogEventLevel | str) -> int:
    """Map a LogEventLevel, a level name or a stdlib level name onto a stdlib level number.

    Raises:
        ValueError: If a string names neither a stdlib nor a logwright level.
    """
    if isinstance(level, LogEventLevel):
        return STDLIB_LEVELS[level]
    stdlib_level = logging.getLevelName(level.strip().upper())
    if isinstance(stdlib_level, int):
        return stdlib_level
    return STDLIB_LEVELS[parse_level(level)]


def _strip_formatter_keys(_logger: Any, _method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    # ProcessorFormatter injects these into every record it formats
    event_dict.pop("_record", None)
    event_dict.pop("_from_structlog", None)
    return event_dict


def build_renderer(*, json_output: bool, colors: bool = True) -> Any:
    """Final structlog processor for the chosen output mode."""
    if json_output:
        return structlog.processors.JSONRenderer(sort_keys=False)
    return structlog.dev.ConsoleRenderer(colors=colors)


def configure_logging(
    *,
    json_output: bool = False,
    level: LogEventLevel | str = "INFO",
    stream: TextIO | None = None,
) -> None:
    """Route structlog and stdlib logging through one handler on the root logger.

    Args:
        json_output: Render one JSON object per line instead of console text.
        level: Root level, as a LogEventLevel or a level name in either the
            stdlib ("WARNING") or the logwright ("Warning", "Verbose") spelling.
        stream: Where to write; defaults to stdout at call time.
    """
    root_level = to_stdlib_level(level)

    pre_chain: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]
    render_chain: list[Any] = [_strip_formatter_keys]
    if json_output:
        render_chain.append(structlog.processors.format_exc_info)
    render_chain.append(build_renderer(json_output=json_output))

    structlog.configure(
        processors=[*pre_chain, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Tests reconfigure; cached loggers would keep the old chain
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(ProcessorFormatter(processors=render_chain, foreign_pre_chain=pre_chain))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(root_level)

    for name in _CHATTY_LIBRARIES:
        logging.getLogger(name).setLevel(max(root_level, logging.WARNING))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
