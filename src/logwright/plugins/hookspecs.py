# src/logwright/plugins/hookspecs.py
"""pluggy hook specifications for logwright plugins.

Plugins implement these hooks to contribute configuration methods and
named types. The plugin manager calls them whenever a plugin is registered.

Usage (implementing a plugin):
    from logwright.plugins.hookspecs import hookimpl

    class MySinks:
        @hookimpl  # NOT @hookspec - that's for defining specs
        def logwright_get_configuration_methods(self):
            return [file_sink]

A configuration method is a plain function whose first parameter is
annotated with a receiver class, e.g.

    def file_sink(write_to: LoggerSinkConfiguration, path: str) -> LoggerConfiguration:
        return write_to.sink(FileSink(path))

Modules named in a "Using" section need no hook implementation at all: the
manager scans them and registers their public functions and classes.
"""

from collections.abc import Callable
from typing import Any

import pluggy

# Project name for pluggy, also the entry point group
PROJECT_NAME = "logwright"

# Hook specification marker
hookspec = pluggy.HookspecMarker(PROJECT_NAME)

# Hook implementation marker (for plugins to use)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class LogwrightConfigurationSpec:
    """Hook specifications for configuration method providers."""

    @hookspec
    def logwright_get_configuration_methods(self) -> list[Callable[..., Any]]:  # type: ignore[empty-body]
        """Return configuration functions.

        Returns:
            Functions whose first parameter is annotated with a receiver
            class, in the order they should be considered
        """

    @hookspec
    def logwright_get_types(self) -> list[type]:  # type: ignore[empty-body]
        """Return classes that configuration may name by their bare class name.

        Returns:
            List of classes (not instances)
        """
