"""
logwright: configuration-driven construction of logging pipelines.

A hierarchical configuration document names sinks, enrichers, filters and
destructuring policies; logwright discovers the matching extension points
from a plugin set and binds the configured arguments onto them.
"""

__version__ = "0.4.0"

from logwright.contracts import ConfigurationError, LogEventLevel
from logwright.core.configuration import ConfigurationRoot, load_configuration
from logwright.engine.context import NumberFormat, ReaderOptions
from logwright.pipeline.configuration import LoggerConfiguration
from logwright.settings import LoadedConfiguration, read_configuration, read_configuration_section

__all__ = [
    "ConfigurationError",
    "ConfigurationRoot",
    "LoadedConfiguration",
    "LogEventLevel",
    "LoggerConfiguration",
    "NumberFormat",
    "ReaderOptions",
    "__version__",
    "load_configuration",
    "read_configuration",
    "read_configuration_section",
]
