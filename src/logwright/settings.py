# src/logwright/settings.py
"""Entry points for configuring a logger from a configuration tree.

Example:
    configuration = load_configuration("logging.yaml")
    logger_configuration = LoggerConfiguration()
    loaded = read_configuration(logger_configuration, configuration)
    logger = logger_configuration.create_logger()

    # Declared switches stay live: editing logging.yaml and calling
    # configuration.reload() updates them in place.
    loaded.level_switches["$controlSwitch"].minimum_level
"""

from dataclasses import dataclass, field

from logwright.contracts.errors import PluginLoadError
from logwright.core.configuration import ConfigurationRoot, ConfigurationSection
from logwright.core.logging import get_logger
from logwright.core.switches import LoggingFilterSwitch, LoggingLevelSwitch
from logwright.engine.context import ReaderOptions, ResolutionContext
from logwright.engine.reader import ConfigurationReader
from logwright.pipeline.configuration import LoggerConfiguration
from logwright.plugins.manager import PluginManager

logger = get_logger(__name__)

DEFAULT_SECTION_NAME = "Logging"
USING_SECTION = "Using"


@dataclass(frozen=True)
class LoadedConfiguration:
    """What a read produced besides the changes to the LoggerConfiguration.

    Attributes:
        level_switches: Declared level switches by $-prefixed name.
        filter_switches: Declared filter switches by $-prefixed name.
        plugin_modules: Modules the candidate registry was built from.
    """

    level_switches: dict[str, LoggingLevelSwitch] = field(default_factory=dict)
    filter_switches: dict[str, LoggingFilterSwitch] = field(default_factory=dict)
    plugin_modules: frozenset[str] = frozenset()


def build_plugin_manager(section: ConfigurationSection, options: ReaderOptions) -> PluginManager:
    """Build the candidate registry for a read.

    Order: built-in methods, modules from the options, modules named in the
    section's "Using" list, then entry point plugins.

    Raises:
        PluginLoadError: If a module name is blank or cannot be imported.
    """
    plugins = PluginManager(
        allow_internal_methods=options.allow_internal_methods,
        allow_internal_types=options.allow_internal_types,
    )
    plugins.register_builtin_plugins()

    for module_name in options.modules:
        plugins.load_module(module_name)

    using = section.get_section(USING_SECTION)
    for entry in using.get_children():
        if entry.value is None or not entry.value.strip():
            raise PluginLoadError(
                f"A zero-length or whitespace module name was supplied to a {using.path} configuration statement.",
                path=entry.path,
            )
        plugins.load_module(entry.value)

    plugins.load_entrypoints()
    return plugins


def _read(
    logger_configuration: LoggerConfiguration,
    section: ConfigurationSection,
    app_configuration: ConfigurationRoot | None,
    options: ReaderOptions,
) -> LoadedConfiguration:
    plugins = build_plugin_manager(section, options)
    context = ResolutionContext(app_configuration, options)
    ConfigurationReader(section, plugins, context).configure(logger_configuration)

    logger.debug(
        "Read logger configuration",
        section=section.path,
        level_switches=sorted(context.level_switches),
        filter_switches=sorted(context.filter_switches),
    )
    return LoadedConfiguration(
        level_switches=context.level_switches,
        filter_switches=context.filter_switches,
        plugin_modules=plugins.registered_modules,
    )


def read_configuration(
    logger_configuration: LoggerConfiguration,
    configuration: ConfigurationRoot,
    options: ReaderOptions | None = None,
) -> LoadedConfiguration:
    """Apply the options.section_name section of configuration to logger_configuration.

    Configuration methods with a ConfigurationRoot parameter receive
    configuration.

    Raises:
        ConfigurationError: On any invalid configuration; nothing is applied
            past the failing directive.
    """
    options = options or ReaderOptions()
    section = configuration.get_section(options.section_name)
    return _read(logger_configuration, section, configuration, options)


def read_configuration_section(
    logger_configuration: LoggerConfiguration,
    section: ConfigurationSection,
    options: ReaderOptions | None = None,
) -> LoadedConfiguration:
    """Apply a single section to logger_configuration.

    No application configuration is available to configuration methods; a
    method requiring one without a default raises ImplicitConfigurationError.
    """
    return _read(logger_configuration, section, None, options or ReaderOptions())
