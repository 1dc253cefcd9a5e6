# src/logwright/engine/reader.py
"""ConfigurationReader: applies one configuration section to a LoggerConfiguration.

Sections are processed in a fixed order so that switches exist before
anything refers to them:

    LevelSwitches, FilterSwitches, MinimumLevel, Enrich + Properties,
    Filter, Destructure, WriteTo, AuditTo

Nested readers (for callback-typed arguments such as the configure_logger
parameter of WriteTo "logger") run the same order over their own node and
share the ResolutionContext of the read that created them.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from logwright.contracts.enums import Capability, LogEventLevel, parse_level
from logwright.contracts.errors import ConfigurationError, ConfigurationValueError, ImplicitConfigurationError
from logwright.contracts.methods import CandidateMethod, ParameterSpec
from logwright.core.configuration import ConfigurationSection
from logwright.core.logging import get_logger
from logwright.core.switches import LoggingFilterSwitch, LoggingLevelSwitch
from logwright.engine.context import ResolutionContext
from logwright.engine.directives import Directive, extract_directives
from logwright.engine.resolver import is_implicitly_populated, select_configuration_method
from logwright.pipeline.configuration import (
    LoggerAuditSinkConfiguration,
    LoggerConfiguration,
    LoggerEnrichmentConfiguration,
    LoggerSinkConfiguration,
)

if TYPE_CHECKING:
    from logwright.plugins.manager import PluginManager

logger = get_logger(__name__)


class ConfigurationReader:
    """Reads directives from a section and calls the matching configuration methods."""

    def __init__(
        self,
        section: ConfigurationSection,
        plugins: "PluginManager",
        context: ResolutionContext,
    ) -> None:
        self._section = section
        self._plugins = plugins
        self._context = context

    @property
    def context(self) -> ResolutionContext:
        return self._context

    def configure(self, logger_configuration: LoggerConfiguration) -> None:
        """Apply every supported subsection to logger_configuration."""
        self._process_level_switch_declarations()
        self._process_filter_switch_declarations()

        self._apply_minimum_level(logger_configuration)
        self._apply_enrichment(logger_configuration)
        self._apply_directives("Filter", Capability.FILTER, logger_configuration.filter)
        self._apply_directives("Destructure", Capability.DESTRUCTURE, logger_configuration.destructure)
        self._apply_directives("WriteTo", Capability.SINK, logger_configuration.write_to)
        self._apply_directives("AuditTo", Capability.AUDIT_SINK, logger_configuration.audit_to)

    # The section itself is the directive list for the nested entry points

    def apply_sinks(self, sink_configuration: LoggerSinkConfiguration) -> None:
        self._call_configuration_methods(
            extract_directives(self._section, self._plugins),
            self._plugins.get_configuration_methods(Capability.SINK),
            sink_configuration,
        )

    def apply_audit_sinks(self, audit_sink_configuration: LoggerAuditSinkConfiguration) -> None:
        self._call_configuration_methods(
            extract_directives(self._section, self._plugins),
            self._plugins.get_configuration_methods(Capability.AUDIT_SINK),
            audit_sink_configuration,
        )

    def apply_enrichment(self, enrichment_configuration: LoggerEnrichmentConfiguration) -> None:
        self._call_configuration_methods(
            extract_directives(self._section, self._plugins),
            self._plugins.get_configuration_methods(Capability.ENRICH),
            enrichment_configuration,
        )

    # =========================================================================
    # Switches
    # =========================================================================

    def _process_level_switch_declarations(self) -> None:
        for declaration in self._section.get_section("LevelSwitches").get_children():
            level_switch = LoggingLevelSwitch()
            # Registering validates the name before the level is parsed
            reference = self._context.add_level_switch(declaration.key, level_switch)
            if declaration.value:
                level_switch.minimum_level = self._parse_level(declaration)

            self._subscribe_to_level_changes(declaration, level_switch)
            callback = self._context.options.on_level_switch_created
            if callback is not None:
                callback(reference, level_switch)

    def _process_filter_switch_declarations(self) -> None:
        for declaration in self._section.get_section("FilterSwitches").get_children():
            filter_switch = LoggingFilterSwitch()
            reference = self._context.add_filter_switch(declaration.key, filter_switch)
            self._set_filter_switch(declaration, filter_switch, raise_on_error=True)

            declaration.subscribe(lambda d=declaration, s=filter_switch: self._set_filter_switch(d, s, raise_on_error=False))
            callback = self._context.options.on_filter_switch_created
            if callback is not None:
                callback(reference, filter_switch)

    @staticmethod
    def _set_filter_switch(
        declaration: ConfigurationSection,
        filter_switch: LoggingFilterSwitch,
        *,
        raise_on_error: bool,
    ) -> None:
        expression = declaration.value
        if expression is None or not expression.strip():
            filter_switch.expression = None
            return
        try:
            filter_switch.expression = expression
        except ConfigurationError as e:
            message = f"The expression '{expression}' is invalid filter expression: {e}."
            if raise_on_error:
                raise ConfigurationValueError(message, path=declaration.path) from e
            logger.warning(
                "Filter switch expression is invalid, keeping the previous expression",
                path=declaration.path,
                expression=expression,
                error=str(e),
            )

    @staticmethod
    def _parse_level(section: ConfigurationSection) -> LogEventLevel:
        try:
            return parse_level(section.value or "")
        except ValueError as e:
            raise ConfigurationValueError(
                f"The value {section.value} is not a valid level.",
                path=section.path,
            ) from e

    @staticmethod
    def _subscribe_to_level_changes(section: ConfigurationSection, level_switch: LoggingLevelSwitch) -> None:
        def on_change() -> None:
            value = section.value
            try:
                level_switch.minimum_level = parse_level(value or "")
            except ValueError:
                logger.warning(
                    "Level switch value is not a valid level, keeping the previous level",
                    path=section.path,
                    value=value,
                    level=level_switch.minimum_level.name,
                )

        section.subscribe(on_change)

    # =========================================================================
    # MinimumLevel
    # =========================================================================

    def _apply_minimum_level(self, logger_configuration: LoggerConfiguration) -> None:
        minimum_level = self._section.get_section("MinimumLevel")

        default_section = self._default_minimum_level_section(minimum_level)
        if default_section is not None and default_section.value is not None:
            level_switch = LoggingLevelSwitch(self._parse_level(default_section))
            logger_configuration.minimum_level.controlled_by(level_switch)
            self._subscribe_to_level_changes(default_section, level_switch)

        controlled_by = minimum_level.get_section("ControlledBy")
        if controlled_by.value is not None:
            logger_configuration.minimum_level.controlled_by(self._context.lookup_level_switch(controlled_by.value))

        for override in minimum_level.get_section("Override").get_children():
            prefix, level_or_switch = override.key, override.value
            try:
                level = parse_level(level_or_switch or "")
            except ValueError:
                if level_or_switch:
                    logger_configuration.minimum_level.override(
                        prefix, self._context.lookup_level_switch(level_or_switch)
                    )
                continue

            level_switch = LoggingLevelSwitch(level)
            logger_configuration.minimum_level.override(prefix, level_switch)
            callback = self._context.options.on_level_switch_created
            if callback is not None:
                callback(prefix, level_switch)
            self._subscribe_to_level_changes(override, level_switch)

    def _default_minimum_level_section(self, minimum_level: ConfigurationSection) -> ConfigurationSection | None:
        """Pick between "MinimumLevel": "X" and "MinimumLevel": {"Default": "X"}.

        When sources disagree on the form, the last source that sets either
        one wins.
        """
        default = minimum_level.get_section("Default")
        if minimum_level.value is None or default.value is None:
            return minimum_level if minimum_level.value is not None else default

        for provider in reversed(minimum_level.root.providers):
            found, value = provider.try_get(minimum_level.path)
            if found and value:
                return minimum_level
            found, value = provider.try_get(default.path)
            if found and value:
                return default
        return None

    # =========================================================================
    # Directive sections
    # =========================================================================

    def _apply_enrichment(self, logger_configuration: LoggerConfiguration) -> None:
        self._apply_directives("Enrich", Capability.ENRICH, logger_configuration.enrich)

        for prop in self._section.get_section("Properties").get_children():
            logger_configuration.enrich.with_property(prop.key, prop.value)

    def _apply_directives(self, section_name: str, capability: Capability, receiver: Any) -> None:
        section = self._section.get_section(section_name)
        if not section.has_children():
            return
        self._call_configuration_methods(
            extract_directives(section, self._plugins),
            self._plugins.get_configuration_methods(capability),
            receiver,
        )

    def _call_configuration_methods(
        self,
        directives: Sequence[Directive],
        candidates: Sequence[CandidateMethod],
        receiver: Any,
    ) -> None:
        for directive in directives:
            method = select_configuration_method(candidates, directive.name, directive.arguments.keys())
            if method is None:
                continue

            positional: list[Any] = []
            keywords: dict[str, Any] = {}
            for parameter in method.parameters:
                argument = directive.arguments.get(parameter.name)
                if argument is None:
                    value = self._implicit_value(parameter, method)
                else:
                    value = argument.convert_to(parameter.annotation, self._context)
                if parameter.positional_only:
                    positional.append(value)
                else:
                    keywords[parameter.name] = value

            logger.debug("Calling configuration method", method=method.describe(), path=directive.path)
            method.function(receiver, *positional, **keywords)

    def _implicit_value(self, parameter: ParameterSpec, method: CandidateMethod) -> Any:
        if is_implicitly_populated(parameter):
            if self._context.has_app_configuration:
                return self._context.app_configuration
            if parameter.has_default:
                return parameter.default
            raise ImplicitConfigurationError(
                "Trying to invoke a configuration method accepting a `ConfigurationRoot` argument. "
                "This is not supported when only a configuration section has been provided. "
                f"(method '{method.describe()}')"
            )
        return parameter.default
