# src/logwright/engine/arguments.py
"""Argument values: configuration nodes waiting to be converted to a target type."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from logwright.contracts.errors import AmbiguousValueError

if TYPE_CHECKING:
    from logwright.core.configuration import ConfigurationSection
    from logwright.engine.context import ResolutionContext
    from logwright.plugins.manager import PluginManager


class ArgumentValue(ABC):
    """A node that can be converted to any supported target type."""

    @abstractmethod
    def convert_to(self, target: Any, context: "ResolutionContext") -> Any:
        """Convert to target.

        Raises:
            ConfigurationError: If the node cannot be converted.
        """

    @staticmethod
    def from_section(section: "ConfigurationSection", plugins: "PluginManager") -> "ArgumentValue":
        """Wrap a node as a scalar or structured argument value.

        Raises:
            AmbiguousValueError: If the node has both a value and children.
        """
        # Deferred: both implementations build child values through this factory
        from logwright.engine.scalar import ScalarArgumentValue
        from logwright.engine.section import SectionArgumentValue

        value = section.value
        if value is not None and section.has_children():
            raise AmbiguousValueError(section.path)
        if value is not None:
            return ScalarArgumentValue(value, plugins)
        return SectionArgumentValue(section, plugins)
