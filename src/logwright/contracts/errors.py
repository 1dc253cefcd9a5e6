"""Configuration error taxonomy.

Every failure raised while reading a configuration derives from
ConfigurationError. Shape errors are raised while extracting or coercing a
node; lookup errors are raised at the point a name is used. Both abort the
read before a logger is handed back to the caller.

Two outcomes are deliberately NOT errors:
- a directive that matches no configuration method is skipped (and logged)
- a switch value that fails to parse on reload keeps its previous value
"""


class ConfigurationError(Exception):
    """Base class for configuration read failures.

    Attributes:
        path: Configuration path of the offending node, when one exists.
    """

    def __init__(self, message: str, *, path: str | None = None) -> None:
        self.path = path
        super().__init__(message)


# =============================================================================
# Shape errors
# =============================================================================


class AmbiguousValueError(ConfigurationError):
    """A node carries both a scalar value and children after merging sources."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"The value for the argument '{path}' is assigned different value types in more than one "
            "configuration source. Ensure all configurations consistently use either a scalar "
            "(int, string, boolean) or a complex (array, section, list, object) type for this argument value.",
            path=path,
        )


class MissingNameError(ConfigurationError):
    """An expanded directive has no scalar 'Name' element."""

    def __init__(self, path: str) -> None:
        super().__init__(f"The configuration value in {path} has no 'Name' element.", path=path)


class AmbiguousTypeError(ConfigurationError):
    """A structured node targets an abstract type and names no concrete type."""


class UnsupportedCallbackTypeError(ConfigurationError):
    """A structured node targets a callback over an unknown configuration object."""


# =============================================================================
# Lookup errors
# =============================================================================


class UndeclaredSwitchError(ConfigurationError):
    """A $name reference points at a switch that was never declared.

    Attributes:
        switch_name: The reference as written (always $-prefixed).
    """

    def __init__(self, switch_name: str, message: str) -> None:
        self.switch_name = switch_name
        super().__init__(message)


class InvalidSwitchNameError(ConfigurationError):
    """A switch declaration uses a name that cannot be referenced."""


class TypeLoadError(ConfigurationError):
    """A type name could not be resolved to a class or module.

    Attributes:
        type_name: The name as written in configuration.
    """

    def __init__(self, type_name: str, message: str | None = None) -> None:
        self.type_name = type_name
        super().__init__(message or f"Type `{type_name}` was not found.")


class MemberNotFoundError(ConfigurationError):
    """A static member accessor names no public class-level member."""


class NoDefaultConstructorError(ConfigurationError):
    """A type named by a scalar cannot be constructed without arguments."""


class NoMatchingConstructorError(ConfigurationError):
    """No constructor of a type can be satisfied by the supplied fields."""


class ConfigurationValueError(ConfigurationError):
    """A scalar cannot be converted to the requested type."""


class ImplicitConfigurationError(ConfigurationError):
    """A method needs the application configuration but only a section was supplied."""


class PluginLoadError(ConfigurationError):
    """A module named in 'Using' (or reader options) cannot be loaded."""
