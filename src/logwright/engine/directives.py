# src/logwright/engine/directives.py
"""Directive extraction from list-shaped configuration sections.

Supported entry shapes under a section such as "WriteTo":

    "WriteTo": ["Console"]
    "WriteTo": [{"Name": "Console", "Args": {"json_output": true}}]
    "WriteTo": {"Main": {"Name": "Console"}, "Copy": {"Name": "Console"}}

Entries are never merged by name: two "Console" entries are two calls.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from logwright.contracts.errors import AmbiguousValueError, MissingNameError
from logwright.core.configuration import ConfigurationSection
from logwright.engine.arguments import ArgumentValue

if TYPE_CHECKING:
    from logwright.plugins.manager import PluginManager

NAME_KEY = "Name"
ARGS_KEY = "Args"


@dataclass(frozen=True)
class Directive:
    """One configuration method call requested by configuration.

    Attributes:
        name: Method name as written.
        arguments: Argument values keyed by parameter name, in source order.
        path: Path of the entry the directive was read from.
    """

    name: str
    arguments: dict[str, ArgumentValue] = field(default_factory=dict)
    path: str = ""


def extract_directives(section: ConfigurationSection, plugins: "PluginManager") -> list[Directive]:
    """Read the directives of a section in source enumeration order.

    Raises:
        MissingNameError: If an expanded entry has no scalar Name.
        AmbiguousValueError: If an entry or an argument is both a scalar and a section.
    """
    directives: list[Directive] = []
    for child in section.get_children():
        if child.value is not None:
            if child.has_children():
                raise AmbiguousValueError(child.path)
            directives.append(Directive(name=child.value, path=child.path))
            continue

        name_section = child.get_section(NAME_KEY)
        if name_section.value is None:
            raise MissingNameError(name_section.path)

        arguments = {
            argument.key: ArgumentValue.from_section(argument, plugins)
            for argument in child.get_section(ARGS_KEY).get_children()
        }
        directives.append(Directive(name=name_section.value, arguments=arguments, path=child.path))
    return directives
