# src/logwright/engine/__init__.py
"""Directive resolution and argument coercion engine."""

from logwright.engine.arguments import ArgumentValue
from logwright.engine.context import NumberFormat, ReaderOptions, ResolutionContext
from logwright.engine.directives import Directive, extract_directives
from logwright.engine.reader import ConfigurationReader
from logwright.engine.resolver import select_configuration_method
from logwright.engine.scalar import ScalarArgumentValue, parse_timespan
from logwright.engine.section import SectionArgumentValue
from logwright.engine.type_helpers import find_type

__all__ = [
    "ArgumentValue",
    "ConfigurationReader",
    "Directive",
    "NumberFormat",
    "ReaderOptions",
    "ResolutionContext",
    "ScalarArgumentValue",
    "SectionArgumentValue",
    "extract_directives",
    "find_type",
    "parse_timespan",
    "select_configuration_method",
]
