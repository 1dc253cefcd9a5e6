"""Candidate configuration method records.

A CandidateMethod describes one callable signature that may satisfy a
directive. Records are immutable and produced by the plugin registry; the
resolver and the reader only ever read them.
"""

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from logwright.contracts.enums import Capability


@dataclass(frozen=True)
class ParameterSpec:
    """One parameter of a candidate or constructor, excluding the receiver."""

    name: str
    annotation: Any
    has_default: bool = False
    default: Any = None
    positional_only: bool = False


def parameter_specs(signature: inspect.Signature, *, skip: int = 0) -> tuple[ParameterSpec, ...]:
    """Convert a signature into ParameterSpecs.

    *args and **kwargs cannot be bound by name and are left out.
    """
    specs: list[ParameterSpec] = []
    for parameter in list(signature.parameters.values())[skip:]:
        if parameter.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue
        has_default = parameter.default is not inspect.Parameter.empty
        specs.append(
            ParameterSpec(
                name=parameter.name,
                annotation=Any if parameter.annotation is inspect.Parameter.empty else parameter.annotation,
                has_default=has_default,
                default=parameter.default if has_default else None,
                positional_only=parameter.kind is inspect.Parameter.POSITIONAL_ONLY,
            )
        )
    return tuple(specs)


@dataclass(frozen=True)
class CandidateMethod:
    """A configuration method discovered from the plugin set.

    Attributes:
        name: Directive name this method answers to (case-sensitive).
        capability: Receiver kind, taken from the first parameter.
        parameters: Parameters after the receiver, in declaration order.
        function: Callable invoked as function(receiver, **arguments).
        order: Registration position, used as the final tie-break.
    """

    name: str
    capability: Capability
    parameters: tuple[ParameterSpec, ...]
    function: Callable[..., Any]
    order: int = 0

    def describe(self) -> str:
        """Render as name(arg, arg=...) for diagnostics."""
        rendered = [f"{p.name}=..." if p.has_default else p.name for p in self.parameters]
        return f"{self.name}({', '.join(rendered)})"
