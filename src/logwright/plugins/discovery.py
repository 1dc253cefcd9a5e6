# src/logwright/plugins/discovery.py
"""Discovery of configuration methods and named types in plugin modules.

A module contributes:
1. Configuration methods: functions defined in the module whose first
   parameter is annotated with one of the receiver classes
   (LoggerSinkConfiguration, LoggerFilterConfiguration, ...)
2. Types: classes defined in the module, which configuration may then
   name by their bare class name

Names starting with an underscore are skipped unless the reader options
allow internal methods or types.
"""

import inspect
import typing
from collections.abc import Callable
from types import ModuleType
from typing import Any

from logwright.contracts.enums import Capability
from logwright.contracts.methods import CandidateMethod, parameter_specs
from logwright.core.logging import get_logger
from logwright.pipeline.configuration import (
    LoggerAuditSinkConfiguration,
    LoggerDestructuringConfiguration,
    LoggerEnrichmentConfiguration,
    LoggerFilterConfiguration,
    LoggerSinkConfiguration,
)

logger = get_logger(__name__)

RECEIVER_CAPABILITIES: dict[type, Capability] = {
    LoggerSinkConfiguration: Capability.SINK,
    LoggerFilterConfiguration: Capability.FILTER,
    LoggerEnrichmentConfiguration: Capability.ENRICH,
    LoggerDestructuringConfiguration: Capability.DESTRUCTURE,
    LoggerAuditSinkConfiguration: Capability.AUDIT_SINK,
}


def _signature(function: Callable[..., Any]) -> inspect.Signature | None:
    try:
        return inspect.signature(function, eval_str=True)
    except NameError as e:
        # Annotations naming something the module never imported
        logger.debug("Skipping function with unresolvable annotations", function=function.__qualname__, error=str(e))
        return None
    except (TypeError, ValueError):
        return None


def receiver_capability(function: Callable[..., Any]) -> Capability | None:
    """Capability of the receiver the function extends, or None if it extends none."""
    signature = _signature(function)
    if signature is None or not signature.parameters:
        return None
    annotation = next(iter(signature.parameters.values())).annotation
    if not isinstance(annotation, type):
        return None
    return RECEIVER_CAPABILITIES.get(annotation)


def candidates_from_function(function: Callable[..., Any]) -> list[CandidateMethod]:
    """Build candidate records for a configuration function.

    typing.overload variants each become a candidate, in declaration order,
    all dispatching to the implementation.
    """
    variants = typing.get_overloads(function) or [function]
    candidates: list[CandidateMethod] = []
    for variant in variants:
        capability = receiver_capability(variant)
        signature = _signature(variant)
        if capability is None or signature is None:
            continue
        candidates.append(
            CandidateMethod(
                name=function.__name__,
                capability=capability,
                parameters=parameter_specs(signature, skip=1),
                function=function,
            )
        )
    return candidates


def _is_public(name: str) -> bool:
    return not name.startswith("_")


def discover_configuration_methods(module: ModuleType, *, allow_internal: bool = False) -> list[Callable[..., Any]]:
    """Configuration functions defined in module, in definition order."""
    found: list[Callable[..., Any]] = []
    for name, obj in vars(module).items():
        if not inspect.isfunction(obj) or obj.__module__ != module.__name__:
            continue
        if not (allow_internal or _is_public(name)):
            continue
        if receiver_capability(obj) is not None:
            found.append(obj)
    return found


def discover_types(module: ModuleType, *, allow_internal: bool = False) -> list[type]:
    """Classes defined in module, in definition order."""
    return [
        obj
        for name, obj in vars(module).items()
        if inspect.isclass(obj) and obj.__module__ == module.__name__ and (allow_internal or _is_public(name))
    ]


def create_module_hookimpl(
    module: ModuleType,
    *,
    allow_internal_methods: bool = False,
    allow_internal_types: bool = False,
) -> object:
    """Create a pluggy hookimpl object exposing the contents of a module.

    Dynamically generates a class whose hook methods, decorated with
    @hookimpl, return the module's configuration functions and types.
    """
    from logwright.plugins.hookspecs import hookimpl

    methods = discover_configuration_methods(module, allow_internal=allow_internal_methods)
    types_ = discover_types(module, allow_internal=allow_internal_types)

    class ModuleHookImpl:
        """Dynamically generated hook implementer for one module."""

        module_name = module.__name__

    def get_configuration_methods(self: Any) -> list[Callable[..., Any]]:
        return methods

    def get_types(self: Any) -> list[type]:
        return types_

    setattr(ModuleHookImpl, "logwright_get_configuration_methods", hookimpl(get_configuration_methods))
    setattr(ModuleHookImpl, "logwright_get_types", hookimpl(get_types))

    logger.debug(
        "Discovered plugin module contents",
        module=module.__name__,
        methods=[m.__name__ for m in methods],
        types=[t.__name__ for t in types_],
    )
    return ModuleHookImpl()
