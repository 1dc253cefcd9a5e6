# src/logwright/plugins/manager.py
"""Plugin manager for discovery, registration, and candidate lookup.

Uses pluggy for hook-based plugin registration.
"""

import dataclasses
import importlib
from collections.abc import Callable
from types import ModuleType
from typing import Any

import pluggy

from logwright.contracts.enums import Capability
from logwright.contracts.errors import PluginLoadError, TypeLoadError
from logwright.contracts.methods import CandidateMethod
from logwright.core.logging import get_logger
from logwright.plugins.hookspecs import PROJECT_NAME, LogwrightConfigurationSpec

logger = get_logger(__name__)


class PluginManager:
    """Manages plugin registration and the candidate registry built from it.

    Usage:
        manager = PluginManager()
        manager.register_builtin_plugins()
        manager.load_module("my_app.logging_sinks")

        sinks = manager.get_configuration_methods(Capability.SINK)
    """

    def __init__(self, *, allow_internal_methods: bool = False, allow_internal_types: bool = False) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)

        # Register hookspecs
        self._pm.add_hookspecs(LogwrightConfigurationSpec)

        self.allow_internal_methods = allow_internal_methods
        self.allow_internal_types = allow_internal_types

        self._registered_modules: set[str] = set()
        self._methods: dict[Capability, list[CandidateMethod]] = {}
        self._types: dict[str, list[type]] = {}

    def register_builtin_plugins(self) -> None:
        """Register the configuration methods every reader can use.

        Call this once before loading user modules so that built-in methods
        win ties against same-named plugin methods.
        """
        from logwright.plugins.builtin import BUILTIN_MODULES, BuiltinTypes

        for module in BUILTIN_MODULES:
            self.register_module(module)
        self.register(BuiltinTypes())

    def register(self, plugin: Any) -> None:
        """Register a plugin.

        Args:
            plugin: Plugin instance implementing hook methods
        """
        self._pm.register(plugin)
        self._refresh_caches()

    def _refresh_caches(self) -> None:
        """Rebuild the candidate and type registries from hooks.

        Raises:
            TypeError: If a plugin returns a function that extends no receiver
        """
        from logwright.plugins.discovery import candidates_from_function

        new_methods: dict[Capability, list[CandidateMethod]] = {capability: [] for capability in Capability}
        new_types: dict[str, list[type]] = {}

        # pluggy calls the most recently registered plugin first
        order = 0
        for functions in reversed(self._pm.hook.logwright_get_configuration_methods()):
            for function in functions:
                candidates = candidates_from_function(function)
                if not candidates:
                    raise TypeError(
                        f"Configuration method {function.__module__}.{function.__qualname__} must take a "
                        "receiver (LoggerSinkConfiguration, LoggerFilterConfiguration, ...) as its first parameter"
                    )
                for candidate in candidates:
                    new_methods[candidate.capability].append(dataclasses.replace(candidate, order=order))
                    order += 1

        for classes in reversed(self._pm.hook.logwright_get_types()):
            for cls in classes:
                registered = new_types.setdefault(cls.__name__, [])
                if cls not in registered:
                    registered.append(cls)

        # All built, update caches
        self._methods = new_methods
        self._types = new_types

    def register_module(self, module: ModuleType) -> bool:
        """Scan a module and register its configuration methods and types.

        Returns:
            False if the module was already registered
        """
        from logwright.plugins.discovery import create_module_hookimpl

        if module.__name__ in self._registered_modules:
            return False
        self.register(
            create_module_hookimpl(
                module,
                allow_internal_methods=self.allow_internal_methods,
                allow_internal_types=self.allow_internal_types,
            )
        )
        self._registered_modules.add(module.__name__)
        return True

    def load_module(self, name: str) -> ModuleType:
        """Import a module by name and register it.

        Raises:
            PluginLoadError: If the name is blank or the import fails
        """
        module_name = name.strip()
        if not module_name:
            raise PluginLoadError("A zero-length or whitespace module name was supplied.")
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise PluginLoadError(f"Module `{module_name}` could not be loaded: {e}") from e

        if self.register_module(module):
            logger.debug("Registered plugin module", module=module_name)
        return module

    def load_entrypoints(self) -> int:
        """Register plugins advertised under the "logwright" entry point group.

        Returns:
            Number of plugins loaded
        """
        count = self._pm.load_setuptools_entrypoints(PROJECT_NAME)
        if count:
            self._refresh_caches()
            logger.debug("Loaded entry point plugins", count=count)
        return count

    # === Getters ===

    @property
    def registered_modules(self) -> frozenset[str]:
        return frozenset(self._registered_modules)

    def get_configuration_methods(self, capability: Capability) -> list[CandidateMethod]:
        """Get candidates extending the given receiver, in registration order."""
        return list(self._methods.get(capability, []))

    def get_configuration_method_functions(self, capability: Capability) -> list[Callable[..., Any]]:
        """Distinct functions behind the candidates for a capability."""
        functions: list[Callable[..., Any]] = []
        for candidate in self.get_configuration_methods(capability):
            if candidate.function not in functions:
                functions.append(candidate.function)
        return functions

    # === Lookup by name ===

    def find_type_by_name(self, name: str) -> type | None:
        """Get a registered class by bare class name.

        Raises:
            TypeLoadError: If several registered classes share the name
        """
        registered = self._types.get(name)
        if not registered:
            return None
        if len(registered) > 1:
            qualified = ", ".join(f"{cls.__module__}.{cls.__qualname__}" for cls in registered)
            raise TypeLoadError(name, f"Type `{name}` is ambiguous; it matches {qualified}. Use the full module path.")
        return registered[0]
