# tests/plugins/test_plugin_manager.py
"""Tests for plugin registration, module scanning and candidate lookup."""

from typing import Any

import pytest


class TestPluginManager:
    """Plugin discovery and registration."""

    def test_builtin_methods_are_registered(self) -> None:
        from logwright.contracts.enums import Capability
        from logwright.plugins.manager import PluginManager

        manager = PluginManager()
        manager.register_builtin_plugins()

        sink_names = {c.name for c in manager.get_configuration_methods(Capability.SINK)}
        filter_names = {c.name for c in manager.get_configuration_methods(Capability.FILTER)}

        assert {"sink", "logger", "console", "stdlib"} <= sink_names
        assert {"with_filter", "by_excluding", "by_including_only", "controlled_by"} <= filter_names

    def test_register_hookimpl_plugin(self) -> None:
        from logwright.contracts.enums import Capability
        from logwright.pipeline.configuration import LoggerConfiguration, LoggerSinkConfiguration
        from logwright.plugins.hookspecs import hookimpl
        from logwright.plugins.manager import PluginManager

        def audit_file(write_to: LoggerSinkConfiguration, path: str) -> LoggerConfiguration:
            return write_to.sink(object())  # type: ignore[arg-type]

        class MyPlugin:
            @hookimpl
            def logwright_get_configuration_methods(self) -> list[Any]:
                return [audit_file]

        manager = PluginManager()
        manager.register(MyPlugin())

        (candidate,) = manager.get_configuration_methods(Capability.SINK)
        assert candidate.name == "audit_file"
        assert [p.name for p in candidate.parameters] == ["path"]
        assert candidate.function is audit_file

    def test_function_without_receiver_is_rejected(self) -> None:
        from logwright.plugins.hookspecs import hookimpl
        from logwright.plugins.manager import PluginManager

        def not_a_method(path: str) -> None:
            pass

        class BadPlugin:
            @hookimpl
            def logwright_get_configuration_methods(self) -> list[Any]:
                return [not_a_method]

        with pytest.raises(TypeError, match="must take a receiver"):
            PluginManager().register(BadPlugin())

    def test_registration_order_is_kept(self, plugin_manager) -> None:
        from logwright.contracts.enums import Capability

        candidates = plugin_manager.get_configuration_methods(Capability.SINK)
        orders = [c.order for c in candidates]
        modules = [c.function.__module__ for c in candidates]

        assert orders == sorted(orders)
        assert modules.index("tests.dummies") > modules.index("logwright.plugins.builtin.sinks")

    def test_overloads_become_separate_candidates(self, plugin_manager) -> None:
        from pathlib import Path

        from logwright.contracts.enums import Capability

        targets = [c for c in plugin_manager.get_configuration_methods(Capability.SINK) if c.name == "dummy_target"]

        assert [c.parameters[0].annotation for c in targets] == [Path, str]
        assert targets[0].order < targets[1].order

    def test_configuration_method_functions(self, plugin_manager) -> None:
        from logwright.contracts.enums import Capability
        from tests.dummies import dummy_target

        functions = plugin_manager.get_configuration_method_functions(Capability.SINK)

        assert functions.count(dummy_target) == 1


class TestModuleLoading:
    def test_load_module_registers_methods_and_types(self) -> None:
        from logwright.contracts.enums import Capability
        from logwright.plugins.manager import PluginManager
        from tests.dummies import Circle

        manager = PluginManager()
        manager.load_module("tests.dummies")

        names = {c.name for c in manager.get_configuration_methods(Capability.SINK)}
        assert "dummy_sink" in names
        assert "_internal_sink" not in names
        assert manager.find_type_by_name("Circle") is Circle
        assert manager.find_type_by_name("_InternalSink") is None
        assert "tests.dummies" in manager.registered_modules

    def test_internal_members_when_allowed(self) -> None:
        from logwright.contracts.enums import Capability
        from logwright.plugins.manager import PluginManager

        manager = PluginManager(allow_internal_methods=True, allow_internal_types=True)
        manager.load_module("tests.dummies")

        names = {c.name for c in manager.get_configuration_methods(Capability.SINK)}
        assert "_internal_sink" in names
        assert manager.find_type_by_name("_InternalSink") is not None

    def test_module_is_registered_once(self) -> None:
        import tests.dummies
        from logwright.contracts.enums import Capability
        from logwright.plugins.manager import PluginManager

        manager = PluginManager()

        assert manager.register_module(tests.dummies)
        assert not manager.register_module(tests.dummies)
        names = [c.name for c in manager.get_configuration_methods(Capability.SINK)]
        assert names.count("dummy_sink") == 1

    def test_imported_functions_are_not_methods(self) -> None:
        from logwright.contracts.enums import Capability
        from logwright.plugins.manager import PluginManager

        manager = PluginManager()
        manager.load_module("tests.dummies")

        functions = manager.get_configuration_method_functions(Capability.SINK)
        assert all(f.__module__ == "tests.dummies" for f in functions)

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_module_name(self, name: str) -> None:
        from logwright.contracts.errors import PluginLoadError
        from logwright.plugins.manager import PluginManager

        with pytest.raises(PluginLoadError, match="zero-length or whitespace"):
            PluginManager().load_module(name)

    def test_missing_module(self) -> None:
        from logwright.contracts.errors import PluginLoadError
        from logwright.plugins.manager import PluginManager

        with pytest.raises(PluginLoadError, match="`no_such_module_here` could not be loaded"):
            PluginManager().load_module("no_such_module_here")

    def test_entrypoints_without_plugins(self) -> None:
        from logwright.plugins.manager import PluginManager

        assert PluginManager().load_entrypoints() >= 0


class TestFindTypeByName:
    def test_unknown_name(self) -> None:
        from logwright.plugins.manager import PluginManager

        assert PluginManager().find_type_by_name("Nothing") is None

    def test_builtin_types(self) -> None:
        from logwright.pipeline.sinks import ConsoleSink
        from logwright.plugins.manager import PluginManager

        manager = PluginManager()
        manager.register_builtin_plugins()

        assert manager.find_type_by_name("ConsoleSink") is ConsoleSink

    def test_ambiguous_name(self) -> None:
        from logwright.contracts.errors import TypeLoadError
        from logwright.plugins.hookspecs import hookimpl
        from logwright.plugins.manager import PluginManager

        class Circle:
            pass

        class Shadowing:
            @hookimpl
            def logwright_get_types(self) -> list[type]:
                return [Circle]

        manager = PluginManager()
        manager.load_module("tests.dummies")
        manager.register(Shadowing())

        with pytest.raises(TypeLoadError, match="ambiguous"):
            manager.find_type_by_name("Circle")


class TestDiscovery:
    def test_receiver_capability(self) -> None:
        from logwright.contracts.enums import Capability
        from logwright.plugins.discovery import receiver_capability
        from tests.dummies import by_minimum_length, dummy_audit, dummy_sink, with_dummy_enricher, with_dummy_policy

        assert receiver_capability(dummy_sink) is Capability.SINK
        assert receiver_capability(dummy_audit) is Capability.AUDIT_SINK
        assert receiver_capability(with_dummy_enricher) is Capability.ENRICH
        assert receiver_capability(by_minimum_length) is Capability.FILTER
        assert receiver_capability(with_dummy_policy) is Capability.DESTRUCTURE
        assert receiver_capability(len) is None

    def test_discover_types_in_definition_order(self) -> None:
        import tests.dummies
        from logwright.plugins.discovery import discover_types

        names = [cls.__name__ for cls in discover_types(tests.dummies)]

        assert names.index("DummySink") < names.index("Circle")
        assert "LogEvent" not in names
