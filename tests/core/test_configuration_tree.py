# tests/core/test_configuration_tree.py
"""Tests for the merged configuration tree and its sources."""

from pathlib import Path

import pytest


class TestFlatten:
    """Tests for flattening nested documents into ':'-joined paths."""

    def test_nested_mappings_and_lists(self) -> None:
        from logwright.core.configuration import flatten

        result = flatten({"Logging": {"WriteTo": ["Console", {"Name": "File"}]}})

        assert result == {
            "Logging:WriteTo:0": "Console",
            "Logging:WriteTo:1:Name": "File",
        }

    def test_scalars_become_strings(self) -> None:
        from logwright.core.configuration import flatten

        result = flatten({"a": True, "b": False, "c": 3, "d": None, "e": 1.5})

        assert result == {"a": "true", "b": "false", "c": "3", "d": "", "e": "1.5"}

    def test_empty_containers_contribute_nothing(self) -> None:
        from logwright.core.configuration import flatten

        assert flatten({"a": {}, "b": [], "c": "x"}) == {"c": "x"}


class TestEnvironmentExpansion:
    """Tests for ${VAR} and ${VAR:-default} expansion."""

    def test_known_variable_is_replaced(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from logwright.core.configuration import expand_environment_variables

        monkeypatch.setenv("LOG_DIR", "/var/log")

        assert expand_environment_variables("${LOG_DIR}/app.log") == "/var/log/app.log"

    def test_default_used_when_variable_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from logwright.core.configuration import expand_environment_variables

        monkeypatch.delenv("LOG_DIR", raising=False)

        assert expand_environment_variables("${LOG_DIR:-/tmp}/app.log") == "/tmp/app.log"

    def test_unknown_variable_left_verbatim(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from logwright.core.configuration import expand_environment_variables

        monkeypatch.delenv("NOT_SET_ANYWHERE", raising=False)

        assert expand_environment_variables("${NOT_SET_ANYWHERE}") == "${NOT_SET_ANYWHERE}"


class TestConfigurationRoot:
    """Tests for merging, lookup and sections."""

    def test_later_source_overrides_scalar(self) -> None:
        from tests.conftest import build_root

        root = build_root({"Logging": {"MinimumLevel": "Debug"}}, {"Logging": {"MinimumLevel": "Warning"}})

        assert root.get_value("Logging:MinimumLevel") == "Warning"

    def test_lookup_is_case_insensitive(self) -> None:
        from tests.conftest import build_root

        root = build_root({"Logging": {"MinimumLevel": "Debug"}})

        assert root.get_section("logging").get_section("minimumlevel").value == "Debug"

    def test_first_seen_casing_and_order_are_kept(self) -> None:
        from tests.conftest import build_root

        root = build_root({"Logging": {"B": "1", "A": "2"}}, {"logging": {"b": "3", "C": "4"}})

        children = root.get_section("Logging").get_children()

        assert [child.key for child in children] == ["B", "A", "C"]
        assert [child.value for child in children] == ["3", "2", "4"]

    def test_keys_whose_casefold_changes_length(self) -> None:
        from tests.conftest import build_root

        root = build_root({"Maße": {"Alpha": "1", "Straße": {"Beta": "2"}}})
        section = root.get_section("MASSE")

        assert [child.key for child in section.get_children()] == ["Alpha", "Straße"]
        assert [child.key for child in section.get_section("strasse").get_children()] == ["Beta"]
        assert [child.key for child in root.get_children()] == ["Maße"]

    def test_sibling_with_shared_prefix_is_not_a_child(self) -> None:
        from tests.conftest import build_root

        root = build_root({"Write": {"A": "1"}, "WriteTo": {"B": "2"}})

        assert [child.key for child in root.get_section("Write").get_children()] == ["A"]

    def test_section_paths(self) -> None:
        from tests.conftest import build_root

        root = build_root({"Logging": {"WriteTo": ["Console"]}})
        entry = root.get_section("Logging").get_section("WriteTo").get_children()[0]

        assert entry.path == "Logging:WriteTo:0"
        assert entry.key == "0"
        assert entry.value == "Console"

    def test_missing_section_does_not_exist(self) -> None:
        from tests.conftest import build_root

        section = build_root({}).get_section("Nothing")

        assert section.value is None
        assert not section.has_children()
        assert not section.exists()

    def test_node_can_have_value_and_children_across_sources(self) -> None:
        from tests.conftest import build_root

        root = build_root({"Level": "Debug"}, {"Level": {"Default": "Warning"}})
        section = root.get_section("Level")

        assert section.value == "Debug"
        assert section.has_children()


class TestReload:
    """Tests for reload and change notification."""

    def test_reload_updates_live_sections(self) -> None:
        from tests.conftest import build_root

        document = {"Logging": {"MinimumLevel": "Debug"}}
        root = build_root(document)
        section = root.get_section("Logging:MinimumLevel")

        document["Logging"]["MinimumLevel"] = "Error"
        root.reload()

        assert section.value == "Error"

    def test_reload_notifies_subscribers(self) -> None:
        from tests.conftest import build_root

        root = build_root({})
        calls: list[str] = []
        root.get_section("Anything").subscribe(lambda: calls.append("changed"))

        root.reload()

        assert calls == ["changed"]

    def test_unsubscribe_stops_notifications(self) -> None:
        from tests.conftest import build_root

        root = build_root({})
        calls: list[str] = []
        unsubscribe = root.subscribe(lambda: calls.append("changed"))

        unsubscribe()
        root.reload()

        assert calls == []

    def test_close_releases_all_subscriptions(self) -> None:
        from tests.conftest import build_root

        root = build_root({})
        calls: list[str] = []
        root.subscribe(lambda: calls.append("a"))
        root.subscribe(lambda: calls.append("b"))

        root.close()
        root.reload()

        assert calls == []


class TestProviders:
    """Tests for per-provider lookups."""

    def test_try_get_reports_presence_per_source(self) -> None:
        from tests.conftest import build_root

        root = build_root({"A": "1"}, {"B": "2"})
        first, second = root.providers

        assert first.try_get("a") == (True, "1")
        assert first.try_get("B") == (False, None)
        assert second.try_get("b") == (True, "2")


class TestFileSources:
    """Tests for JSON, YAML and Dynaconf backed sources."""

    def test_json_source(self) -> None:
        from logwright.core.configuration import ConfigurationRoot, JsonSource

        root = ConfigurationRoot([JsonSource('{"Logging": {"WriteTo": [{"Name": "console"}]}}')])

        assert root.get_value("Logging:WriteTo:0:Name") == "console"

    def test_yaml_source(self, tmp_path: Path) -> None:
        from logwright.core.configuration import ConfigurationRoot, YamlFileSource

        config_file = tmp_path / "logging.yaml"
        config_file.write_text("Logging:\n  MinimumLevel: Debug\n  WriteTo:\n    - console\n")

        root = ConfigurationRoot([YamlFileSource(config_file)])

        assert root.get_value("Logging:MinimumLevel") == "Debug"
        assert root.get_value("Logging:WriteTo:0") == "console"

    def test_yaml_source_reload_reads_file_again(self, tmp_path: Path) -> None:
        from logwright.core.configuration import ConfigurationRoot, YamlFileSource

        config_file = tmp_path / "logging.yaml"
        config_file.write_text("Logging:\n  MinimumLevel: Debug\n")
        root = ConfigurationRoot([YamlFileSource(config_file)])

        config_file.write_text("Logging:\n  MinimumLevel: Error\n")
        root.reload()

        assert root.get_value("Logging:MinimumLevel") == "Error"

    def test_optional_yaml_source_may_be_missing(self, tmp_path: Path) -> None:
        from logwright.core.configuration import ConfigurationRoot, YamlFileSource

        root = ConfigurationRoot([YamlFileSource(tmp_path / "absent.yaml", optional=True)])

        assert root.get_children() == []

    def test_required_yaml_source_must_exist(self, tmp_path: Path) -> None:
        from logwright.core.configuration import ConfigurationRoot, YamlFileSource

        with pytest.raises(FileNotFoundError):
            ConfigurationRoot([YamlFileSource(tmp_path / "absent.yaml")])

    def test_load_configuration_reads_file(self, tmp_path: Path) -> None:
        from logwright.core.configuration import load_configuration

        config_file = tmp_path / "logging.yaml"
        config_file.write_text("logging:\n  minimum_level: Warning\n")

        root = load_configuration(config_file)

        assert root.get_value("logging:minimum_level") == "Warning"

    def test_load_configuration_environment_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        from logwright.core.configuration import load_configuration

        config_file = tmp_path / "logging.yaml"
        config_file.write_text("minimum_level: Warning\n")
        monkeypatch.setenv("LOGWRIGHT_MINIMUM_LEVEL", "Error")

        root = load_configuration(config_file)

        assert root.get_value("minimum_level") == "Error"

    def test_load_configuration_missing_file(self, tmp_path: Path) -> None:
        from logwright.core.configuration import load_configuration

        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_configuration(tmp_path / "absent.yaml")
