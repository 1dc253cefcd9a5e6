# tests/engine/test_directives.py
"""Tests for reading directives out of list-shaped sections."""

import pytest

from logwright.plugins.manager import PluginManager


def _directives(node: object):
    from logwright.engine.directives import extract_directives
    from tests.conftest import build_root

    return extract_directives(build_root({"WriteTo": node}).get_section("WriteTo"), PluginManager())


class TestExtractDirectives:
    def test_scalar_entries_are_name_only(self) -> None:
        directives = _directives(["console", "stdlib"])

        assert [(d.name, d.arguments) for d in directives] == [("console", {}), ("stdlib", {})]

    def test_expanded_entry_with_args(self) -> None:
        from logwright.engine.scalar import ScalarArgumentValue
        from logwright.engine.section import SectionArgumentValue

        (directive,) = _directives([{"Name": "dummy_sink", "Args": {"path_format": "a.log", "extra": {"k": "v"}}}])

        assert directive.name == "dummy_sink"
        assert directive.path == "WriteTo:0"
        assert list(directive.arguments) == ["path_format", "extra"]
        assert isinstance(directive.arguments["path_format"], ScalarArgumentValue)
        assert isinstance(directive.arguments["extra"], SectionArgumentValue)

    def test_mixed_entries_keep_source_order(self) -> None:
        directives = _directives([{"Name": "first"}, "second", {"Name": "third"}])

        assert [d.name for d in directives] == ["first", "second", "third"]

    def test_named_object_form(self) -> None:
        directives = _directives({"Main": {"Name": "console"}, "Copy": {"Name": "console"}})

        assert [(d.name, d.path) for d in directives] == [("console", "WriteTo:Main"), ("console", "WriteTo:Copy")]

    def test_duplicate_names_are_not_merged(self) -> None:
        directives = _directives(["console", "console"])

        assert len(directives) == 2

    def test_missing_name(self) -> None:
        from logwright.contracts.errors import MissingNameError

        with pytest.raises(MissingNameError, match=r"WriteTo:0:Name has no 'Name' element") as exc_info:
            _directives([{"Args": {"path_format": "a.log"}}])

        assert exc_info.value.path == "WriteTo:0:Name"

    def test_ambiguous_argument(self) -> None:
        from logwright.contracts.errors import AmbiguousValueError
        from logwright.engine.directives import extract_directives
        from tests.conftest import build_root

        root = build_root(
            {"WriteTo": [{"Name": "dummy_sink", "Args": {"path_format": "a.log"}}]},
            {"WriteTo": [{"Args": {"path_format": {"Nested": "b.log"}}}]},
        )

        with pytest.raises(AmbiguousValueError):
            extract_directives(root.get_section("WriteTo"), PluginManager())

    def test_entry_both_scalar_and_expanded(self) -> None:
        """One source names the entry, another expands it; neither shape wins."""
        from logwright.contracts.errors import AmbiguousValueError
        from logwright.engine.directives import extract_directives
        from tests.conftest import build_root

        root = build_root(
            {"WriteTo": ["console"]},
            {"WriteTo": [{"Name": "dummy_sink", "Args": {"path_format": "a.log"}}]},
        )

        with pytest.raises(AmbiguousValueError, match="different value types") as exc_info:
            extract_directives(root.get_section("WriteTo"), PluginManager())

        assert exc_info.value.path == "WriteTo:0"

    def test_empty_section(self) -> None:
        from logwright.engine.directives import extract_directives
        from tests.conftest import build_root

        assert extract_directives(build_root({}).get_section("WriteTo"), PluginManager()) == []
