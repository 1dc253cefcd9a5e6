# tests/property/test_configuration_properties.py
"""Property-based tests for the configuration tree.

Tests the structural guarantees of flattening and layering:
- Every scalar leaf is reachable by its ':'-joined path
- Lookups are case-insensitive
- A later source wins for every key it defines
- Child keys keep first-seen order across sources
"""

from __future__ import annotations

from typing import Any

from hypothesis import given
from hypothesis import strategies as st

from logwright.core.configuration import ConfigurationRoot, MemorySource, expand_environment_variables, flatten
from tests.property.conftest import config_scalars, configuration_documents, flat_sections
from tests.property.settings import STANDARD_SETTINGS


def _leaves(document: dict[str, Any], prefix: str = "") -> dict[str, str]:
    result: dict[str, str] = {}
    for key, value in document.items():
        path = f"{prefix}:{key}" if prefix else key
        if isinstance(value, dict):
            result.update(_leaves(value, path))
        elif isinstance(value, bool):
            result[path] = "true" if value else "false"
        else:
            result[path] = str(value)
    return result


class TestFlattening:
    """flatten maps every leaf to exactly one path."""

    @given(document=configuration_documents)
    @STANDARD_SETTINGS
    def test_every_leaf_has_a_path(self, document: dict[str, Any]) -> None:
        """Flattened keys are exactly the leaf paths, with scalar text values."""
        assert flatten(document) == _leaves(document)

    @given(document=configuration_documents)
    @STANDARD_SETTINGS
    def test_lookup_ignores_case(self, document: dict[str, Any]) -> None:
        root = ConfigurationRoot([MemorySource(document)])

        for path, value in _leaves(document).items():
            assert root.get_value(path) == value
            assert root.get_value(path.upper()) == value

    @given(items=st.lists(config_scalars, min_size=1, max_size=15))
    @STANDARD_SETTINGS
    def test_list_items_keep_their_positions(self, items: list[Any]) -> None:
        """Index keys enumerate in list order even past nine entries."""
        root = ConfigurationRoot([MemorySource({"items": items})])

        children = root.get_section("items").get_children()

        assert [child.key for child in children] == [str(i) for i in range(len(items))]


class TestLayering:
    """Sources layer in order; the last one to define a key wins."""

    @given(first=flat_sections, second=flat_sections)
    @STANDARD_SETTINGS
    def test_later_source_wins(self, first: dict[str, str], second: dict[str, str]) -> None:
        root = ConfigurationRoot([MemorySource({"section": first}), MemorySource({"section": second})])

        for key in set(first) | set(second):
            expected = second[key] if key in second else first[key]
            assert root.get_value(f"section:{key}") == expected

    @given(first=flat_sections, second=flat_sections)
    @STANDARD_SETTINGS
    def test_child_keys_in_first_seen_order(self, first: dict[str, str], second: dict[str, str]) -> None:
        root = ConfigurationRoot([MemorySource({"section": first}), MemorySource({"section": second})])

        expected = list(first) + [key for key in second if key not in first]

        assert root.child_keys("section") == expected


class TestEnvironmentExpansion:
    @given(text=st.text(alphabet=st.characters(blacklist_characters="$"), max_size=40))
    @STANDARD_SETTINGS
    def test_text_without_references_is_unchanged(self, text: str) -> None:
        assert expand_environment_variables(text) == text
