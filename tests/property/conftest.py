# tests/property/conftest.py
"""Shared Hypothesis strategies for property-based tests.

Usage:
    from tests.property.conftest import configuration_documents, level_spellings

    @given(document=configuration_documents)
    def test_flatten_keeps_every_leaf(document: dict) -> None:
        ...
"""

from __future__ import annotations

from hypothesis import strategies as st

from logwright.contracts.enums import LogEventLevel

# =============================================================================
# Configuration Keys and Values
# =============================================================================

# Lowercase keys never collide case-insensitively and never contain ':'
config_keys = st.from_regex(r"[a-z][a-z0-9_]{0,12}", fullmatch=True)

# Scalar leaves as a YAML or JSON document would carry them
config_scalars = (
    st.booleans()
    | st.integers(min_value=-(10**9), max_value=10**9)
    | st.text(alphabet=st.characters(whitelist_categories=("L", "N", "Zs")), max_size=30)
)

# Nested mappings with scalar leaves and no empty containers
configuration_documents = st.recursive(
    st.dictionaries(config_keys, config_scalars, min_size=1, max_size=6),
    lambda children: st.dictionaries(config_keys, children | config_scalars, min_size=1, max_size=4),
    max_leaves=30,
)

# Flat single-level sections for layering tests
flat_sections = st.dictionaries(config_keys, st.text(alphabet="abcdefXYZ0123 ", max_size=10), max_size=10)


# =============================================================================
# Levels and Switches
# =============================================================================


@st.composite
def level_spellings(draw: st.DrawFn) -> tuple[LogEventLevel, str]:
    """A level together with its name in an arbitrary mix of upper and lower case."""
    level = draw(st.sampled_from(list(LogEventLevel)))
    casing = draw(st.lists(st.booleans(), min_size=len(level.name), max_size=len(level.name)))
    spelled = "".join(c.upper() if upper else c.lower() for c, upper in zip(level.name, casing, strict=True))
    return level, spelled


# Names a switch declaration accepts, without the '$' prefix
switch_names = st.from_regex(r"[A-Za-z][A-Za-z0-9]{0,15}", fullmatch=True)

# Names that start with a digit or contain punctuation or whitespace
invalid_switch_names = st.one_of(
    st.from_regex(r"[0-9][A-Za-z0-9]{0,8}", fullmatch=True),
    st.tuples(switch_names, st.sampled_from(list("-_. :\n")), switch_names).map("".join),
    st.just(""),
    st.just("$"),
)

# Method names as they appear in WriteTo entries
directive_names = st.from_regex(r"[a-z][a-z_]{0,15}", fullmatch=True)
