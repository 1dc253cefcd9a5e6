# tests/conftest.py
"""Shared test fixtures and helpers.

Configuration documents in tests are plain nested dicts wrapped in
MemorySource. Mutate the dict and call root.reload() to simulate a live
configuration change.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import os
from collections.abc import Iterator
from typing import Any

import pytest
from hypothesis import Phase, Verbosity, settings

from logwright.core.configuration import ConfigurationRoot, MemorySource
from logwright.engine.context import ReaderOptions, ResolutionContext
from logwright.pipeline.configuration import LoggerConfiguration
from logwright.pipeline.logger import Logger
from logwright.plugins.manager import PluginManager
from logwright.settings import LoadedConfiguration, read_configuration

DUMMIES_MODULE = "tests.dummies"


def build_root(*documents: dict[str, Any]) -> ConfigurationRoot:
    """Layer documents in order, later ones overriding earlier ones."""
    return ConfigurationRoot([MemorySource(document) for document in documents])


def read_logger(
    logging_section: dict[str, Any],
    *,
    options: ReaderOptions | None = None,
    using_dummies: bool = True,
) -> tuple[Logger, LoadedConfiguration]:
    """Read {"Logging": logging_section} and create the logger."""
    section = dict(logging_section)
    if using_dummies:
        section.setdefault("Using", [DUMMIES_MODULE])
    root = build_root({"Logging": section})
    logger_configuration = LoggerConfiguration()
    loaded = read_configuration(logger_configuration, root, options)
    return logger_configuration.create_logger(), loaded


@pytest.fixture(autouse=True)
def _reset_dummies() -> Iterator[None]:
    from tests.dummies import DummySink, DummyWrappingSink

    DummySink.reset()
    DummyWrappingSink.wrapped.clear()
    yield
    DummySink.reset()
    DummyWrappingSink.wrapped.clear()


@pytest.fixture
def plugin_manager() -> PluginManager:
    """PluginManager with built-in methods and the test dummies registered."""
    manager = PluginManager()
    manager.register_builtin_plugins()
    manager.load_module(DUMMIES_MODULE)
    return manager


@pytest.fixture
def context() -> ResolutionContext:
    return ResolutionContext(build_root({}), ReaderOptions())


# =============================================================================
# Hypothesis Configuration
# =============================================================================

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Load profile from environment, default to "ci"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))
