# src/logwright/core/configuration.py
"""
Hierarchical configuration tree merged from one or more sources.

Every source is flattened into `path -> scalar` pairs where path segments are
joined with ':' and list entries get the keys "0", "1", ... Sources are
layered in order: a later source overrides the scalar of an earlier one at
the same path. Key lookups are case-insensitive; the casing first seen is
kept for display.

Sections are live views: reading `section.value` always consults the merged
data, so after `ConfigurationRoot.reload()` existing sections observe the new
values and change subscribers are notified.
"""

import json
import os
import re
import threading
from collections.abc import Callable, Iterator, Mapping, Sequence
from pathlib import Path
from typing import Any, Protocol

import yaml

KEY_DELIMITER = ":"

# Regex pattern for ${VAR} or ${VAR:-default} syntax
_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}")

# Internal Dynaconf settings that are not part of the document
_DYNACONF_INTERNAL_KEYS = frozenset({"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"})


def expand_environment_variables(value: str) -> str:
    """Expand ${VAR} and ${VAR:-default} patterns in a string.

    Unknown variables without a default are left verbatim.
    """

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)  # None if no default specified
        env_value = os.environ.get(var_name)
        if env_value is not None:
            return env_value
        if default is not None:
            return default
        return match.group(0)

    return _ENV_VAR_PATTERN.sub(replacer, value)


def combine_path(*segments: str) -> str:
    return KEY_DELIMITER.join(s for s in segments if s)


def _to_scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def flatten(data: Any, prefix: str = "") -> dict[str, str | None]:
    """Flatten nested mappings and lists into ':'-joined paths.

    Empty mappings and lists contribute no keys. None becomes the empty string.
    """
    result: dict[str, str | None] = {}
    if isinstance(data, Mapping):
        for key, child in data.items():
            result.update(flatten(child, combine_path(prefix, str(key))))
    elif isinstance(data, list | tuple):
        for index, child in enumerate(data):
            result.update(flatten(child, combine_path(prefix, str(index))))
    elif prefix:
        result[prefix] = _to_scalar(data)
    return result


# =============================================================================
# Sources
# =============================================================================


class ConfigurationSource(Protocol):
    """Anything that can produce flattened configuration data."""

    def load(self) -> dict[str, str | None]: ...


class MemorySource:
    """Source backed by an in-memory nested mapping.

    The mapping is read again on every load, so tests can mutate it and
    call ConfigurationRoot.reload().
    """

    def __init__(self, data: Mapping[str, Any]) -> None:
        self.data = data

    def load(self) -> dict[str, str | None]:
        return flatten(self.data)


class JsonSource:
    """Source backed by a JSON document held in a string."""

    def __init__(self, text: str) -> None:
        self.text = text

    def load(self) -> dict[str, str | None]:
        return flatten(json.loads(self.text))


class YamlFileSource:
    """Source backed by a YAML file, re-read on every load."""

    def __init__(self, path: Path | str, *, optional: bool = False) -> None:
        self.path = Path(path)
        self.optional = optional

    def load(self) -> dict[str, str | None]:
        if not self.path.exists():
            if self.optional:
                return {}
            raise FileNotFoundError(f"Config file not found: {self.path}")
        document = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        return flatten(document or {})


class DynaconfSource:
    """Source loaded through Dynaconf: settings files plus environment overrides.

    Precedence inside the source:
    1. Environment variables (PREFIX_*) - highest priority
    2. Settings files, later files overriding earlier ones

    Environment variable format: LOGWRIGHT_LOGGING__MINIMUMLEVEL for nested keys.
    Dynaconf upper-cases top-level keys; lookups are case-insensitive so
    this does not matter to readers.
    """

    def __init__(self, *paths: Path | str, envvar_prefix: str = "LOGWRIGHT") -> None:
        self.paths = [Path(p) for p in paths]
        self.envvar_prefix = envvar_prefix

    def load(self) -> dict[str, str | None]:
        from dynaconf import Dynaconf

        # Dynaconf silently accepts missing files
        for path in self.paths:
            if not path.exists():
                raise FileNotFoundError(f"Config file not found: {path}")

        settings = Dynaconf(
            envvar_prefix=self.envvar_prefix,
            settings_files=[str(p) for p in self.paths],
            environments=False,
            load_dotenv=False,
            merge_enabled=True,
        )
        raw = {k: v for k, v in settings.as_dict().items() if k not in _DYNACONF_INTERNAL_KEYS}
        return flatten(raw)


# =============================================================================
# Change notification
# =============================================================================


class ChangeNotifier:
    """Thread-safe registry of change callbacks."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._callbacks: list[Callable[[], None]] = []

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register a callback; returns a function that removes it again."""
        with self._lock:
            self._callbacks.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._callbacks:
                    self._callbacks.remove(callback)

        return unsubscribe

    def notify(self) -> None:
        with self._lock:
            callbacks = list(self._callbacks)
        for callback in callbacks:
            callback()

    def clear(self) -> None:
        with self._lock:
            self._callbacks.clear()

    def __len__(self) -> int:
        return len(self._callbacks)


# =============================================================================
# Tree
# =============================================================================


class ConfigurationProvider:
    """A source together with the data it produced on its last load."""

    def __init__(self, source: ConfigurationSource) -> None:
        self.source = source
        self._data: dict[str, tuple[str, str | None]] = {}

    def load(self) -> None:
        self._data = {path.casefold(): (path, value) for path, value in self.source.load().items()}

    def try_get(self, path: str) -> tuple[bool, str | None]:
        """Return (found, value) for an exact path in this provider only."""
        entry = self._data.get(path.casefold())
        if entry is None:
            return False, None
        return True, entry[1]

    def items(self) -> Iterator[tuple[str, tuple[str, str | None]]]:
        return iter(self._data.items())


class ConfigurationRoot:
    """Merged view over an ordered list of sources."""

    def __init__(self, sources: Sequence[ConfigurationSource]) -> None:
        self._providers = [ConfigurationProvider(source) for source in sources]
        self._notifier = ChangeNotifier()
        self._merged: dict[str, tuple[str, str | None]] = {}
        self._load()

    @property
    def providers(self) -> list[ConfigurationProvider]:
        return list(self._providers)

    @property
    def path(self) -> str:
        return ""

    @property
    def value(self) -> str | None:
        return None

    def _load(self) -> None:
        merged: dict[str, tuple[str, str | None]] = {}
        for provider in self._providers:
            provider.load()
            for folded, (path, value) in provider.items():
                if folded in merged:
                    # Keep first-seen position and casing, take the later value
                    merged[folded] = (merged[folded][0], value)
                else:
                    merged[folded] = (path, value)
        self._merged = merged

    def reload(self) -> None:
        """Re-read every source, then notify subscribers."""
        self._load()
        self._notifier.notify()

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        return self._notifier.subscribe(callback)

    def close(self) -> None:
        """Release every change subscription."""
        self._notifier.clear()

    def get_value(self, path: str) -> str | None:
        entry = self._merged.get(path.casefold())
        return None if entry is None else entry[1]

    def child_keys(self, path: str) -> list[str]:
        """Immediate child keys under path, in source enumeration order."""
        # Compared per segment; casefold() may change a key's length
        parent = [segment.casefold() for segment in path.split(KEY_DELIMITER)] if path else []
        depth = len(parent)
        seen: dict[str, str] = {}
        for display, _value in self._merged.values():
            segments = display.split(KEY_DELIMITER)
            if len(segments) <= depth or [segment.casefold() for segment in segments[:depth]] != parent:
                continue
            seen.setdefault(segments[depth].casefold(), segments[depth])
        return list(seen.values())

    def get_section(self, key: str) -> "ConfigurationSection":
        return ConfigurationSection(self, key)

    def get_children(self) -> list["ConfigurationSection"]:
        return [ConfigurationSection(self, key) for key in self.child_keys("")]


class ConfigurationSection:
    """A live view of one node of a ConfigurationRoot.

    A node has either a scalar value or children. Both at once is only
    possible when sources disagree about its shape; readers reject that.
    """

    def __init__(self, root: ConfigurationRoot, path: str) -> None:
        self._root = root
        self._path = path

    @property
    def root(self) -> ConfigurationRoot:
        return self._root

    @property
    def path(self) -> str:
        return self._path

    @property
    def key(self) -> str:
        return self._path.rsplit(KEY_DELIMITER, 1)[-1]

    @property
    def value(self) -> str | None:
        return self._root.get_value(self._path)

    def get_section(self, key: str) -> "ConfigurationSection":
        return ConfigurationSection(self._root, combine_path(self._path, key))

    def get_children(self) -> list["ConfigurationSection"]:
        return [self.get_section(key) for key in self._root.child_keys(self._path)]

    def has_children(self) -> bool:
        return bool(self._root.child_keys(self._path))

    def exists(self) -> bool:
        return self.value is not None or self.has_children()

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Subscribe to change notifications of the owning root."""
        return self._root.subscribe(callback)

    def __repr__(self) -> str:
        return f"ConfigurationSection({self._path!r})"


def load_configuration(*paths: Path | str, envvar_prefix: str = "LOGWRIGHT") -> ConfigurationRoot:
    """Load configuration files plus environment overrides.

    Args:
        paths: YAML/JSON/TOML files understood by Dynaconf.
        envvar_prefix: Prefix of environment variables merged on top.

    Returns:
        A reloadable ConfigurationRoot.

    Raises:
        FileNotFoundError: If a file doesn't exist.
    """
    return ConfigurationRoot([DynaconfSource(*paths, envvar_prefix=envvar_prefix)])
