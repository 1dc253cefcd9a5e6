# src/logwright/pipeline/destructuring.py
"""Conversion of property values into loggable structures.

Scalars pass through (strings are truncated to the configured length).
Mappings and sequences are converted recursively up to the configured depth
and element count. Other objects are captured as their string form, unless
the message template asks for structure with {@Name}, in which case their
public attributes are captured along with a "$type" entry.
"""

import dataclasses
import re
import uuid
from collections.abc import Mapping, Sequence, Set
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from logwright.plugins.protocols import DestructuringPolicy

_BUILTIN_SCALARS: tuple[type, ...] = (
    bool,
    int,
    float,
    Decimal,
    bytes,
    datetime,
    date,
    time,
    timedelta,
    uuid.UUID,
    Enum,
    PurePath,
    type(None),
)

_STRUCTURED_TOKEN = re.compile(r"\{@([A-Za-z_][A-Za-z0-9_]*)\}")


class Destructurer:
    def __init__(
        self,
        *,
        policies: Sequence["DestructuringPolicy"] = (),
        maximum_depth: int = 10,
        maximum_string_length: int | None = None,
        maximum_collection_count: int | None = None,
        scalar_types: tuple[type, ...] = (),
    ) -> None:
        self.policies = list(policies)
        self.maximum_depth = maximum_depth
        self.maximum_string_length = maximum_string_length
        self.maximum_collection_count = maximum_collection_count
        self.scalar_types = scalar_types

    def destructure_properties(self, template: str, properties: dict[str, Any]) -> dict[str, Any]:
        structured = set(_STRUCTURED_TOKEN.findall(template))
        return {name: self.destructure(value, structured=name in structured) for name, value in properties.items()}

    def destructure(self, value: Any, *, structured: bool = False, depth: int = 0) -> Any:
        if depth > self.maximum_depth:
            return None
        if isinstance(value, str):
            return self._truncate(value)
        if self.scalar_types and isinstance(value, self.scalar_types):
            return value
        if isinstance(value, _BUILTIN_SCALARS):
            return value

        for policy in self.policies:
            handled, result = policy.try_destructure(value)
            if handled:
                return result

        if isinstance(value, Mapping):
            items = list(value.items())[: self._limit(len(value))]
            return {str(k): self.destructure(v, structured=structured, depth=depth + 1) for k, v in items}
        if isinstance(value, Sequence | Set):
            elements = list(value)[: self._limit(len(value))]
            return [self.destructure(v, structured=structured, depth=depth + 1) for v in elements]
        if structured:
            return self._capture_object(value, depth)
        return self._truncate(str(value))

    def _capture_object(self, value: Any, depth: int) -> dict[str, Any]:
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            attributes = {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
        else:
            attributes = {k: v for k, v in vars(value).items() if not k.startswith("_")} if hasattr(value, "__dict__") else {}
        captured: dict[str, Any] = {"$type": type(value).__name__}
        for name, attribute in attributes.items():
            captured[name] = self.destructure(attribute, structured=True, depth=depth + 1)
        return captured

    def _limit(self, count: int) -> int:
        if self.maximum_collection_count is None:
            return count
        return min(count, self.maximum_collection_count)

    def _truncate(self, value: str) -> str:
        if self.maximum_string_length is None or len(value) <= self.maximum_string_length:
            return value
        return value[: self.maximum_string_length - 1] + "…"
