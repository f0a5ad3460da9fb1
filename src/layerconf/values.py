"""Typed, path-addressed reads from a merged configuration tree."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ValueKind(str, Enum):
    """Kind of value found at a configuration path."""

    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    NULL = "null"
    OTHER = "other"  # e.g. YAML timestamps
    ABSENT = "absent"


_MISSING = object()


def key_text(key: Any) -> str:
    """Mapping key or path segment as text, spelling bool and null the YAML way."""
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    return str(key)


def _segment_index(segment: Any) -> int | None:
    if isinstance(segment, bool):
        return None
    if isinstance(segment, int):
        return segment
    if isinstance(segment, str) and segment.isdigit():
        return int(segment)
    return None


def walk(tree: Any, path: Sequence[Any]) -> Any:
    """Follow ``path`` into ``tree``.

    Mapping segments are compared as strings; sequences accept integer (or
    digit string) indexes. Returns the private ``_MISSING`` marker as soon as
    a segment cannot be followed. Never raises.
    """
    node = tree
    for segment in path:
        if isinstance(node, Mapping):
            node = node.get(key_text(segment), _MISSING)
        elif isinstance(node, list):
            index = _segment_index(segment)
            if index is None or not -len(node) <= index < len(node):
                return _MISSING
            node = node[index]
        else:
            return _MISSING
        if node is _MISSING:
            return _MISSING
    return node


def kind_of(value: Any) -> ValueKind:
    """Classify a value read from a merged tree."""
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, list):
        return ValueKind.SEQUENCE
    return ValueKind.OTHER


@dataclass(frozen=True)
class ConfValue:
    """Result of a typed lookup: a value tagged with its kind, or absent."""

    path: tuple[str, ...]
    kind: ValueKind
    value: Any = None

    @classmethod
    def absent(cls, path: tuple[str, ...]) -> "ConfValue":
        return cls(path=path, kind=ValueKind.ABSENT)

    @classmethod
    def of(cls, path: tuple[str, ...], value: Any) -> "ConfValue":
        return cls(path=path, kind=kind_of(value), value=value)

    @property
    def is_absent(self) -> bool:
        return self.kind is ValueKind.ABSENT

    def __bool__(self) -> bool:
        return not self.is_absent

    def get(self, default: Any = None) -> Any:
        """The value, or ``default`` when absent."""
        return default if self.is_absent else self.value

    def as_str(self, default: str | None = None) -> str | None:
        if self.kind is ValueKind.STRING:
            return self.value
        return default

    def as_int(self, default: int | None = None) -> int | None:
        if self.kind is ValueKind.NUMBER and isinstance(self.value, int):
            return self.value
        return default

    def as_float(self, default: float | None = None) -> float | None:
        if self.kind is ValueKind.NUMBER:
            return float(self.value)
        return default

    def as_bool(self, default: bool | None = None) -> bool | None:
        if self.kind is ValueKind.BOOL:
            return self.value
        return default

    def as_mapping(self) -> Mapping[str, Any]:
        """The mapping at this path, or an empty one for any other kind."""
        if self.kind is ValueKind.MAPPING:
            return self.value
        return {}

    def as_list(self) -> list[Any]:
        """The sequence at this path, or an empty list for any other kind."""
        if self.kind is ValueKind.SEQUENCE:
            return self.value
        return []


def lookup(tree: Any, path: Sequence[Any]) -> ConfValue:
    """Typed lookup of ``path`` in ``tree``; absence is a value, not an error."""
    key = tuple(key_text(segment) for segment in path)
    value = walk(tree, path)
    if value is _MISSING:
        return ConfValue.absent(key)
    return ConfValue.of(key, value)
