"""Value shape classification for nested map contents."""

from __future__ import annotations

from enum import Enum, auto
from typing import Any

from .errors import NotMapTypeError


class ValueKind(Enum):
    """Closed set of value shapes a nested map can hold."""

    MAP = auto()
    MAP_SEQUENCE = auto()
    STRING_SEQUENCE = auto()
    SEQUENCE = auto()
    LEAF = auto()


def kind_of(value: Any) -> ValueKind:
    """Classify a value into its :class:`ValueKind`.

    ``M`` and plain ``dict`` both classify as ``MAP``. Strings and bytes are
    leaves, never sequences.
    """
    match value:
        case dict():
            return ValueKind.MAP
        case list() | tuple():
            if not value:
                return ValueKind.STRING_SEQUENCE
            if all(isinstance(item, dict) for item in value):
                return ValueKind.MAP_SEQUENCE
            if all(isinstance(item, str) for item in value):
                return ValueKind.STRING_SEQUENCE
            return ValueKind.SEQUENCE
        case _:
            return ValueKind.LEAF


def try_to_map(value: Any) -> dict[str, Any] | None:
    """Return value itself when it is map-shaped, otherwise None."""
    if isinstance(value, dict):
        return value
    return None


def to_map(value: Any) -> dict[str, Any]:
    """Return value itself when it is map-shaped, otherwise raise NotMapTypeError."""
    mapping = try_to_map(value)
    if mapping is None:
        msg = f"expected map but type is {type(value).__name__}"
        raise NotMapTypeError(msg)
    return mapping
