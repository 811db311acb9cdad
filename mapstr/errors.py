"""Exception taxonomy for nested map operations."""

from __future__ import annotations

from typing_extensions import override


class MapStrError(Exception):
    """Base class for all nested map errors."""


class KeyNotFoundError(MapStrError, KeyError):
    """A requested key or path segment does not exist."""

    @override
    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message instead.
        return Exception.__str__(self)


class KeyCollisionError(MapStrError, ValueError):
    """Several keys matched the same segment, or a rename target already exists."""


class NotMapTypeError(MapStrError, TypeError):
    """A value on the path must be a map to continue traversal but is not."""


class TagsTypeError(MapStrError, TypeError):
    """An existing tags value cannot be appended to."""


class InvalidKeyError(MapStrError, ValueError):
    """A replacement key is not usable."""


class AlterKeyError(MapStrError):
    """A key alter function failed."""
