"""Tag list helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mapstr.errors import TagsTypeError
from mapstr.values import ValueKind, kind_of

from .find import map_find
from .m import M


if TYPE_CHECKING:
    from collections.abc import Sequence


TAGS_KEY = "tags"


def add_tags(ms: dict[str, Any] | None, tags: Sequence[str]) -> None:
    """Append ``tags`` to the ``tags`` field of ``ms``; see :func:`add_tags_with_key`."""
    add_tags_with_key(ms, TAGS_KEY, tags)


def add_tags_with_key(ms: dict[str, Any] | None, key: str, tags: Sequence[str]) -> None:
    """Append ``tags`` to the list stored at the dotted ``key`` of ``ms``.

    The list is created when the key is missing. Tags are not deduplicated.
    The stored list is always a new list, never one of the caller's.

    Raises
    ------
    TagsTypeError
        The existing value at ``key`` is not a list or tuple.
    TypeError
        ``tags`` is a single string instead of a sequence of strings.
    """
    if isinstance(tags, str):
        msg = f"tags must be a sequence of strings, not the string {tags!r}"
        raise TypeError(msg)
    if ms is None or not tags:
        return

    found = map_find(key, ms, create_missing=True, new_map=M)
    if not found.present:
        found.sub_map[found.sub_key] = list(tags)
        return

    existing = found.old_value
    match kind_of(existing):
        case ValueKind.STRING_SEQUENCE | ValueKind.SEQUENCE | ValueKind.MAP_SEQUENCE:
            found.sub_map[found.sub_key] = [*existing, *tags]
        case _:
            msg = f"expected string array by type is {type(existing).__name__}"
            raise TagsTypeError(msg)
