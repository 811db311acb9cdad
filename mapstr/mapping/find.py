"""Dotted-path resolution through nested maps."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, NamedTuple

from mapstr.errors import KeyNotFoundError, NotMapTypeError
from mapstr.values import to_map


if TYPE_CHECKING:
    from collections.abc import Callable


class FindResult(NamedTuple):
    """Final level reached by :func:`map_find`."""

    sub_key: str
    sub_map: dict[str, Any]
    old_value: Any
    present: bool


def map_find(
    key: str,
    data: dict[str, Any],
    *,
    create_missing: bool = False,
    new_map: Callable[[], dict[str, Any]] = dict,
) -> FindResult:
    """Walk ``data`` along the dotted ``key`` and return the final level.

    At every level the remaining key is first looked up verbatim, so literal
    keys containing dots are addressable. Only when it is absent is the key
    split at its first dot and the walk continued one level down.

    Parameters
    ----------
    key
        Dotted path to resolve.
    data
        Root map. Nested levels are descended in place, never copied.
    create_missing
        When True, missing intermediate levels are created with ``new_map``.
    new_map
        Factory for created intermediate levels.

    Raises
    ------
    KeyNotFoundError
        An intermediate segment is missing and ``create_missing`` is False.
    NotMapTypeError
        An intermediate value is not a map.
    """
    path = key
    while True:
        if key in data:
            return FindResult(key, data, data[key], True)

        head, sep, tail = key.partition(".")
        if not sep:
            return FindResult(key, data, None, False)

        if head not in data:
            if not create_missing:
                msg = f"key {head!r} of the path {path!r} not found"
                raise KeyNotFoundError(msg)
            data[head] = new_map()

        try:
            data = to_map(data[head])
        except NotMapTypeError as error:
            msg = f"cannot continue path {path!r} at key {head!r}: {error}"
            raise NotMapTypeError(msg) from error

        key = tail
