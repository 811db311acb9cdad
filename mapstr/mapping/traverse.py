"""Segment-by-segment traversal with configurable key matching."""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum
from typing import Any

from mapstr.errors import KeyCollisionError, KeyNotFoundError, MapStrError, NotMapTypeError
from mapstr.values import try_to_map


TraversalVisitor = Callable[[dict[str, Any], str], str | None]


class TraversalMode(IntEnum):
    """How path segments are matched against the keys of a level."""

    CASE_SENSITIVE = 0
    CASE_INSENSITIVE = 1


def _matching_keys(level: dict[str, Any], segment: str, mode: TraversalMode) -> list[str]:
    if mode == TraversalMode.CASE_SENSITIVE:
        return [segment] if segment in level else []

    lowered = segment.lower()
    return [key for key in level if key.lower() == lowered]


def traverse(data: dict[str, Any], path: str, mode: TraversalMode, visitor: TraversalVisitor) -> None:
    """Walk ``path`` through ``data`` calling ``visitor(level, key)`` on every level.

    The visitor receives the live level map and the key that matched the
    current segment. It may mutate the level; it returns the key the matched
    value lives under afterwards, or None when the key is unchanged. The value
    to descend into is read after the visitor returns.

    Raises
    ------
    KeyCollisionError
        More than one key matched a segment (case-insensitive mode only).
    KeyNotFoundError
        No key matched a segment, or the visitor removed the matched key of an
        intermediate segment.
    NotMapTypeError
        The value of an intermediate segment is not a map.
    """
    segments = path.split(".")
    last = len(segments) - 1
    current = data

    for index, segment in enumerate(segments):
        matches = _matching_keys(current, segment, mode)
        if not matches:
            msg = f"could not fetch value for key: {path}"
            raise KeyNotFoundError(msg)
        if len(matches) > 1:
            msg = f"multiple keys match {matches[1]!r} on the same level of the path {path!r}"
            raise KeyCollisionError(msg)

        key = matches[0]
        try:
            renamed = visitor(current, key)
        except MapStrError as error:
            msg = f"error visiting key {key!r} of the path {path!r}: {error}"
            raise type(error)(msg) from error

        if index == last:
            return

        if renamed is not None:
            key = renamed
        if key not in current:
            msg = f"cannot continue path {path!r}, key {key!r} was removed by the visitor"
            raise KeyNotFoundError(msg)

        next_level = try_to_map(current[key])
        if next_level is None:
            msg = f"cannot continue path {path!r}, next value {key!r} is not a map"
            raise NotMapTypeError(msg)
        current = next_level
