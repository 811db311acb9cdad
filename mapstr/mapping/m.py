"""The nested map type and its path-based operations."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from typing_extensions import override

from mapstr.errors import AlterKeyError, InvalidKeyError, KeyCollisionError, KeyNotFoundError
from mapstr.values import ValueKind, kind_of, try_to_map

from .find import map_find
from .traverse import TraversalMode, TraversalVisitor, traverse


AlterFunc = Callable[[str], str]


class M(dict[str, Any]):
    """String-keyed tree of values with dotted-path helpers.

    Values may be nested maps (``M`` or plain ``dict``, used interchangeably),
    sequences of maps, sequences of strings or opaque leaves. Keys given to
    :meth:`get_value`, :meth:`put`, :meth:`delete` and :meth:`has_key` may be
    dotted paths such as ``"host.name"``; a key present verbatim always wins
    over splitting it at its dots.

    All operations mutate in place. The structure is not synchronized.
    """

    @override
    def copy(self) -> M:
        """Return a shallow copy that is still an ``M``."""
        return M(self)

    def deep_update(self, other: dict[str, Any]) -> None:
        """Recursively merge ``other`` into this map, overwriting existing values."""
        deep_update_map(self, other, overwrite=True)

    def deep_update_no_overwrite(self, other: dict[str, Any]) -> None:
        """Recursively merge ``other`` into this map, keeping existing values."""
        deep_update_map(self, other, overwrite=False)

    def get_value(self, key: str) -> Any:
        """Return the value at the dotted ``key``; raise KeyNotFoundError if absent."""
        found = map_find(key, self)
        if not found.present:
            msg = f"key not found: {key!r}"
            raise KeyNotFoundError(msg)
        return found.old_value

    def put(self, key: str, value: Any) -> Any:
        """Set ``value`` at the dotted ``key`` and return the previous value.

        Missing intermediate levels are created as empty maps. A literal key
        containing dots can only be inserted with item assignment
        (``m["a.b"] = value``).
        """
        found = map_find(key, self, create_missing=True, new_map=M)
        found.sub_map[found.sub_key] = value
        return found.old_value

    def delete(self, key: str) -> None:
        """Remove the value at the dotted ``key``; raise KeyNotFoundError if absent."""
        found = map_find(key, self)
        if not found.present:
            msg = f"key not found: {key!r}"
            raise KeyNotFoundError(msg)
        del found.sub_map[found.sub_key]

    def has_key(self, key: str) -> bool:
        """Return True when the dotted ``key`` exists.

        Traversal errors such as a non-map intermediate value are raised,
        not reported as False.
        """
        return map_find(key, self).present

    def copy_fields_to(self, to: M, key: str) -> None:
        """Copy the value at ``key`` into ``to`` under the same dotted key."""
        _ = to.put(key, self.get_value(key))

    def clone(self) -> M:
        """Return a copy with nested maps and map sequences copied recursively.

        Other sequences and leaf values are shared with the original.
        """
        result = M()
        _clone_map(result, self)
        return result

    def traverse(self, path: str, mode: TraversalMode, visitor: TraversalVisitor) -> None:
        """Walk ``path`` calling ``visitor`` on each level; see :func:`traverse`."""
        traverse(self, path, mode, visitor)

    def find_fold(self, path: str) -> tuple[str, Any]:
        """Find ``path`` matching every segment case-insensitively.

        Returns the dotted key as actually stored in the map and its value.
        Raises KeyCollisionError when several keys of one level match.
        """
        segment_count = path.count(".") + 1
        matched: list[str] = []
        value: Any = None

        def collect(level: dict[str, Any], key: str) -> None:
            nonlocal value
            matched.append(key)
            if len(matched) == segment_count:
                value = level[key]

        traverse(self, path, TraversalMode.CASE_INSENSITIVE, collect)
        return ".".join(matched), value

    def alter_path(self, path: str, mode: TraversalMode, alter_func: AlterFunc) -> None:
        """Rename every key along ``path`` to the result of ``alter_func``.

        Raises
        ------
        AlterKeyError
            ``alter_func`` raised.
        InvalidKeyError
            ``alter_func`` returned an empty key.
        KeyCollisionError
            The replacement key already exists on that level, or several keys
            matched one segment.
        """

        def rename(level: dict[str, Any], key: str) -> str | None:
            try:
                new_key = alter_func(key)
            except Exception as error:
                msg = f"failed to apply a change to {key!r}: {error}"
                raise AlterKeyError(msg) from error

            if not new_key:
                msg = f"replacement key for {key!r} cannot be empty"
                raise InvalidKeyError(msg)
            if new_key == key:
                return None
            if new_key in level:
                msg = f"replacement key {new_key!r} already exists"
                raise KeyCollisionError(msg)

            level[new_key] = level.pop(key)
            return new_key

        traverse(self, path, mode, rename)

    def flatten(self) -> M:
        """Return a single-level map keyed by the dotted path of every leaf.

        ``{"hello": {"world": "test"}}`` becomes ``{"hello.world": "test"}``.
        """
        return _flatten("", self, M())

    def flatten_keys(self) -> list[str]:
        """Return the dotted path of every key, intermediate maps included.

        ``{"hello": {"world": "test"}}`` gives ``["hello.world", "hello"]``.
        """
        out: list[str] = []
        _flatten_keys("", self, out)
        return out

    def string_to_print(self) -> str:
        """Render the map as indented JSON."""
        try:
            return json.dumps(self, indent=2, sort_keys=True)
        except (TypeError, ValueError) as error:
            return f"Not valid json: {error}"

    @override
    def __str__(self) -> str:
        """Render the map as compact JSON."""
        try:
            return json.dumps(self, separators=(",", ":"), sort_keys=True)
        except (TypeError, ValueError) as error:
            return f"Not valid json: {error}"

    @override
    def __format__(self, format_spec: str) -> str:
        """Render as compact JSON; only the empty, ``+`` and ``#`` specs are accepted."""
        if format_spec not in {"", "+", "#"}:
            msg = f"unsupported format string for M: {format_spec!r}"
            raise ValueError(msg)
        return str(self)


def union(dict1: dict[str, Any], dict2: dict[str, Any]) -> M:
    """Return a new map with the pairs of ``dict1`` overwritten by those of ``dict2``."""
    result = M(dict1)
    result.update(dict2)
    return result


def deep_update_map(dst: dict[str, Any], src: dict[str, Any], *, overwrite: bool) -> None:
    """Recursively merge ``src`` into ``dst``; existing values are kept unless ``overwrite``."""
    for key, value in src.items():
        incoming = try_to_map(value)
        existing = try_to_map(dst.get(key))
        if incoming is not None and existing is not None:
            deep_update_map(existing, incoming, overwrite=overwrite)
        elif overwrite or key not in dst:
            dst[key] = value


def _clone_map(dst: M, src: dict[str, Any]) -> None:
    for key, value in src.items():
        match kind_of(value):
            case ValueKind.MAP:
                nested = M()
                _clone_map(nested, value)
                dst[key] = nested
            case ValueKind.MAP_SEQUENCE:
                items: list[M] = []
                for item in value:
                    nested = M()
                    _clone_map(nested, item)
                    items.append(nested)
                dst[key] = items
            case _:
                dst[key] = value


def _join(prefix: str, key: str) -> str:
    return f"{prefix}.{key}" if prefix else key


def _flatten(prefix: str, data: dict[str, Any], out: M) -> M:
    for key, value in data.items():
        full_key = _join(prefix, key)
        nested = try_to_map(value)
        if nested is not None:
            _ = _flatten(full_key, nested, out)
        else:
            out[full_key] = value
    return out


def _flatten_keys(prefix: str, data: dict[str, Any], out: list[str]) -> None:
    for key, value in data.items():
        full_key = _join(prefix, key)
        nested = try_to_map(value)
        if nested is not None:
            _flatten_keys(full_key, nested, out)
        out.append(full_key)
