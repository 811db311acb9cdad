"""Merging helpers for event field maps."""

from __future__ import annotations

from typing import Any

from mapstr.values import to_map

from .m import M, deep_update_map


FIELDS_KEY = "fields"


def merge_fields(target: dict[str, Any] | None, from_: dict[str, Any], *, under_root: bool) -> None:
    """Merge the top-level pairs of ``from_`` into ``target`` (no deep merge).

    When ``under_root`` is False the pairs go into ``target["fields"]``,
    which is created when missing. Values from ``from_`` take precedence.

    Raises
    ------
    NotMapTypeError
        ``target["fields"]`` exists and is not a map.
    """
    if target is None or not from_:
        return

    dest = _destination(target, from_, under_root=under_root)
    dest.update(from_)


def merge_fields_deep(target: dict[str, Any] | None, from_: dict[str, Any], *, under_root: bool) -> None:
    """Recursively merge ``from_`` into ``target`` or ``target["fields"]``.

    Same destination rules as :func:`merge_fields`; nested maps present on
    both sides are merged instead of replaced.
    """
    if target is None or not from_:
        return

    dest = _destination(target, from_, under_root=under_root)
    deep_update_map(dest, from_, overwrite=True)


def _destination(target: dict[str, Any], from_: dict[str, Any], *, under_root: bool) -> dict[str, Any]:
    if under_root:
        return target

    if FIELDS_KEY not in target:
        fields = M()
        target[FIELDS_KEY] = fields
        return fields

    return to_map(target[FIELDS_KEY])
