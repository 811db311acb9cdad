"""Structured logging support for nested maps.

A map is emitted field by field to an :class:`ObjectEncoder`, keys in sorted
order, nested maps as nested objects. A mask is applied to a clone of the map
before anything is emitted, so the caller's map is never modified.

Typical use::

    logger = MapStrLoggerAdapter(logging.getLogger("events"), mask=LoggingMask())
    logger.info("event received", fields=M({"user": {"password": "secret"}}))
"""

from __future__ import annotations

import logging
from collections.abc import Callable, MutableMapping
from typing import Any, Protocol

from typing_extensions import override

from .mapping import M
from .values import ValueKind, kind_of, try_to_map


Mask = Callable[[dict[str, Any]], None]


def _detach(value: Any) -> Any:
    # copies every map and every sequence that may hold one, leaves are shared
    match kind_of(value):
        case ValueKind.MAP:
            return M({key: _detach(item) for key, item in value.items()})
        case ValueKind.MAP_SEQUENCE | ValueKind.SEQUENCE:
            return [_detach(item) for item in value]
        case _:
            return value


class ObjectMarshaler(Protocol):
    """Anything that can write itself to an :class:`ObjectEncoder`."""

    def marshal_log_object(self, enc: ObjectEncoder) -> None:
        """Write the fields of this object to ``enc``."""


class ObjectEncoder(Protocol):
    """Receiver of structured log fields."""

    def add_object(self, key: str, obj: ObjectMarshaler) -> None:
        """Add ``obj`` as a nested object under ``key``."""

    def add_any(self, key: str, value: Any) -> None:
        """Add a plain value under ``key``."""


class DictObjectEncoder:
    """Encoder collecting fields into a plain dictionary."""

    def __init__(self) -> None:
        super().__init__()
        self.fields: dict[str, Any] = {}

    def add_object(self, key: str, obj: ObjectMarshaler) -> None:
        """Encode ``obj`` as a nested dictionary under ``key``."""
        nested = DictObjectEncoder()
        obj.marshal_log_object(nested)
        self.fields[key] = nested.fields

    def add_any(self, key: str, value: Any) -> None:
        """Store ``value`` as is under ``key``."""
        self.fields[key] = value


class MaskedMap:
    """Log view of a map with an optional mask applied."""

    def __init__(self, m: dict[str, Any], mask: Mask | None = None) -> None:
        super().__init__()
        self._m = m if isinstance(m, M) else M(m)
        self._mask = mask

    def masked(self) -> M:
        """Return a masked deep copy of the wrapped map.

        Lists holding maps are copied too, so masking never reaches the
        caller's map.
        """
        clone = _detach(self._m)
        if self._mask is not None:
            self._mask(clone)
        return clone

    def marshal_log_object(self, enc: ObjectEncoder) -> None:
        """Write the masked map to ``enc`` in sorted key order."""
        if not self._m:
            return

        masked = self.masked()
        for key in sorted(masked):
            value = masked[key]
            nested = try_to_map(value)
            if nested is not None:
                # already masked as part of the clone
                enc.add_object(key, MaskedMap(nested))
                continue
            enc.add_any(key, value)

    def to_dict(self) -> dict[str, Any]:
        """Encode the masked map with a :class:`DictObjectEncoder`."""
        enc = DictObjectEncoder()
        self.marshal_log_object(enc)
        return enc.fields

    @override
    def __str__(self) -> str:
        return str(self.masked())

    @override
    def __format__(self, format_spec: str) -> str:
        if format_spec in {"+", "#"}:
            return str(self._m)
        return str(self)


class MapStrLoggerAdapter(logging.LoggerAdapter[logging.Logger]):
    """Logger adapter accepting a ``fields=`` map on every logging call.

    The map is masked and encoded into ``extra["fields"]`` of the record.
    """

    def __init__(
        self,
        logger: logging.Logger,
        mask: Mask | None = None,
        extra: MutableMapping[str, object] | None = None,
    ) -> None:
        super().__init__(logger, extra or {})
        self.mask = mask

    @override
    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        extra = dict(self.extra or {})
        extra.update(kwargs.get("extra") or {})

        fields = kwargs.pop("fields", None)
        if fields is not None:
            extra["fields"] = MaskedMap(fields, self.mask).to_dict()

        kwargs["extra"] = extra
        return msg, kwargs


__all__ = [
    "DictObjectEncoder",
    "MapStrLoggerAdapter",
    "Mask",
    "MaskedMap",
    "ObjectEncoder",
    "ObjectMarshaler",
]
