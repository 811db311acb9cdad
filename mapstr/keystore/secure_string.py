"""Wrapper keeping secret bytes out of reprs and logs."""

from __future__ import annotations

from typing_extensions import override


class SecureString:
    """Secret value that never renders its content."""

    __slots__ = ("_value",)

    def __init__(self, value: bytes | str) -> None:
        super().__init__()
        self._value = value.encode() if isinstance(value, str) else bytes(value)

    def get(self) -> bytes:
        """Return the secret bytes."""
        return self._value

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SecureString):
            return NotImplemented
        return self._value == other._value

    @override
    def __hash__(self) -> int:
        return hash(self._value)

    @override
    def __repr__(self) -> str:
        return "SecureString(<redacted>)"

    @override
    def __str__(self) -> str:
        return "<redacted>"
