"""Masking policy applied to maps before they are logged."""

from __future__ import annotations

from typing import Any

import pydantic
import pydantic_settings

from .values import ValueKind, kind_of


DEFAULT_MASKED_KEYS = (
    "password",
    "passphrase",
    "key_passphrase",
    "pass",
    "proxy_url",
    "url",
    "urls",
    "host",
    "hosts",
    "authorization",
    "proxy-authorization",
)


class MaskSettings(pydantic_settings.BaseSettings):
    """Which keys are masked and how.

    Read from ``MAPSTR_MASK_*`` environment variables, e.g.
    ``MAPSTR_MASK_KEYS='["password", "token"]'``.
    """

    model_config = pydantic_settings.SettingsConfigDict(env_prefix="MAPSTR_MASK_", extra="ignore")

    keys: list[str] = pydantic.Field(default_factory=lambda: list(DEFAULT_MASKED_KEYS))
    replacement: str = "xxxxx"
    case_insensitive: bool = True

    @pydantic.field_validator("keys")
    @classmethod
    def _reject_empty_keys(cls, value: list[str]) -> list[str]:
        if any(not key for key in value):
            msg = "masked keys must not be empty"
            raise ValueError(msg)
        return value


class LoggingMask:
    """Replace the values of sensitive keys in a map, in place.

    Nested maps are masked recursively, including maps held at any depth of
    a list or tuple. Only keys that are present are touched.
    """

    def __init__(self, settings: MaskSettings | None = None) -> None:
        super().__init__()
        self.settings = settings if settings is not None else MaskSettings()
        if self.settings.case_insensitive:
            self._keys = frozenset(key.casefold() for key in self.settings.keys)
        else:
            self._keys = frozenset(self.settings.keys)

    @classmethod
    def from_env(cls) -> LoggingMask:
        """Build a mask from ``MAPSTR_MASK_*`` environment variables."""
        return cls(MaskSettings())

    def is_masked(self, key: str) -> bool:
        """Return True when values stored under ``key`` are replaced."""
        if self.settings.case_insensitive:
            return key.casefold() in self._keys
        return key in self._keys

    def __call__(self, data: dict[str, Any]) -> None:
        for key, value in data.items():
            if self.is_masked(key):
                data[key] = self.settings.replacement
                continue
            self._mask_value(value)

    def _mask_value(self, value: Any) -> None:
        match kind_of(value):
            case ValueKind.MAP:
                self(value)
            case ValueKind.MAP_SEQUENCE | ValueKind.SEQUENCE:
                for item in value:
                    self._mask_value(item)
            case _:
                pass
