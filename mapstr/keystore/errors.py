"""Keystore exceptions."""

from __future__ import annotations

from typing_extensions import override


class KeystoreError(Exception):
    """Base class for keystore failures."""


class KeystoreVersionError(KeystoreError):
    """The persisted format tag is not the supported one."""

    def __init__(self, expected: str, found: str) -> None:
        super().__init__(f"keystore format doesn't match expected version: '{expected}' got '{found}'")
        self.expected = expected
        self.found = found


class KeystoreDecryptError(KeystoreError):
    """The keystore content could not be decrypted or decoded."""


class KeyDoesNotExistError(KeystoreError, KeyError):
    """The requested secret is not in the keystore."""

    @override
    def __str__(self) -> str:
        return Exception.__str__(self)
