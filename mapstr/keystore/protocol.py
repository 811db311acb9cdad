"""Keystore interface definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .errors import KeystoreError


if TYPE_CHECKING:
    from .secure_string import SecureString


class Keystore(ABC):
    """Store of named secrets."""

    @abstractmethod
    def retrieve(self, key: str) -> SecureString:
        """Return the secret stored under key; raise KeyDoesNotExistError if missing."""

    @abstractmethod
    def store(self, key: str, value: SecureString) -> None:
        """Add or replace the secret stored under key."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove the secret stored under key if present."""

    @abstractmethod
    def save(self) -> None:
        """Persist pending changes."""

    @abstractmethod
    def is_persisted(self) -> bool:
        """Return True when the keystore exists in its backing storage."""


class ListingKeystore(Keystore):
    """Keystore able to enumerate its secret names."""

    @abstractmethod
    def list(self) -> list[str]:
        """Return the names of all stored secrets in sorted order."""


def as_listing_keystore(store: Keystore) -> ListingKeystore:
    """Return ``store`` as a :class:`ListingKeystore` or raise KeystoreError."""
    if not isinstance(store, ListingKeystore):
        msg = "the keystore does not support listing"
        raise KeystoreError(msg)
    return store
