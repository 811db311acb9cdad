"""Password protected keystore persisted to a single file."""

from __future__ import annotations

import base64
import binascii
import json
import logging
import os
import secrets
from pathlib import Path
from typing_extensions import override

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from .errors import KeyDoesNotExistError, KeystoreDecryptError, KeystoreVersionError
from .protocol import ListingKeystore
from .secure_string import SecureString


_logger = logging.getLogger(__name__)

VERSION = "v2"
SALT_LENGTH = 64
IV_LENGTH = 12
ITERATIONS = 10000
KEY_LENGTH = 32
FILE_MODE = 0o600


def _derive_key(password: bytes, salt: bytes) -> bytes:
    kdf = PBKDF2HMAC(algorithm=hashes.SHA512(), length=KEY_LENGTH, salt=salt, iterations=ITERATIONS)
    return kdf.derive(password)


class FileKeystore(ListingKeystore):
    """Keystore encrypted with a password-derived AES-256-GCM key.

    The file holds the two character format tag followed by the base64 of
    ``salt || iv || ciphertext``. A missing or empty file is an empty
    keystore that is created on :meth:`save`.
    """

    def __init__(self, path: str | os.PathLike[str], password: SecureString | str | bytes) -> None:
        """Open the keystore at ``path``.

        Raises
        ------
        KeystoreVersionError
            The file was written in another format version.
        KeystoreDecryptError
            The file is corrupted or the password is wrong.
        """
        super().__init__()
        self._path = Path(path)
        self._password = password if isinstance(password, SecureString) else SecureString(password)
        self._secrets: dict[str, SecureString] = {}
        self._persisted = False
        self._load()

    @property
    def path(self) -> Path:
        """Location of the keystore file."""
        return self._path

    def _load(self) -> None:
        if not self._path.exists():
            _logger.debug("keystore %s does not exist yet", self._path)
            return

        raw = self._path.read_bytes().strip()
        if not raw:
            _logger.debug("keystore %s is empty", self._path)
            return

        found = raw[: len(VERSION)].decode(errors="replace")
        if found != VERSION:
            raise KeystoreVersionError(VERSION, found)

        self._secrets = self._decrypt(raw[len(VERSION) :])
        self._persisted = True
        _logger.debug("loaded keystore %s with %d secrets", self._path, len(self._secrets))

    def _decrypt(self, encoded: bytes) -> dict[str, SecureString]:
        try:
            blob = base64.b64decode(encoded, validate=True)
        except binascii.Error as error:
            msg = f"keystore {self._path} is not valid base64"
            raise KeystoreDecryptError(msg) from error

        if len(blob) <= SALT_LENGTH + IV_LENGTH:
            msg = f"keystore {self._path} is too short"
            raise KeystoreDecryptError(msg)

        salt = blob[:SALT_LENGTH]
        iv = blob[SALT_LENGTH : SALT_LENGTH + IV_LENGTH]
        ciphertext = blob[SALT_LENGTH + IV_LENGTH :]
        try:
            plaintext = AESGCM(_derive_key(self._password.get(), salt)).decrypt(iv, ciphertext, None)
        except InvalidTag as error:
            msg = f"could not decrypt keystore {self._path}, check the password"
            raise KeystoreDecryptError(msg) from error

        try:
            entries = json.loads(plaintext)
            return {name: SecureString(base64.b64decode(entry["value"])) for name, entry in entries.items()}
        except (ValueError, KeyError, TypeError, AttributeError) as error:
            msg = f"keystore {self._path} content is malformed"
            raise KeystoreDecryptError(msg) from error

    def _encrypt(self) -> bytes:
        entries = {name: {"value": base64.b64encode(value.get()).decode()} for name, value in self._secrets.items()}
        salt = secrets.token_bytes(SALT_LENGTH)
        iv = secrets.token_bytes(IV_LENGTH)
        ciphertext = AESGCM(_derive_key(self._password.get(), salt)).encrypt(iv, json.dumps(entries).encode(), None)
        return VERSION.encode() + base64.b64encode(salt + iv + ciphertext)

    @override
    def retrieve(self, key: str) -> SecureString:
        """Return the secret stored under key."""
        try:
            return self._secrets[key]
        except KeyError:
            msg = f"key {key!r} does not exist in the keystore"
            raise KeyDoesNotExistError(msg) from None

    @override
    def store(self, key: str, value: SecureString) -> None:
        """Add or replace the secret stored under key."""
        if not key:
            msg = "key must not be empty"
            raise ValueError(msg)
        self._secrets[key] = value

    @override
    def delete(self, key: str) -> None:
        """Remove the secret stored under key if present."""
        _ = self._secrets.pop(key, None)

    @override
    def save(self) -> None:
        """Encrypt and atomically write the keystore with owner-only permissions."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_name(f".{self._path.name}.tmp")
        fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
        try:
            with os.fdopen(fd, "wb") as handle:
                _ = handle.write(self._encrypt())
            os.replace(tmp, self._path)
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise
        self._persisted = True
        _logger.debug("saved keystore %s with %d secrets", self._path, len(self._secrets))

    @override
    def is_persisted(self) -> bool:
        """Return True when the keystore file has been read or written."""
        return self._persisted

    @override
    def list(self) -> list[str]:
        """Return the names of all stored secrets in sorted order."""
        return sorted(self._secrets)


def open_keystore(path: str | os.PathLike[str], password: SecureString | str | bytes) -> FileKeystore:
    """Open the file keystore at ``path`` with ``password``."""
    return FileKeystore(path, password)
