import os
from pathlib import Path

import pytest

from mapstr.keystore import (
    VERSION,
    FileKeystore,
    KeyDoesNotExistError,
    Keystore,
    KeystoreDecryptError,
    KeystoreError,
    KeystoreVersionError,
    SecureString,
    as_listing_keystore,
    open_keystore,
)


_V1_KEYSTORE = (
    "v1pqH8nRJNCuKLrAHwATQuHpdLcP84sATrxtKMWTvapZTRcoEODVJKf2dsHXiOhSMh1EFrJTikON2oF5wZv4IM37lkJ6wt79MCFaXDqlNxBQ"
    "tIA9w6vaxWnbS+92rQqtka7WrzTxal1Pd3mcK0o+ow7EAJg553UvxBqA=="
)


class _WriteOnlyKeystore(Keystore):
    def retrieve(self, key: str) -> SecureString:
        raise KeyDoesNotExistError(key)

    def store(self, key: str, value: SecureString) -> None:
        return

    def delete(self, key: str) -> None:
        return

    def save(self) -> None:
        return

    def is_persisted(self) -> bool:
        return False


@pytest.fixture
def keystore_path(tmp_path: Path) -> Path:
    return tmp_path / "test.keystore"


def test_raises_when_version_does_not_match(keystore_path: Path) -> None:
    _ = keystore_path.write_text(_V1_KEYSTORE)

    with pytest.raises(KeystoreVersionError) as excinfo:
        _ = open_keystore(keystore_path, SecureString(b""))

    assert str(excinfo.value) == "keystore format doesn't match expected version: 'v2' got 'v1'"
    assert excinfo.value.expected == "v2"
    assert excinfo.value.found == "v1"
    assert isinstance(excinfo.value, KeystoreError)


def test_opens_v2(keystore_path: Path) -> None:
    store = open_keystore(keystore_path, SecureString(b""))
    store.store("key", SecureString(b"value"))
    store.save()
    assert keystore_path.read_bytes().startswith(VERSION.encode())

    reopened = open_keystore(keystore_path, SecureString(b""))
    listing = as_listing_keystore(reopened)
    keys = listing.list()
    assert len(keys) == 1
    assert keys[0] == "key"
    assert listing.retrieve("key").get() == b"value"
    assert listing.is_persisted()


def test_missing_file_is_an_empty_unpersisted_keystore(keystore_path: Path) -> None:
    store = FileKeystore(keystore_path, "password")
    assert store.list() == []
    assert not store.is_persisted()
    assert not keystore_path.exists()


def test_save_restricts_permissions(keystore_path: Path) -> None:
    store = open_keystore(keystore_path, "password")
    store.store("a", SecureString("1"))
    store.save()
    assert keystore_path.stat().st_mode & 0o777 == 0o600
    assert store.is_persisted()


def test_failed_save_removes_temporary_file(keystore_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def fail(*_args: object) -> None:
        msg = "disk full"
        raise OSError(msg)

    store = open_keystore(keystore_path, "password")
    store.store("a", SecureString("1"))
    monkeypatch.setattr(os, "replace", fail)

    with pytest.raises(OSError, match="disk full"):
        store.save()

    assert list(keystore_path.parent.iterdir()) == []
    assert not store.is_persisted()


def test_round_trip_multiple_secrets_and_delete(keystore_path: Path) -> None:
    store = open_keystore(keystore_path, "password")
    store.store("b", SecureString("2"))
    store.store("a", SecureString(b"\x00\xff"))
    store.store("c", SecureString("3"))
    store.delete("c")
    store.delete("never-stored")
    store.save()

    reopened = open_keystore(keystore_path, "password")
    assert reopened.list() == ["a", "b"]
    assert reopened.retrieve("a") == SecureString(b"\x00\xff")


def test_wrong_password_fails_to_decrypt(keystore_path: Path) -> None:
    store = open_keystore(keystore_path, "right")
    store.store("key", SecureString("value"))
    store.save()

    with pytest.raises(KeystoreDecryptError, match="check the password"):
        _ = open_keystore(keystore_path, "wrong")


@pytest.mark.parametrize("content", ["v2!!not base64!!", "v2AAAA"])
def test_corrupted_keystore_fails_to_open(keystore_path: Path, content: str) -> None:
    _ = keystore_path.write_text(content)
    with pytest.raises(KeystoreDecryptError):
        _ = open_keystore(keystore_path, "")


def test_retrieve_missing_key(keystore_path: Path) -> None:
    store = open_keystore(keystore_path, "")
    with pytest.raises(KeyDoesNotExistError, match="key 'missing' does not exist in the keystore"):
        _ = store.retrieve("missing")
    with pytest.raises(KeyError):
        _ = store.retrieve("missing")


def test_store_rejects_empty_key(keystore_path: Path) -> None:
    with pytest.raises(ValueError, match="key must not be empty"):
        open_keystore(keystore_path, "").store("", SecureString("x"))


def test_as_listing_keystore_rejects_non_listing_store() -> None:
    with pytest.raises(KeystoreError, match="does not support listing"):
        _ = as_listing_keystore(_WriteOnlyKeystore())


def test_secure_string_hides_its_value() -> None:
    secret = SecureString("hunter2")
    assert "hunter2" not in repr(secret)
    assert "hunter2" not in str(secret)
    assert secret.get() == b"hunter2"
    assert secret == SecureString(b"hunter2")
