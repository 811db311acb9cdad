"""Password protected secret stores."""

from .errors import KeyDoesNotExistError, KeystoreDecryptError, KeystoreError, KeystoreVersionError
from .file import VERSION, FileKeystore, open_keystore
from .protocol import Keystore, ListingKeystore, as_listing_keystore
from .secure_string import SecureString


__all__ = [
    "VERSION",
    "FileKeystore",
    "KeyDoesNotExistError",
    "Keystore",
    "KeystoreDecryptError",
    "KeystoreError",
    "KeystoreVersionError",
    "ListingKeystore",
    "SecureString",
    "as_listing_keystore",
    "open_keystore",
]
