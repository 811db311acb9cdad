"""Minimal example for the file keystore."""

import tempfile
from pathlib import Path

from mapstr.keystore import SecureString, as_listing_keystore, open_keystore


def main() -> None:
    """Create a keystore, persist a secret and list it after reopening."""
    with tempfile.TemporaryDirectory() as directory:
        path = Path(directory) / "app.keystore"

        store = open_keystore(path, "changeme")
        store.store("es.password", SecureString("s3cret"))
        store.save()

        reopened = as_listing_keystore(open_keystore(path, "changeme"))
        print("keys:", reopened.list())
        print("value:", reopened.retrieve("es.password"))


if __name__ == "__main__":
    main()
