"""Interface for ``python -m mapstr``."""

from __future__ import annotations

import json
import sys
from argparse import ArgumentParser, FileType
from typing import TYPE_CHECKING, Any, TextIO

from ._version import version
from .errors import MapStrError
from .logobject import MaskedMap
from .mapping import M
from .redaction import LoggingMask


if TYPE_CHECKING:
    from collections.abc import Sequence


__all__ = ["main"]


def _load(stream: TextIO) -> M:
    data = json.load(stream)
    if not isinstance(data, dict):
        msg = f"expected a JSON object, got {type(data).__name__}"
        raise TypeError(msg)
    return M(data)


def _dump(value: Any) -> str:
    if isinstance(value, dict):
        return M(value).string_to_print()
    return json.dumps(value)


def _build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="mapstr", description="Inspect JSON documents as nested maps.")
    _ = parser.add_argument("-v", "--version", action="version", version=version)
    commands = parser.add_subparsers(dest="command")

    get = commands.add_parser("get", help="print the value at a dotted path")
    _ = get.add_argument("file", type=FileType("r"), help="JSON document, '-' for stdin")
    _ = get.add_argument("path", help="dotted path, e.g. host.name")
    _ = get.add_argument("-i", "--ignore-case", action="store_true", help="match path segments case-insensitively")

    flatten = commands.add_parser("flatten", help="print the document keyed by dotted leaf paths")
    _ = flatten.add_argument("file", type=FileType("r"), help="JSON document, '-' for stdin")

    keys = commands.add_parser("keys", help="list every dotted path, intermediate maps included")
    _ = keys.add_argument("file", type=FileType("r"), help="JSON document, '-' for stdin")

    show = commands.add_parser("print", help="pretty print the document")
    _ = show.add_argument("file", type=FileType("r"), help="JSON document, '-' for stdin")
    _ = show.add_argument("--mask", action="store_true", help="mask sensitive keys (see MAPSTR_MASK_*)")

    return parser


def main(args: Sequence[str] | None = None) -> int:
    """Argument parser for the CLI."""
    parser = _build_parser()
    options = parser.parse_args(args)
    if options.command is None:
        parser.print_help()
        return 0

    try:
        with options.file as stream:
            document = _load(stream)

        match options.command:
            case "get":
                if options.ignore_case:
                    _, value = document.find_fold(options.path)
                else:
                    value = document.get_value(options.path)
                print(_dump(value))
            case "flatten":
                print(document.flatten().string_to_print())
            case "keys":
                for key in sorted(document.flatten_keys()):
                    print(key)
            case "print":
                if options.mask:
                    document = MaskedMap(document, LoggingMask.from_env()).masked()
                print(document.string_to_print())
    except (MapStrError, TypeError, ValueError) as error:
        print(f"mapstr: {error}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
