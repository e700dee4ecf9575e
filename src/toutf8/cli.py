"""Command-line interface for toutf8."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import toutf8
from toutf8.errors import CharsetError


def _read(filepath: str | None) -> bytes:
    if filepath is None:
        return sys.stdin.buffer.read()
    with Path(filepath).open("rb") as f:
        return f.read()


def _report(label: str, data: bytes, args: argparse.Namespace) -> None:
    results = toutf8.detect_all(data)
    if not args.all:
        results = results[:1]
    if not results:
        print(f"{label}: no result")
        return
    for result in results:
        if args.minimal:
            print(result.charset)
        else:
            print(
                f"{label}: {result.charset} with confidence {result.confidence}"
            )


def _convert(data: bytes, args: argparse.Namespace) -> bytes:
    if args.from_charset:
        return toutf8.to_utf8_with_charset_name(data, args.from_charset)
    converted, _ = toutf8.detect_and_convert_to_utf8(data)
    return converted


def main(argv: list[str] | None = None) -> int:
    """Run the ``toutf8`` command-line tool.

    :param argv: Command-line arguments.  Defaults to ``sys.argv[1:]``.
    :returns: The process exit status.
    """
    parser = argparse.ArgumentParser(
        description="Convert files of unknown character encoding to UTF-8."
    )
    parser.add_argument("files", nargs="*", help="Files to convert (default: stdin)")
    parser.add_argument(
        "-f",
        "--from",
        dest="from_charset",
        metavar="CHARSET",
        help="Convert from CHARSET instead of detecting it",
    )
    parser.add_argument(
        "-o", "--output", help="Write the result to OUTPUT (single input only)"
    )
    parser.add_argument(
        "--detect", action="store_true", help="Only report the detected charset"
    )
    parser.add_argument(
        "--all", action="store_true", help="With --detect, report every candidate"
    )
    parser.add_argument(
        "--minimal", action="store_true", help="With --detect, print only the name"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug information"
    )
    parser.add_argument(
        "--version", action="version", version=f"toutf8 {toutf8.__version__}"
    )

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    if args.output and len(args.files) > 1:
        parser.error("--output takes a single input file")

    status = 0
    for filepath in args.files or [None]:
        label = filepath or "stdin"
        try:
            data = _read(filepath)
            if args.detect:
                _report(label, data, args)
                continue
            converted = _convert(data, args)
        except (OSError, CharsetError) as e:
            print(f"toutf8: {label}: {e}", file=sys.stderr)
            status = 1
            continue
        if args.output:
            Path(args.output).write_bytes(converted)
        else:
            sys.stdout.buffer.write(converted)
            sys.stdout.buffer.flush()
    return status


if __name__ == "__main__":
    sys.exit(main())
