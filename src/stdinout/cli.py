# SPDX-License-Identifier: Apache-2.0
"""Small reference CLI built on :mod:`stdinout`.

Usage::

    python -m stdinout cat [INPUT] [-o OUTPUT] [--number]
    python -m stdinout count [INPUT]

``INPUT``/``OUTPUT`` default to stdin/stdout; ``-`` selects them explicitly.
"""

from __future__ import annotations

import argparse
import logging

from stdinout.exit import exit_on_error, ok_or_exit
from stdinout.sources import InputSource, OutputSource
from stdinout.utils.cli_helpers import (
    apply_verbosity_flags,
    configure_logging_from_env,
    load_dotenv_from_env,
)

OPEN_FAILURE_STATUS = 2
_CHUNK_SIZE = 64 * 1024


def _setup(ns: argparse.Namespace) -> None:
    load_dotenv_from_env()
    apply_verbosity_flags(
        verbose=getattr(ns, "verbose", False), quiet=getattr(ns, "quiet", False)
    )
    configure_logging_from_env()


def _cmd_cat(ns: argparse.Namespace) -> int:
    """CLI: copy input to output, optionally numbering lines."""
    _setup(ns)
    source = InputSource.from_arg(ns.input)
    sink = OutputSource.from_arg(ns.output)
    reader = ok_or_exit(
        source.open_for_read, "Cannot open input", OPEN_FAILURE_STATUS
    )
    writer = ok_or_exit(
        lambda: sink.open_for_write(make_parents=True if ns.mkdirs else None),
        "Cannot open output",
        OPEN_FAILURE_STATUS,
    )
    with reader, writer, exit_on_error(
        "Copy failed", catch=(OSError, UnicodeDecodeError)
    ):
        if ns.number:
            for idx, line in enumerate(reader.lines(), start=1):
                writer.write(f"{idx}\t{line}\n".encode())
        else:
            buf = bytearray(_CHUNK_SIZE)
            while True:
                n = reader.readinto(buf)
                if not n:
                    break
                writer.write(bytes(buf[:n]))
    logging.debug("copied %s -> %s", source, sink)
    return 0


def _cmd_count(ns: argparse.Namespace) -> int:
    """CLI: print the number of lines in the input."""
    _setup(ns)
    source = InputSource.from_arg(ns.input)
    reader = ok_or_exit(
        source.open_for_read, "Cannot open input", OPEN_FAILURE_STATUS
    )
    with reader, exit_on_error("Read failed"):
        total = sum(1 for _ in reader)
    print(total)
    return 0


def _add_common_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "-v", "--verbose", action="store_true", help="Verbose logging to stderr"
    )
    p.add_argument("--quiet", action="store_true", help="Only log errors")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stdinout",
        description="Read from a file or stdin, write to a file or stdout.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_cat = sub.add_parser("cat", help="Copy INPUT to OUTPUT")
    p_cat.add_argument(
        "input", nargs="?", default=None, help="Input path (default: stdin)"
    )
    p_cat.add_argument(
        "-o", "--output", default=None, help="Output path (default: stdout)"
    )
    p_cat.add_argument(
        "-n", "--number", action="store_true", help="Prefix lines with their number"
    )
    p_cat.add_argument(
        "--mkdirs",
        action="store_true",
        help="Create missing parent directories for OUTPUT",
    )
    _add_common_flags(p_cat)
    p_cat.set_defaults(func=_cmd_cat)

    p_count = sub.add_parser("count", help="Count lines in INPUT")
    p_count.add_argument(
        "input", nargs="?", default=None, help="Input path (default: stdin)"
    )
    _add_common_flags(p_count)
    p_count.set_defaults(func=_cmd_count)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    return int(ns.func(ns))


if __name__ == "__main__":  # pragma: no cover - exercised in CLI tests
    raise SystemExit(main())
