# SPDX-License-Identifier: Apache-2.0
"""Treat an optional file path and the standard streams uniformly.

>>> from stdinout import or_stdin
>>> source = or_stdin(None)
>>> source.is_standard
True
"""

from stdinout.exit import exit_on_error, ok_or_exit, or_exit
from stdinout.sources import (
    InputReader,
    InputSource,
    OutputSource,
    OutputWriter,
    SourceKind,
    open_input,
    open_output,
    or_stdin,
    or_stdout,
)

__all__ = [
    "InputReader",
    "InputSource",
    "OutputSource",
    "OutputWriter",
    "SourceKind",
    "exit_on_error",
    "ok_or_exit",
    "open_input",
    "open_output",
    "or_exit",
    "or_stdin",
    "or_stdout",
]
