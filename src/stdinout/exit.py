# SPDX-License-Identifier: Apache-2.0
"""Fail-fast helpers for command-line front ends.

Each helper either hands back a successful value untouched or writes a single
diagnostic line to stderr and ends the process with the given status. There
is no recovery and no logging; callers that want to handle errors themselves
simply catch the exception instead of using these.
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import Callable, Iterator, NoReturn, TypeVar

T = TypeVar("T")

DEFAULT_CATCH: tuple[type[BaseException], ...] = (OSError,)


def _die(line: str, status: int) -> NoReturn:
    sys.stderr.write(line + "\n")
    sys.stderr.flush()
    raise SystemExit(status)


def or_exit(value: T | None, message: str, status: int = 1) -> T:
    """Return ``value`` unless it is None; otherwise print ``message`` and exit.

    The diagnostic is exactly ``message`` followed by a newline.
    """
    if value is None:
        _die(message, status)
    return value


def ok_or_exit(
    func: Callable[[], T],
    message: str,
    status: int = 1,
    *,
    catch: tuple[type[BaseException], ...] = DEFAULT_CATCH,
) -> T:
    """Call ``func`` and return its result, exiting on a caught failure.

    When ``func`` raises one of ``catch`` the line ``"<message>: <error>"`` is
    written to stderr and the process exits with ``status``. Other exceptions
    propagate unchanged.

    Example::

        reader = ok_or_exit(source.open_for_read, "Cannot open input", 2)
    """
    try:
        return func()
    except catch as exc:
        _die(f"{message}: {exc}", status)


@contextmanager
def exit_on_error(
    message: str,
    status: int = 1,
    *,
    catch: tuple[type[BaseException], ...] = DEFAULT_CATCH,
) -> Iterator[None]:
    """Context-manager form of :func:`ok_or_exit` for a block of statements."""
    try:
        yield
    except catch as exc:
        _die(f"{message}: {exc}", status)
