# SPDX-License-Identifier: Apache-2.0
"""Select between a named file and the process's standard streams.

Command-line tools commonly accept an optional path and fall back to stdin or
stdout when it is omitted. :class:`InputSource` and :class:`OutputSource`
make that choice once, at construction, and hand out binary handles on
demand::

    source = InputSource.from_path(ns.input)
    with source.open_for_read() as reader:
        for line in reader.lines():
            ...

Construction never touches the filesystem. Opening a named file raises the
``OSError`` produced by the OS layer (``FileNotFoundError``,
``PermissionError``, ...) unchanged. Closing a handle over a standard stream
never closes the process stream itself.
"""

from __future__ import annotations

import enum
import io
import logging
import os
import sys
import threading
from contextlib import contextmanager, nullcontext
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterable, Iterator, Union

from stdinout.utils.env import env_bool

LOGGER = logging.getLogger(__name__)

PathArg = Union[str, bytes, "os.PathLike[str]", "os.PathLike[bytes]"]

# Standard streams are shared by every handle in the process; each call on a
# standard-stream handle holds the matching lock for its duration only.
_STDIN_LOCK = threading.Lock()
_STDOUT_LOCK = threading.Lock()


class SourceKind(enum.Enum):
    """Which side of the selection a source resolved to."""

    STANDARD = "standard"
    FILE = "file"


def _is_dash(value: object) -> bool:
    return value in ("", "-", b"", b"-")


def _strip_terminator(line: bytes) -> bytes:
    if line.endswith(b"\n"):
        line = line[:-1]
        if line.endswith(b"\r"):
            line = line[:-1]
    return line


class _DiscardSink(io.RawIOBase):
    """Write target used when the process has no stdout; accepts and drops bytes."""

    def writable(self) -> bool:
        return True

    def write(self, data) -> int:
        return len(memoryview(data))


# A process started with fd 0 or 1 closed gets sys.stdin/sys.stdout set to
# None. Closed stdin reads as end of stream; closed stdout discards writes.
def _stdin_buffer() -> BinaryIO:
    stream = sys.stdin
    if stream is None:
        return io.BytesIO()
    return stream.buffer


def _stdout_buffer() -> BinaryIO:
    stream = sys.stdout
    if stream is None:
        return _DiscardSink()
    return stream.buffer


def _describe(path: str | bytes | None) -> str:
    if path is None:
        return "<standard stream>"
    return os.fsdecode(path)


@dataclass(frozen=True)
class InputSource:
    """A readable source: the named file at ``path`` or standard input.

    ``path is None`` selects standard input; anything else selects the file.
    Use :meth:`from_path` or :meth:`from_arg` rather than the constructor so
    path-like values are normalized.
    """

    path: str | bytes | None = None

    @classmethod
    def from_path(cls, path: PathArg | None = None) -> InputSource:
        """Select the file at ``path``, or standard input when ``path`` is None."""
        return cls(None if path is None else os.fspath(path))

    @classmethod
    def from_arg(cls, value: PathArg | None) -> InputSource:
        """Like :meth:`from_path` but also maps ``""`` and ``"-"`` to stdin."""
        if value is None or _is_dash(value):
            return cls(None)
        return cls.from_path(value)

    @property
    def kind(self) -> SourceKind:
        return SourceKind.STANDARD if self.path is None else SourceKind.FILE

    @property
    def is_standard(self) -> bool:
        return self.path is None

    def open_for_read(self) -> InputReader:
        """Return a buffered binary reader over this source.

        Standard input always succeeds; when the process has no stdin the
        reader is at end of stream. A named file is reopened from scratch on
        every call; failures propagate as ``OSError``.
        """
        if self.path is None:
            LOGGER.debug("reading from standard input")
            return InputReader(self, _stdin_buffer(), owned=False)
        LOGGER.debug("opening %s for reading", _describe(self.path))
        return InputReader(self, open(self.path, "rb"), owned=True)

    def __str__(self) -> str:
        return "-" if self.path is None else _describe(self.path)


@dataclass(frozen=True)
class OutputSource:
    """A writable sink: the named file at ``path`` or standard output."""

    path: str | bytes | None = None

    @classmethod
    def from_path(cls, path: PathArg | None = None) -> OutputSource:
        """Select the file at ``path``, or standard output when ``path`` is None."""
        return cls(None if path is None else os.fspath(path))

    @classmethod
    def from_arg(cls, value: PathArg | None) -> OutputSource:
        """Like :meth:`from_path` but also maps ``""`` and ``"-"`` to stdout."""
        if value is None or _is_dash(value):
            return cls(None)
        return cls.from_path(value)

    @property
    def kind(self) -> SourceKind:
        return SourceKind.STANDARD if self.path is None else SourceKind.FILE

    @property
    def is_standard(self) -> bool:
        return self.path is None

    def open_for_write(self, *, make_parents: bool | None = None) -> OutputWriter:
        """Return a binary writer over this sink.

        Standard output always succeeds; without a process stdout the writes
        are discarded. A named file is created, or truncated
        when it exists, on every call. ``make_parents`` creates missing parent
        directories first; it defaults to the ``STDINOUT_MAKE_PARENTS`` setting.
        """
        if self.path is None:
            LOGGER.debug("writing to standard output")
            return OutputWriter(self, _stdout_buffer(), owned=False)
        if make_parents is None:
            make_parents = env_bool("MAKE_PARENTS", False)
        if make_parents:
            parent = Path(os.fsdecode(self.path)).parent
            if not parent.exists():
                LOGGER.debug("creating parent directory %s", parent)
                parent.mkdir(parents=True, exist_ok=True)
        LOGGER.debug("opening %s for writing", _describe(self.path))
        return OutputWriter(self, open(self.path, "wb"), owned=True)

    def __str__(self) -> str:
        return "-" if self.path is None else _describe(self.path)


class InputReader:
    """Buffered binary reader produced by :meth:`InputSource.open_for_read`.

    Supports chunked reads (:meth:`read`, :meth:`readinto`), raw byte lines
    (:meth:`readline`, iteration) and decoded text lines (:meth:`lines`).
    """

    def __init__(self, source: InputSource, stream: BinaryIO, *, owned: bool):
        self.source = source
        self._stream = stream
        self._owned = owned
        self._closed = False
        self._guard = nullcontext() if owned else _STDIN_LOCK

    @property
    def name(self) -> str:
        return str(self.source)

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("I/O operation on closed reader")

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes; ``b""`` signals end of stream."""
        self._check_open()
        with self._guard:
            return self._stream.read(size)

    def readinto(self, buffer) -> int:
        """Fill ``buffer`` from the stream and return the count; 0 at end."""
        self._check_open()
        with self._guard:
            readinto = getattr(self._stream, "readinto", None)
            if readinto is not None:
                return readinto(buffer)
            view = memoryview(buffer).cast("B")
            data = self._stream.read(len(view))
            view[: len(data)] = data
            return len(data)

    def readline(self) -> bytes:
        """Read one line including its terminator; ``b""`` at end of stream."""
        self._check_open()
        with self._guard:
            return self._stream.readline()

    def __iter__(self) -> Iterator[bytes]:
        while True:
            line = self.readline()
            if not line:
                return
            yield line

    def lines(self, encoding: str = "utf-8", errors: str = "strict") -> Iterator[str]:
        """Yield decoded lines with ``\\n`` or ``\\r\\n`` stripped.

        The generator is lazy and single-pass: it consumes the reader as it
        goes. A final line without a terminator is still yielded.
        """
        for raw in self:
            yield _strip_terminator(raw).decode(encoding, errors)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owned:
            self._stream.close()

    def __enter__(self) -> InputReader:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<InputReader {self.name!r}{' closed' if self._closed else ''}>"


class OutputWriter:
    """Binary writer produced by :meth:`OutputSource.open_for_write`."""

    def __init__(self, source: OutputSource, stream: BinaryIO, *, owned: bool):
        self.source = source
        self._stream = stream
        self._owned = owned
        self._closed = False
        self._guard = nullcontext() if owned else _STDOUT_LOCK

    @property
    def name(self) -> str:
        return str(self.source)

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("I/O operation on closed writer")

    def write(self, data: bytes) -> int:
        self._check_open()
        with self._guard:
            written = self._stream.write(data)
        return len(data) if written is None else written

    def writelines(self, lines: Iterable[bytes]) -> None:
        for line in lines:
            self.write(line)

    def flush(self) -> None:
        self._check_open()
        with self._guard:
            self._stream.flush()

    def close(self) -> None:
        """Flush and release the writer; standard output stays open."""
        if self._closed:
            return
        try:
            self.flush()
        finally:
            self._closed = True
            if self._owned:
                self._stream.close()

    def __enter__(self) -> OutputWriter:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<OutputWriter {self.name!r}{' closed' if self._closed else ''}>"


def or_stdin(path: PathArg | None = None) -> InputSource:
    """Shorthand for :meth:`InputSource.from_path`."""
    return InputSource.from_path(path)


def or_stdout(path: PathArg | None = None) -> OutputSource:
    """Shorthand for :meth:`OutputSource.from_path`."""
    return OutputSource.from_path(path)


@contextmanager
def open_input(path: PathArg | None = None) -> Iterator[InputReader]:
    """Yield a reader for ``path``, or stdin when None, without closing stdin."""
    with InputSource.from_path(path).open_for_read() as reader:
        yield reader


@contextmanager
def open_output(
    path: PathArg | None = None, *, make_parents: bool | None = None
) -> Iterator[OutputWriter]:
    """Yield a writer for ``path``, or stdout when None, without closing stdout."""
    sink = OutputSource.from_path(path)
    with sink.open_for_write(make_parents=make_parents) as writer:
        yield writer
