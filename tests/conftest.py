# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import io
import logging
import os
import shutil
import sys
import tempfile
from pathlib import Path
from types import SimpleNamespace
from typing import Iterator

import pytest


@pytest.fixture(autouse=True)
def _isolate_stdinout_env(monkeypatch: pytest.MonkeyPatch):
    """Keep host settings and ``.env`` files out of the tests."""
    for key in list(os.environ):
        if key.startswith("STDINOUT_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("STDINOUT_SKIP_DOTENV", "1")


@pytest.fixture
def fake_stdin(monkeypatch: pytest.MonkeyPatch):
    """Return a function that replaces ``sys.stdin`` with the given bytes."""

    def _install(data: bytes) -> io.BytesIO:
        buf = io.BytesIO(data)
        monkeypatch.setattr(sys, "stdin", SimpleNamespace(buffer=buf))
        return buf

    return _install


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """Undo ``logging.basicConfig(force=True)`` calls made by CLI handlers."""
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def shared_tmp() -> Iterator[Path]:
    """A temporary directory other users can traverse (mode 0755)."""
    path = Path(tempfile.mkdtemp(prefix="stdinout-"))
    path.chmod(0o755)
    try:
        yield path
    finally:
        for child in path.rglob("*"):
            child.chmod(0o700)
        shutil.rmtree(path)
