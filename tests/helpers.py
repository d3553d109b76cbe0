from __future__ import annotations

import os
import subprocess
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import pytest


def project_root(start: Path | None = None) -> Path:
    """Return the repository root by walking up to find pyproject.toml.

    Falls back to the topmost parent if no anchor is found.
    """
    here = (start or Path(__file__)).resolve()
    for anc in [here, *here.parents]:
        if (anc / "pyproject.toml").exists():
            return anc
    return here.parents[-1] if here.parents else here


def subprocess_env(**extra: str) -> dict[str, str]:
    """Environment for child interpreters that can import ``stdinout`` from src/."""
    env = os.environ.copy()
    src = str(project_root() / "src")
    existing = env.get("PYTHONPATH")
    env["PYTHONPATH"] = src if not existing else os.pathsep.join([src, existing])
    env["STDINOUT_SKIP_DOTENV"] = "1"
    env.pop("STDINOUT_VERBOSITY", None)
    env.update(extra)
    return env


def run_cli(
    args, input_bytes: bytes | None = None, cwd: Path | None = None, **env: str
) -> subprocess.CompletedProcess:
    # Use module invocation to avoid reliance on installed console scripts
    cmd = [sys.executable, "-m", "stdinout", *args]
    return subprocess.run(
        cmd,
        input=input_bytes,
        capture_output=True,
        env=subprocess_env(**env),
        cwd=str(cwd) if cwd else None,
    )


def run_snippet(
    code: str, input_bytes: bytes | None = None, close_fd: int | None = None
) -> subprocess.CompletedProcess:
    """Run ``code`` in a child interpreter.

    ``close_fd`` closes that descriptor in the child before exec, so the
    interpreter starts without the matching standard stream.
    """
    preexec = None if close_fd is None else (lambda: os.close(close_fd))
    return subprocess.run(
        [sys.executable, "-c", code],
        input=input_bytes,
        capture_output=True,
        env=subprocess_env(),
        preexec_fn=preexec,
    )


NOBODY_UID = 65534


@contextmanager
def unprivileged() -> Iterator[None]:
    """Run the block without root's permission override.

    Non-root runs need nothing. As root the effective uid drops to ``nobody``
    for the duration of the block so that permission bits are enforced.
    """
    if os.geteuid() != 0:
        yield
        return
    try:
        os.seteuid(NOBODY_UID)
    except OSError as exc:
        pytest.skip(f"cannot drop privileges: {exc}")
    try:
        yield
    finally:
        os.seteuid(0)
