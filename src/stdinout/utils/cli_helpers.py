# SPDX-License-Identifier: Apache-2.0
"""Shared helpers for the command-line entry points."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from stdinout.utils.env import env, env_bool

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "quiet": logging.ERROR,
}


def load_dotenv_from_env(path: str | os.PathLike[str] | None = None) -> bool:
    """Load a ``.env`` file unless ``STDINOUT_SKIP_DOTENV`` is set.

    Variables already present in the environment win over the file. Returns
    ``True`` when a file was found and loaded.
    """
    if env_bool("SKIP_DOTENV", False):
        return False
    from dotenv import load_dotenv

    target = Path(path) if path is not None else Path.cwd() / ".env"
    if not target.is_file():
        return False
    return bool(load_dotenv(target, override=False))


def apply_verbosity_flags(verbose: bool = False, quiet: bool = False) -> None:
    """Translate ``-v/--verbose`` and ``--quiet`` into ``STDINOUT_VERBOSITY``."""
    if verbose:
        os.environ["STDINOUT_VERBOSITY"] = "debug"
    elif quiet:
        os.environ["STDINOUT_VERBOSITY"] = "quiet"


def configure_logging_from_env(default: str = "info") -> int:
    """Configure root logging from ``STDINOUT_VERBOSITY``.

    ``debug`` maps to DEBUG, ``info`` to INFO and ``quiet`` to ERROR. Messages
    go to stderr with a bare ``%(message)s`` format so that stdout stays clean
    for piped data. Returns the level that was applied.
    """
    name = (env("VERBOSITY", default) or default).lower()
    level = _LEVELS.get(name, _LEVELS.get(default, logging.INFO))
    logging.basicConfig(
        level=level, format="%(message)s", stream=sys.stderr, force=True
    )
    return level
