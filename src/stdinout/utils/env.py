# SPDX-License-Identifier: Apache-2.0
"""Environment-variable helpers for stdinout settings.

Keys are given without the ``STDINOUT_`` prefix; ``env("VERBOSITY")`` reads
``STDINOUT_VERBOSITY``. Blank values are treated as unset.
"""

from __future__ import annotations

import os

PREFIX = "STDINOUT_"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def env(key: str, default: str | None = None) -> str | None:
    """Return the value of ``STDINOUT_<key>`` or ``default`` when unset/blank."""
    val = os.environ.get(PREFIX + key)
    if val is None or not val.strip():
        return default
    return val.strip()


def env_bool(key: str, default: bool = False) -> bool:
    """Interpret ``STDINOUT_<key>`` as a boolean flag.

    Accepts ``1/true/yes/on`` and ``0/false/no/off`` (case-insensitive); any
    other value falls back to ``default``.
    """
    val = env(key)
    if val is None:
        return default
    low = val.lower()
    if low in _TRUTHY:
        return True
    if low in _FALSY:
        return False
    return default
