"""Typed lookups of environment variables."""

from __future__ import annotations

import os
import re

_INT_RE = re.compile(r"[+-]?[0-9]+")


def get_str_from_env(name: str) -> str | None:
    """Return the variable's value, or None if it is not set."""
    return os.environ.get(name)


def get_int_from_env(name: str) -> int | None:
    """Return the variable as an int, None if unset; ValueError if malformed."""
    raw = os.environ.get(name)
    if raw is None:
        return None
    if not _INT_RE.fullmatch(raw):
        raise ValueError(f"invalid value for integer variable: {raw!r}")
    return int(raw)


def get_bool_from_env(name: str) -> bool | None:
    """Return the variable as a bool ("true"/"false"), None if unset; ValueError otherwise."""
    raw = os.environ.get(name)
    if raw is None:
        return None
    normalized = raw.lower().strip()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    raise ValueError(f"invalid value for boolean variable: {raw!r}")