"""Environment parsing helpers.

Small helpers to consistently parse env vars with sane defaults. Each accepts
an optional mapping so callers can parse something other than ``os.environ``.
"""
from __future__ import annotations

from typing import Iterable, List, Mapping, Optional
import os

_TRUE = ("1", "true", "True", "TRUE", "YES", "yes", "on", "On")
_FALSE = ("0", "false", "False", "FALSE", "NO", "no", "off", "Off")


def _env(environ: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def env_opt_bool(name: str, environ: Optional[Mapping[str, str]] = None) -> Optional[bool]:
    """Parse a boolean env var; None when unset or unrecognised."""
    val = _env(environ).get(name)
    if val is None:
        return None
    val = val.strip()
    if val in _TRUE:
        return True
    if val in _FALSE:
        return False
    return None


def env_list_str(name: str, default: Iterable[str] = (), environ: Optional[Mapping[str, str]] = None) -> List[str]:
    s = _env(environ).get(name, "")
    if not s:
        return list(default)
    out: List[str] = []
    for tok in s.split(","):
        tok = tok.strip()
        if not tok:
            continue
        out.append(tok)
    return out
