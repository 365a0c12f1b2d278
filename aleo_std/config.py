"""Feature flags for aleo_std.

Every subsystem is off by default and flags are independent: turning one on
or off never changes what another does.

Environment variables:
- ALEO_STD_FEATURES: comma list of feature names, or ``all``
- ALEO_STD_FEATURE_<NAME>: per-feature boolean override (e.g. ALEO_STD_FEATURE_TIMED=1)
"""
from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass, fields
from typing import Iterator, Mapping, Optional

from .core.errors import ConfigurationError
from .telemetry.logging import get_logger
from .utils.env import env_list_str, env_opt_bool

log = get_logger(__name__)


@dataclass(slots=True)
class Features:
    time: bool = False      # @time decorator
    timer: bool = False     # timer()/lap()/finish() helpers
    timed: bool = False     # @timed call profiler
    profiler: bool = False  # aggregate recording of @timed calls
    storage: bool = False   # package-level storage path helpers
    cpu: bool = False       # package-level host descriptor helpers

    @classmethod
    def names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def enabled(self) -> list[str]:
        return [n for n in self.names() if getattr(self, n)]


def load_features(environ: Optional[Mapping[str, str]] = None) -> Features:
    feats = Features()
    known = Features.names()
    for name in env_list_str("ALEO_STD_FEATURES", environ=environ):
        key = name.lower()
        if key == "all":
            for n in known:
                setattr(feats, n, True)
        elif key in known:
            setattr(feats, key, True)
        else:
            log.warning("ignoring unknown feature %r in ALEO_STD_FEATURES", name)
    env = os.environ if environ is None else environ
    for n in known:
        var = f"ALEO_STD_FEATURE_{n.upper()}"
        flag = env_opt_bool(var, environ=env)
        if flag is not None:
            setattr(feats, n, flag)
        elif var in env:
            log.warning("ignoring %s=%r: not a boolean", var, env[var])
    return feats


FEATURES = load_features()


def _check(names: tuple[str, ...]) -> None:
    known = Features.names()
    bad = [n for n in names if n not in known]
    if bad:
        raise ConfigurationError(f"unknown feature(s): {', '.join(bad)}; expected one of {', '.join(known)}")


def enable(*names: str) -> None:
    _check(names)
    for n in names:
        setattr(FEATURES, n, True)


def disable(*names: str) -> None:
    _check(names)
    for n in names:
        setattr(FEATURES, n, False)


@contextmanager
def override(**flags: bool) -> Iterator[Features]:
    """Temporarily set feature flags, restoring the previous values on exit."""
    _check(tuple(flags))
    saved = {n: getattr(FEATURES, n) for n in flags}
    for n, v in flags.items():
        setattr(FEATURES, n, bool(v))
    try:
        yield FEATURES
    finally:
        for n, v in saved.items():
            setattr(FEATURES, n, v)
