"""Scoped timers.

    t = start("work")
    ...
    t.lap()       # "work: 10.012 ms"   time since the previous lap (or start)
    ...
    t.lap()       # "work: 20.004 ms"
    t.finish()    # "work: 30.031 ms"   total since start, repeatable

Timers used as context managers indent the timers created inside them and
finish themselves on exit. The ``timer``/``lap``/``finish`` helpers are gated
by the ``timer`` feature and hand back a :class:`NoopTimer` when it is off.
"""
from __future__ import annotations

import os
import sys
import threading
from typing import Optional

from .config import FEATURES
from .core import clock
from .core.clock import ZERO, Duration
from .sinks import Sink, resolve

PLACEHOLDER_LABEL = "<unnamed>"
INDENT = "    "

_nesting = threading.local()


def _level() -> int:
    return getattr(_nesting, "level", 0)


def _set_level(level: int) -> None:
    _nesting.level = level


class Timer:
    """One named timing session.

    ``start_instant`` is fixed at construction; ``last_lap_instant`` starts
    equal to it and only moves forward on :meth:`lap`.
    """

    def __init__(
        self,
        label: Optional[str] = None,
        *,
        extra_info: Optional[str] = None,
        sink: Optional[Sink] = None,
        location: Optional[str] = None,
    ) -> None:
        self._label = label or PLACEHOLDER_LABEL
        self.extra_info = extra_info
        self.sink = resolve(sink)
        self.location = location
        self.indent = _level()
        t = clock.now()
        self._start = t
        self._last_lap = t
        self._outer_level: Optional[int] = None

    @property
    def label(self) -> str:
        return self._label

    @property
    def start_instant(self) -> int:
        return self._start

    @property
    def last_lap_instant(self) -> int:
        return self._last_lap

    def _message(self, note: Optional[str]) -> str:
        parts = [self._label]
        if self.extra_info:
            parts.append(self.extra_info)
        if note:
            parts.append(note)
        return ", ".join(parts)

    def _emit(self, body: str) -> None:
        self.sink(f"{INDENT * self.indent}{body}")

    def announce(self) -> None:
        where = f" [{self.location}]" if self.location else ""
        self._emit(f"{self._message(None)}: started{where}")

    def elapsed(self) -> Duration:
        return clock.elapsed(self._start)

    def lap(self, note: Optional[str] = None) -> Duration:
        t = clock.now()
        d = Duration(t - self._last_lap)
        self._last_lap = t
        self._emit(f"{self._message(note)}: {d}")
        return d

    def finish(self, note: Optional[str] = None) -> Duration:
        d = clock.elapsed(self._start)
        self._emit(f"{self._message(note)}: {d}")
        return d

    def __enter__(self) -> "Timer":
        self._outer_level = _level()
        _set_level(self._outer_level + 1)
        return self

    def __exit__(self, exc_type, exc, tb):  # noqa: ANN001, ANN201
        if self._outer_level is not None:
            _set_level(self._outer_level)
            self._outer_level = None
        self.finish()
        return False

    def __repr__(self) -> str:
        return f"Timer(label={self._label!r}, elapsed={self.elapsed()})"


class NoopTimer:
    """Stand-in returned by :func:`timer` when the ``timer`` feature is off."""

    label = PLACEHOLDER_LABEL

    def announce(self) -> None:
        pass

    def elapsed(self) -> Duration:
        return ZERO

    def lap(self, note: Optional[str] = None) -> Duration:
        return ZERO

    def finish(self, note: Optional[str] = None) -> Duration:
        return ZERO

    def __enter__(self) -> "NoopTimer":
        return self

    def __exit__(self, exc_type, exc, tb):  # noqa: ANN001, ANN201
        return False


NOOP_TIMER = NoopTimer()


def start(
    label: Optional[str] = None,
    *,
    extra_info: Optional[str] = None,
    sink: Optional[Sink] = None,
    announce: bool = False,
) -> Timer:
    t = Timer(label, extra_info=extra_info, sink=sink)
    if announce:
        t.announce()
    return t


def timer(label: Optional[str] = None, extra_info: Optional[str] = None, sink: Optional[Sink] = None) -> Timer | NoopTimer:
    """Start a timer tagged with the caller's file and line and announce it."""
    if not FEATURES.timer:
        return NOOP_TIMER
    caller = sys._getframe(1)
    location = f"{os.path.basename(caller.f_code.co_filename)}:{caller.f_lineno}"
    t = Timer(label, extra_info=extra_info, sink=sink, location=location)
    t.announce()
    return t


def lap(t: Timer | NoopTimer | None, note: Optional[str] = None) -> Duration:
    if t is None:
        return ZERO
    return t.lap(note)


def finish(t: Timer | NoopTimer | None, note: Optional[str] = None) -> Duration:
    if t is None:
        return ZERO
    return t.finish(note)
