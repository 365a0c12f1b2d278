"""Monotonic clock and duration formatting.

Instants are integer nanoseconds from ``time.perf_counter_ns``; they are only
meaningful relative to each other and are never calendar time.
"""
from __future__ import annotations

import math
import time
from dataclasses import dataclass

_NANOS_PER_MICRO = 1_000
_NANOS_PER_MILLI = 1_000_000
_NANOS_PER_SEC = 1_000_000_000


def now() -> int:
    return time.perf_counter_ns()


@dataclass(frozen=True, order=True, slots=True)
class Duration:
    """Non-negative elapsed time in nanoseconds."""

    nanos: int = 0

    def __post_init__(self) -> None:
        if self.nanos < 0:
            object.__setattr__(self, "nanos", 0)

    @classmethod
    def from_seconds(cls, seconds: float) -> "Duration":
        if not math.isfinite(seconds):
            raise ValueError(f"duration must be finite, got {seconds!r}")
        return cls(int(round(seconds * _NANOS_PER_SEC)))

    @classmethod
    def from_millis(cls, millis: float) -> "Duration":
        if not math.isfinite(millis):
            raise ValueError(f"duration must be finite, got {millis!r}")
        return cls(int(round(millis * _NANOS_PER_MILLI)))

    @property
    def seconds(self) -> float:
        return self.nanos / _NANOS_PER_SEC

    @property
    def millis(self) -> float:
        return self.nanos / _NANOS_PER_MILLI

    def __add__(self, other: "Duration") -> "Duration":
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.nanos + other.nanos)

    def __str__(self) -> str:
        return format_duration(self)


ZERO = Duration(0)


def elapsed(since: int, until: int | None = None) -> Duration:
    end = now() if until is None else until
    return Duration(end - since)


def format_duration(d: Duration | float) -> str:
    """Render ``d`` as milliseconds below one second, seconds otherwise.

    Numbers are taken as seconds; NaN and negatives read as zero and infinity
    prints as ``"inf s"``. Digits past the third decimal are truncated, so a
    sub-second value never shows as ``1000.000 ms``:
    ``format_duration(Duration.from_millis(12.345)) == "12.345 ms"``.
    """
    if not isinstance(d, Duration):
        secs = float(d)
        if math.isinf(secs) and secs > 0:
            return "inf s"
        d = Duration.from_seconds(secs) if math.isfinite(secs) else ZERO
    if d.nanos < _NANOS_PER_SEC:
        us = d.nanos // _NANOS_PER_MICRO
        return f"{us // 1000}.{us % 1000:03d} ms"
    ms = d.nanos // _NANOS_PER_MILLI
    return f"{ms // 1000}.{ms % 1000:03d} s"
