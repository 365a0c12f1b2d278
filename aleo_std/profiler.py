"""Aggregate view over ``@timed`` calls.

When the ``profiler`` feature is on, every instrumented call that exits is
recorded here by function name. Entries remember the enclosing instrumented
call they were first seen under, which is what :meth:`Profiler.report` uses
to render a tree::

    from aleo_std.profiler import PROFILER

    PROFILER.report()          # tree to stderr
    PROFILER.summary()         # {"name": total_ms}
    PROFILER.to_dataframe()    # one row per function
    PROFILER.export_prometheus()

Only counts, totals, extremes and means are kept.
"""
from __future__ import annotations

import threading
import weakref
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from prometheus_client import CollectorRegistry

from .core.clock import ZERO, Duration
from .sinks import Sink, resolve
from .telemetry.logging import get_logger
from .telemetry.prom import Counter, Gauge, registry_or_default

log = get_logger(__name__)


@dataclass
class ProfileEntry:
    name: str
    calls: int = 0
    failures: int = 0
    total: Duration = ZERO
    min: Optional[Duration] = None
    max: Optional[Duration] = None
    parent: Optional[str] = None
    children: List[str] = field(default_factory=list)

    @property
    def mean(self) -> Duration:
        return Duration(self.total.nanos // self.calls) if self.calls else ZERO


class Profiler:
    """Thread-safe aggregate keyed by function name."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: Dict[str, ProfileEntry] = {}
        # (calls, seconds) already pushed to each registry, by function name
        self._exported: "weakref.WeakKeyDictionary[CollectorRegistry, Dict[str, tuple[int, float]]]" = weakref.WeakKeyDictionary()

    def record(self, name: str, duration: Duration, *, parent: Optional[str] = None, failed: bool = False) -> None:
        with self._lock:
            entry = self._entries.get(name)
            if entry is None:
                entry = ProfileEntry(name=name)
                self._entries[name] = entry
            # Parent is fixed by the first completed call; placeholders created
            # for a still-running parent pick theirs up when they complete.
            if entry.calls == 0 and entry.parent is None and parent is not None and parent != name:
                entry.parent = parent
                p = self._entries.get(parent)
                if p is None:
                    p = ProfileEntry(name=parent)
                    self._entries[parent] = p
                if name not in p.children:
                    p.children.append(name)
            entry.calls += 1
            entry.failures += int(failed)
            entry.total = entry.total + duration
            entry.min = duration if entry.min is None else min(entry.min, duration)
            entry.max = duration if entry.max is None else max(entry.max, duration)

    def reset(self) -> None:
        with self._lock:
            self._entries.clear()
            self._exported.clear()

    def get(self, name: str) -> Optional[ProfileEntry]:
        with self._lock:
            return self._entries.get(name)

    def entries(self) -> List[ProfileEntry]:
        with self._lock:
            return list(self._entries.values())

    def summary(self) -> Dict[str, float]:
        """Return timing summary as dict (name -> total_ms)."""
        with self._lock:
            return {name: e.total.millis for name, e in self._entries.items()}

    def report(self, sink: Optional[Sink] = None, context: Optional[str] = None) -> None:
        out = resolve(sink)
        with self._lock:
            entries = dict(self._entries)

        header = "Profile report" + (f" ({context})" if context else "")
        if not entries:
            out(f"{header}: no calls recorded")
            return
        out(header)

        seen: set[str] = set()

        def emit(entry: ProfileEntry, indent: int) -> None:
            if entry.name in seen:
                return
            seen.add(entry.name)
            line = f"{'  ' * indent}{entry.name}: {entry.total} ({entry.calls}x"
            if entry.calls > 1:
                line += f", mean {entry.mean}, min {entry.min}, max {entry.max}"
            if entry.failures:
                line += f", {entry.failures} failed"
            out(line + ")")
            kids = [entries[c] for c in entry.children if c in entries]
            for child in sorted(kids, key=lambda e: e.total, reverse=True):
                emit(child, indent + 1)

        roots = [e for e in entries.values() if e.parent is None or e.parent not in entries]
        for root in sorted(roots, key=lambda e: e.total, reverse=True):
            emit(root, 0)
        # Mutually recursive entries can all have parents; print them as roots.
        for e in sorted(entries.values(), key=lambda e: e.total, reverse=True):
            if e.name not in seen:
                roots.append(e)
                emit(e, 0)

        total = sum((e.total for e in roots), ZERO)
        out(f"Total: {total}")

    def to_dataframe(self):
        """Convert entries to a pandas DataFrame.

        Columns: [name, parent, calls, failures, total_ms, mean_ms, min_ms, max_ms]
        """
        import pandas as pd

        columns = ["name", "parent", "calls", "failures", "total_ms", "mean_ms", "min_ms", "max_ms"]
        rows = []
        for e in self.entries():
            rows.append(
                {
                    "name": e.name,
                    "parent": e.parent,
                    "calls": e.calls,
                    "failures": e.failures,
                    "total_ms": e.total.millis,
                    "mean_ms": e.mean.millis,
                    "min_ms": e.min.millis if e.min is not None else 0.0,
                    "max_ms": e.max.millis if e.max is not None else 0.0,
                }
            )
        return pd.DataFrame(rows, columns=columns)

    def export_prometheus(self, registry: Optional[CollectorRegistry] = None) -> int:
        """Push call counts and seconds accumulated since the last export.

        Returns the number of functions exported.
        """
        calls = Counter("aleo_std_profiled_calls_total", "Instrumented calls", ["function"], registry=registry)
        seconds = Counter("aleo_std_profiled_seconds_total", "Seconds spent in instrumented calls", ["function"], registry=registry)
        mean = Gauge("aleo_std_profiled_mean_seconds", "Mean seconds per instrumented call", ["function"], registry=registry)
        pushed = self._exported.setdefault(registry_or_default(registry), {})
        n = 0
        with self._lock:
            for name, e in self._entries.items():
                if not e.calls:
                    continue
                prev_calls, prev_secs = pushed.get(name, (0, 0.0))
                calls.inc(e.calls - prev_calls, function=name)
                seconds.inc(e.total.seconds - prev_secs, function=name)
                mean.set(e.mean.seconds, function=name)
                pushed[name] = (e.calls, e.total.seconds)
                n += 1
        log.debug("exported %d profiled functions to prometheus", n)
        return n


# Singleton instance
PROFILER = Profiler()
