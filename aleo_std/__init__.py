"""aleo_std: scoped timers and a per-call profiler for development diagnostics.

Features are opt-in (see :mod:`aleo_std.config`). ``storage`` and ``cpu``
decide whether their helpers are re-exported here; the submodules are always
importable.
"""
from __future__ import annotations

from .config import FEATURES, Features, disable, enable, override
from .core.clock import Duration, elapsed, format_duration, now
from .core.errors import AleoStdError, ConfigurationError
from .profiler import PROFILER, Profiler, ProfileEntry
from .scoped import time
from .sinks import ListSink, LoggerSink, null_sink, stderr_sink
from .calls import CallFrame, ReportMode, call_depth, current_frames, mark, timed
from .stopwatch import NoopTimer, Timer, finish, lap, start, timer

__all__ = [
    "FEATURES",
    "Features",
    "disable",
    "enable",
    "override",
    "Duration",
    "elapsed",
    "format_duration",
    "now",
    "AleoStdError",
    "ConfigurationError",
    "PROFILER",
    "Profiler",
    "ProfileEntry",
    "time",
    "ListSink",
    "LoggerSink",
    "null_sink",
    "stderr_sink",
    "CallFrame",
    "ReportMode",
    "call_depth",
    "current_frames",
    "mark",
    "timed",
    "NoopTimer",
    "Timer",
    "finish",
    "lap",
    "start",
    "timer",
]

if FEATURES.cpu:
    from .cpu import Cpu, cpu_model, get_cpu

    __all__ += ["Cpu", "cpu_model", "get_cpu"]

if FEATURES.storage:
    from .storage import (
        StorageMode,
        aleo_bft_primary_dir,
        aleo_bft_worker_dir,
        aleo_dir,
        aleo_ledger_dir,
        aleo_prover_dir,
    )

    __all__ += [
        "StorageMode",
        "aleo_bft_primary_dir",
        "aleo_bft_worker_dir",
        "aleo_dir",
        "aleo_ledger_dir",
        "aleo_prover_dir",
    ]

__version__ = "1.0.1"
