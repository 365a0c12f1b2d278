"""Telemetry subpackage (lightweight).

Exposes the library logger factory and the Prometheus wrappers used by the
aggregate profiler.
"""

from .logging import get_logger
from .prom import Counter, Gauge

__all__ = [
    "get_logger",
    "Counter",
    "Gauge",
]
