"""Destinations for report lines.

A sink is any callable that takes one formatted line. ``None`` wherever a
sink is accepted means :func:`stderr_sink`.
"""
from __future__ import annotations

import logging
import sys
from typing import Callable, List, Optional

Sink = Callable[[str], None]


def stderr_sink(line: str) -> None:
    # Resolved per call so redirected/captured stderr is honoured.
    sys.stderr.write(line + "\n")
    sys.stderr.flush()


def null_sink(line: str) -> None:
    _ = line


class LoggerSink:
    """Forward lines to a logger at a fixed level."""

    def __init__(self, logger: logging.Logger, level: int = logging.INFO) -> None:
        self.logger = logger
        self.level = level

    def __call__(self, line: str) -> None:
        self.logger.log(self.level, line)


class ListSink:
    """Keep lines in memory."""

    def __init__(self) -> None:
        self.lines: List[str] = []

    def __call__(self, line: str) -> None:
        self.lines.append(line)

    def clear(self) -> None:
        self.lines.clear()


def resolve(sink: Optional[Sink]) -> Sink:
    return stderr_sink if sink is None else sink
