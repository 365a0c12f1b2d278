"""``@timed``: per-call profiler with nesting depth.

Each thread owns its own stack of :class:`CallFrame`. A wrapped call pushes a
frame on entry and truncates the stack back to the depth it saw on every exit
path, so a failing call never leaks frames. Report lines are indented by
depth::

    fib: enter
      fib: enter
        fib: enter
        fib: exit 0.004 ms
      fib: exit 0.031 ms
    fib: exit 0.058 ms

With the ``profiler`` feature on, every exit is also recorded in
:data:`aleo_std.profiler.PROFILER`.
"""
from __future__ import annotations

import enum
import functools
import threading
from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional, TypeVar, Union

from .config import FEATURES
from .core import clock
from .core.clock import Duration
from .profiler import PROFILER
from .sinks import Sink, resolve

F = TypeVar("F", bound=Callable)

DEFAULT_INDENT = "  "


class ReportMode(enum.Flag):
    NONE = 0
    ENTRY = enum.auto()
    EXIT = enum.auto()
    BOTH = ENTRY | EXIT


@dataclass(slots=True)
class CallFrame:
    function_name: str
    entry_instant: int
    depth: int
    last_mark_instant: Optional[int] = None
    pad: str = field(default=DEFAULT_INDENT, repr=False, compare=False)
    sink: Optional[Sink] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.last_mark_instant is None:
            self.last_mark_instant = self.entry_instant


_local = threading.local()


def _stack() -> List[CallFrame]:
    try:
        return _local.frames
    except AttributeError:
        _local.frames = []
        return _local.frames


def call_depth() -> int:
    """Number of instrumented calls active on the current thread."""
    return len(_stack())


def current_frames() -> tuple[CallFrame, ...]:
    """Snapshot of the current thread's stack, outermost first."""
    return tuple(replace(f) for f in _stack())


def _profile(func: F, name: str, mode: ReportMode, sink: Optional[Sink], pad: str) -> F:
    out = resolve(sink)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        stack = _stack()
        depth = len(stack)
        frame = CallFrame(name, clock.now(), depth, pad=pad, sink=out)
        stack.append(frame)
        prefix = pad * depth
        if mode & ReportMode.ENTRY:
            out(f"{prefix}{name}: enter")
        raised: Optional[str] = None
        try:
            return func(*args, **kwargs)
        except BaseException as e:
            raised = type(e).__name__
            raise
        finally:
            del stack[depth:]
            d = clock.elapsed(frame.entry_instant)
            if mode & ReportMode.EXIT:
                suffix = f" (raised {raised})" if raised else ""
                out(f"{prefix}{name}: exit {d}{suffix}")
            if FEATURES.profiler:
                parent = stack[depth - 1].function_name if depth else None
                PROFILER.record(name, d, parent=parent, failed=raised is not None)

    return wrapper  # type: ignore[return-value]


def timed(
    func: Union[F, str, None] = None,
    *,
    name: Optional[str] = None,
    mode: ReportMode = ReportMode.BOTH,
    sink: Optional[Sink] = None,
    indent: str = DEFAULT_INDENT,
) -> Union[F, Callable[[F], F]]:
    """Decorator reporting entry and exit of every call.

    Can be used with or without arguments:
        @timed
        def f(): ...

        @timed("custom_name")
        def f(): ...

        @timed(mode=ReportMode.EXIT, sink=my_sink)
        def f(): ...

    The reported name is fixed when decorating (``func.__name__`` unless
    overridden). With the ``timed`` feature off the function is returned as is.
    """
    label = name if callable(func) else (name or func)

    def decorator(fn: F) -> F:
        if not FEATURES.timed:
            return fn
        return _profile(fn, label or fn.__name__, mode, sink, indent)

    if callable(func):
        return decorator(func)
    return decorator


def mark(note: str = "") -> Optional[Duration]:
    """Report time since the previous mark (or entry) of the innermost call.

    Returns None outside of any ``@timed`` call.
    """
    stack = _stack()
    if not stack:
        return None
    frame = stack[-1]
    t = clock.now()
    d = Duration(t - frame.last_mark_instant)
    frame.last_mark_instant = t
    line = f"{frame.pad * (frame.depth + 1)}{frame.function_name}: mark {d}"
    if note:
        line += f" ({note})"
    resolve(frame.sink)(line)
    return d
