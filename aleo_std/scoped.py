"""``@time``: run a whole function inside a scoped timer.

    @time                      # debug level, named "load()"
    @time("info")              # info level
    @time("loading {}")        # debug level, named "loading load()"
    @time("trace", "{} step")  # level and pattern
    @time("never")             # no instrumentation

Lines go to the ``aleo_std.time`` logger at the chosen level. The arguments
are checked when the decorator is applied.
"""
from __future__ import annotations

import functools
from typing import Callable, TypeVar, Union, overload

from .config import FEATURES
from .core.errors import ConfigurationError
from .sinks import LoggerSink
from .telemetry.logging import LEVELS, get_logger
from .stopwatch import Timer

F = TypeVar("F", bound=Callable)

DEFAULT_LEVEL = "debug"
DEFAULT_NAME_PATTERN = "{}"
_LEVEL_NAMES = ("error", "warn", "info", "debug", "trace", "never")


def _parse_args(args: tuple[str, ...]) -> tuple[str, str]:
    """Split decorator arguments into (level, name pattern)."""
    if not args:
        return DEFAULT_LEVEL, DEFAULT_NAME_PATTERN
    if len(args) > 2:
        raise ConfigurationError("Specify at most two string arguments, for log level and name pattern")
    if not all(isinstance(a, str) for a in args):
        raise ConfigurationError("@time arguments must be strings")

    first = args[0].strip()
    if len(args) == 1:
        if first.lower() in _LEVEL_NAMES:
            return first.lower(), DEFAULT_NAME_PATTERN
        # Anything else is taken as the pattern, case preserved.
        return DEFAULT_LEVEL, first

    if "{}" in first or first.lower() not in _LEVEL_NAMES:
        raise ConfigurationError(
            "Invalid first argument. Specify the log level as the first argument and the pattern as the second."
        )
    pattern = args[1].strip() or DEFAULT_NAME_PATTERN
    return first.lower(), pattern


def timer_name(pattern: str, function_name: str) -> str:
    return pattern.replace("{}", f"{function_name}()", 1)


def _wrap(func: F, level: str, pattern: str) -> F:
    if level == "never" or not FEATURES.time:
        return func

    name = timer_name(pattern, func.__name__)
    sink = LoggerSink(get_logger("aleo_std.time"), LEVELS[level])

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        t = Timer(name, sink=sink)
        t.announce()
        with t:
            return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


@overload
def time(func: F) -> F: ...


@overload
def time(*args: str) -> Callable[[F], F]: ...


def time(*args: Union[F, str]) -> Union[F, Callable[[F], F]]:
    # Bare @time
    if len(args) == 1 and callable(args[0]):
        return _wrap(args[0], DEFAULT_LEVEL, DEFAULT_NAME_PATTERN)  # type: ignore[arg-type]

    level, pattern = _parse_args(args)  # type: ignore[arg-type]

    def decorator(func: F) -> F:
        return _wrap(func, level, pattern)

    return decorator
