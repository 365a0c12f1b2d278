"""Library logging setup.

Report lines from timers go to sinks; this logger carries the library's own
diagnostics and the output of ``@time``.

Environment variables:
- ALEO_STD_LOG_LEVEL: TRACE|DEBUG|INFO|WARNING|ERROR (default INFO)
"""
from __future__ import annotations

import logging
import os
from typing import Optional, Dict

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

# Level names accepted by ``@time`` and ALEO_STD_LOG_LEVEL. "never" is handled
# by callers and has no logging level.
LEVELS: Dict[str, int] = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": TRACE,
}

_CONFIGURED = False


def level_from_name(name: str, default: int = logging.INFO) -> int:
    return LEVELS.get(name.strip().lower(), default)


def _configure_once() -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return
    lvl = level_from_name(os.getenv("ALEO_STD_LOG_LEVEL", "INFO"))
    logging.basicConfig(
        level=lvl,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _CONFIGURED = True


def get_logger(name: str, context: Optional[Dict[str, object]] = None) -> logging.Logger:
    _configure_once()
    logger = logging.getLogger(name)
    if context:
        # Prepend context to messages via adapter
        class _Adapter(logging.LoggerAdapter):
            def process(self, msg, kwargs):  # type: ignore[override]
                ctx = " ".join(f"{k}={v}" for k, v in context.items())
                return f"[{ctx}] {msg}", kwargs

        return _Adapter(logger, {})  # type: ignore[return-value]
    return logger
