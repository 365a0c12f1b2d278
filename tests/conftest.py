from __future__ import annotations

import pytest

import aleo_std.core.clock as clock_mod
from aleo_std.config import FEATURES, Features
from aleo_std.profiler import PROFILER


class FakeClock:
    """Manually advanced stand-in for ``clock.now``."""

    def __init__(self, start_ns: int = 5_000_000_000) -> None:
        self.t = start_ns

    def __call__(self) -> int:
        return self.t

    def advance_ms(self, ms: float) -> None:
        self.t += int(round(ms * 1_000_000))


@pytest.fixture
def fake_clock(monkeypatch) -> FakeClock:  # noqa: ANN001
    fc = FakeClock()
    monkeypatch.setattr(clock_mod, "now", fc)
    return fc


@pytest.fixture(autouse=True)
def _isolate_features():
    saved = {n: getattr(FEATURES, n) for n in Features.names()}
    for n in saved:
        setattr(FEATURES, n, False)
    PROFILER.reset()
    yield
    for n, v in saved.items():
        setattr(FEATURES, n, v)
    PROFILER.reset()
