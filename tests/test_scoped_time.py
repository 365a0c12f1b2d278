from __future__ import annotations

import logging

import pytest

from aleo_std.config import override
from aleo_std.core.errors import ConfigurationError
from aleo_std.scoped import _parse_args, time, timer_name
from aleo_std.telemetry.logging import TRACE


def test_parse_args_defaults_and_single_argument():
    assert _parse_args(()) == ("debug", "{}")
    assert _parse_args(("INFO",)) == ("info", "{}")
    assert _parse_args(("never",)) == ("never", "{}")
    # anything that is not a level is the pattern, case preserved
    assert _parse_args(("Loading {}",)) == ("debug", "Loading {}")
    assert _parse_args(("plain",)) == ("debug", "plain")


def test_parse_args_two_arguments():
    assert _parse_args(("trace", "{} step")) == ("trace", "{} step")
    assert _parse_args(("Warn", "")) == ("warn", "{}")


@pytest.mark.parametrize(
    "args",
    [
        ("info", "{}", "extra"),
        ("{} first", "second"),
        ("loud", "{}"),
        (3,),
    ],
)
def test_parse_args_rejects_bad_input(args):
    with pytest.raises(ConfigurationError):
        _parse_args(args)


def test_timer_name_replaces_first_placeholder():
    assert timer_name("{}", "load") == "load()"
    assert timer_name("step {} of {}", "load") == "step load() of {}"
    assert timer_name("static", "load") == "static"


def test_feature_off_returns_function_unchanged():
    def f():
        return 1

    assert time(f) is f
    assert time("info")(f) is f


def test_never_level_returns_function_unchanged():
    def f():
        return 1

    with override(time=True):
        assert time("never")(f) is f


def _time_records(caplog):
    return [(r.levelno, r.getMessage()) for r in caplog.records if r.name == "aleo_std.time"]


def test_bare_decorator_logs_start_and_finish_at_debug(caplog, fake_clock):
    caplog.set_level(logging.DEBUG, logger="aleo_std.time")
    with override(time=True):

        @time
        def load(x, *, y=2):
            fake_clock.advance_ms(7)
            return x + y

    assert load(1, y=3) == 4
    assert load.__name__ == "load"
    assert _time_records(caplog) == [
        (logging.DEBUG, "load(): started"),
        (logging.DEBUG, "load(): 7.000 ms"),
    ]


def test_level_and_pattern(caplog, fake_clock):
    caplog.set_level(TRACE, logger="aleo_std.time")
    with override(time=True):

        @time("trace", "loading {}")
        def fetch():
            fake_clock.advance_ms(1)

        @time("error")
        def fail():
            raise KeyError("k")

    fetch()
    with pytest.raises(KeyError):
        fail()
    assert _time_records(caplog) == [
        (TRACE, "loading fetch(): started"),
        (TRACE, "loading fetch(): 1.000 ms"),
        (logging.ERROR, "fail(): started"),
        (logging.ERROR, "fail(): 0.000 ms"),
    ]


def test_level_below_logger_threshold_is_filtered(caplog, fake_clock):
    caplog.set_level(logging.INFO, logger="aleo_std.time")
    with override(time=True):

        @time
        def quiet():
            return "ok"

    assert quiet() == "ok"
    assert _time_records(caplog) == []
