from __future__ import annotations

from pathlib import Path

import pytest

import aleo_std.cli as cli
from aleo_std.cli import main
from aleo_std.config import FEATURES
from aleo_std.profiler import PROFILER


def test_features_command(capsys):
    FEATURES.timer = True
    assert main(["features"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert "timer: on" in out
    assert "timed: off" in out
    assert len(out) == 6


def test_cpu_command(capsys, tmp_path: Path):
    info = tmp_path / "cpuinfo"
    info.write_text("vendor_id : AuthenticAMD\nmodel name : Ryzen 9\n")
    assert main(["cpu", "--cpuinfo", str(info)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["vendor: AuthenticAMD", "cpu: AMD", "model: Ryzen 9"]


def test_dirs_command_dev(capsys, monkeypatch, tmp_path: Path):
    monkeypatch.chdir(tmp_path)
    assert main(["dirs", "--network", "3", "--dev", "1", "--worker", "2"]) == 0
    out = dict(line.split(": ", 1) for line in capsys.readouterr().out.splitlines())
    assert Path(out["ledger"]) == tmp_path / ".ledger-3-1"
    assert Path(out["bft-worker"]) == tmp_path / ".bft-3" / "worker-1-2"


def test_dirs_command_custom(capsys, tmp_path: Path):
    assert main(["dirs", "--network", "0", "--custom", str(tmp_path)]) == 0
    out = dict(line.split(": ", 1) for line in capsys.readouterr().out.splitlines())
    assert Path(out["prover"]) == tmp_path / "storage" / "prover-0"


def test_demo_command(capsys, monkeypatch):
    monkeypatch.setattr(cli._time, "sleep", lambda _s: None)
    monkeypatch.setattr(cli, "cpu_model", lambda: "test-cpu")
    assert main(["demo", "--laps", "2", "--depth", "2", "--prometheus"]) == 0
    captured = capsys.readouterr()
    err = captured.err.splitlines()
    assert err[0].startswith("demo, test-cpu: started [cli.py:")
    assert err[1].startswith("demo, test-cpu, lap 1: ")
    assert err[2].startswith("demo, test-cpu, lap 2: ")
    assert "countdown: enter" in err
    assert "    countdown: enter" in err
    assert any(line.startswith("  countdown: mark ") and line.endswith("(n=2)") for line in err)
    assert "Profile report (test-cpu)" in err
    assert any(line.startswith("countdown: ") and "(3x" in line for line in err)
    assert 'aleo_std_profiled_calls_total{function="countdown"} 3.0' in captured.out
    # features are restored after the run
    assert not FEATURES.timer and not FEATURES.timed and not FEATURES.profiler
    assert PROFILER.get("countdown").calls == 3


def test_demo_rejects_negative_values(capsys):
    assert main(["demo", "--laps", "-1"]) == 2
    assert "non-negative" in capsys.readouterr().err


def test_requires_subcommand():
    with pytest.raises(SystemExit):
        main([])
