from __future__ import annotations

from pathlib import Path

import aleo_std.cpu as cpu_mod
from aleo_std.cpu import Cpu, cpu_model, cpu_vendor, get_cpu

AMD_CPUINFO = """processor\t: 0
vendor_id\t: AuthenticAMD
cpu family\t: 25
model name\t: AMD EPYC 7763 64-Core Processor

processor\t: 1
vendor_id\t: GenuineIntel
model name\t: should not be read
"""


def _write(tmp_path: Path, text: str) -> Path:
    p = tmp_path / "cpuinfo"
    p.write_text(text)
    return p


def test_amd_from_cpuinfo(tmp_path: Path):
    p = _write(tmp_path, AMD_CPUINFO)
    assert cpu_vendor(p) == "AuthenticAMD"
    assert get_cpu(p) is Cpu.AMD
    assert cpu_model(p) == "AMD EPYC 7763 64-Core Processor"


def test_intel_from_cpuinfo(tmp_path: Path):
    p = _write(tmp_path, "vendor_id : GenuineIntel\nmodel name : Intel(R) Xeon(R)\n")
    assert get_cpu(p) is Cpu.INTEL
    assert cpu_model(p) == "Intel(R) Xeon(R)"


def test_missing_cpuinfo_falls_back_to_platform(tmp_path: Path, monkeypatch):
    monkeypatch.setattr(cpu_mod.platform, "processor", lambda: "")
    monkeypatch.setattr(cpu_mod.platform, "machine", lambda: "arm64")
    missing = tmp_path / "nope"
    assert cpu_vendor(missing) is None
    assert get_cpu(missing) is Cpu.UNKNOWN
    assert cpu_model(missing) == "arm64"


def test_platform_vendor_text(tmp_path: Path, monkeypatch):
    monkeypatch.setattr(cpu_mod.platform, "processor", lambda: "Intel64 Family 6 Model 85, GenuineIntel")
    assert get_cpu(tmp_path / "nope") is Cpu.INTEL


def test_unknown_vendor(tmp_path: Path):
    p = _write(tmp_path, "vendor_id : CentaurHauls\n")
    assert get_cpu(p) is Cpu.UNKNOWN
