"""Host CPU descriptor.

Reads ``/proc/cpuinfo`` where it exists and falls back to :mod:`platform`.
The model string is only ever used as a free-text label in reports.
"""
from __future__ import annotations

import enum
import platform
from pathlib import Path
from typing import Dict, Optional

CPUINFO = Path("/proc/cpuinfo")


class Cpu(enum.Enum):
    AMD = "AuthenticAMD"
    INTEL = "GenuineIntel"
    UNKNOWN = "unknown"


def _cpuinfo_fields(path: Path) -> Dict[str, str]:
    """First processor block of a cpuinfo file as a dict."""
    out: Dict[str, str] = {}
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return out
    for line in text.splitlines():
        if not line.strip():
            if out:
                break
            continue
        key, sep, value = line.partition(":")
        if sep:
            out.setdefault(key.strip(), value.strip())
    return out


def cpu_vendor(cpuinfo: Path = CPUINFO) -> Optional[str]:
    vendor = _cpuinfo_fields(cpuinfo).get("vendor_id")
    if vendor:
        return vendor
    proc = platform.processor()
    for cpu in (Cpu.AMD, Cpu.INTEL):
        if cpu.value in proc:
            return cpu.value
    return proc or None


def get_cpu(cpuinfo: Path = CPUINFO) -> Cpu:
    vendor = cpu_vendor(cpuinfo)
    if vendor == Cpu.AMD.value:
        return Cpu.AMD
    if vendor == Cpu.INTEL.value:
        return Cpu.INTEL
    return Cpu.UNKNOWN


def cpu_model(cpuinfo: Path = CPUINFO) -> str:
    model = _cpuinfo_fields(cpuinfo).get("model name")
    return model or platform.processor() or platform.machine() or "unknown"
