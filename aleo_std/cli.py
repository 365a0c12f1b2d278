"""aleo-std CLI."""
from __future__ import annotations

import argparse
import sys
import time as _time
from pathlib import Path

from prometheus_client import CollectorRegistry, generate_latest

from .calls import mark, timed
from .config import FEATURES, override
from .cpu import cpu_model, cpu_vendor, get_cpu
from .profiler import PROFILER
from .stopwatch import finish, lap, timer
from .storage import (
    StorageMode,
    aleo_bft_primary_dir,
    aleo_bft_worker_dir,
    aleo_dir,
    aleo_ledger_dir,
    aleo_prover_dir,
)
from .telemetry.logging import get_logger

log = get_logger(__name__)


def _cmd_features(args: argparse.Namespace) -> int:
    _ = args
    for name in FEATURES.names():
        print(f"{name}: {'on' if getattr(FEATURES, name) else 'off'}")
    return 0


def _cmd_cpu(args: argparse.Namespace) -> int:
    cpuinfo = Path(args.cpuinfo)
    print(f"vendor: {cpu_vendor(cpuinfo) or 'unknown'}")
    print(f"cpu: {get_cpu(cpuinfo).name}")
    print(f"model: {cpu_model(cpuinfo)}")
    return 0


def _storage_mode(args: argparse.Namespace) -> StorageMode:
    if args.custom:
        return StorageMode(dev=args.dev, path=Path(args.custom))
    if args.dev is not None:
        return StorageMode.development(args.dev)
    return StorageMode.production()


def _cmd_dirs(args: argparse.Namespace) -> int:
    mode = _storage_mode(args)
    print(f"aleo: {aleo_dir()}")
    print(f"ledger: {aleo_ledger_dir(args.network, mode)}")
    print(f"bft-primary: {aleo_bft_primary_dir(args.network, mode)}")
    print(f"bft-worker: {aleo_bft_worker_dir(args.network, args.worker, mode)}")
    print(f"prover: {aleo_prover_dir(args.network, mode)}")
    return 0


def _cmd_demo(args: argparse.Namespace) -> int:
    if args.laps < 0 or args.depth < 0 or args.sleep_ms < 0:
        print("--laps, --depth and --sleep-ms must be non-negative", file=sys.stderr)
        return 2
    delay = args.sleep_ms / 1000.0

    with override(timer=True, timed=True, profiler=True):
        PROFILER.reset()

        @timed
        def countdown(n: int) -> int:
            _time.sleep(delay)
            mark(f"n={n}")
            return 0 if n <= 0 else 1 + countdown(n - 1)

        t = timer("demo", extra_info=cpu_model())
        for i in range(args.laps):
            _time.sleep(delay)
            lap(t, f"lap {i + 1}")
        calls = countdown(args.depth) + 1
        finish(t)

        PROFILER.report(context=cpu_model())
        if args.prometheus:
            registry = CollectorRegistry()
            PROFILER.export_prometheus(registry)
            sys.stdout.write(generate_latest(registry).decode("utf-8"))
    log.debug("demo finished: laps=%d profiled_calls=%d", args.laps, calls)
    return 0


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="aleo-std", description="Timing diagnostics and node storage helpers")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("features", help="Show which features are enabled")
    sp.set_defaults(func=_cmd_features)

    sp = sub.add_parser("cpu", help="Describe the host CPU")
    sp.add_argument("--cpuinfo", default="/proc/cpuinfo")
    sp.set_defaults(func=_cmd_cpu)

    sp = sub.add_parser("dirs", help="Print storage paths for a network")
    sp.add_argument("--network", type=int, required=True)
    sp.add_argument("--dev", type=int, default=None, help="Development instance id")
    sp.add_argument("--worker", type=int, default=0)
    sp.add_argument("--custom", default=None, help="Root the layout at this path")
    sp.set_defaults(func=_cmd_dirs)

    sp = sub.add_parser("demo", help="Run a timer and a profiled recursion")
    sp.add_argument("--laps", type=int, default=2)
    sp.add_argument("--depth", type=int, default=3)
    sp.add_argument("--sleep-ms", type=float, default=10.0)
    sp.add_argument("--prometheus", action="store_true", help="Also print the exported counters")
    sp.set_defaults(func=_cmd_demo)

    args = p.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
