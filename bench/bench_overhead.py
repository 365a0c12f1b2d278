from __future__ import annotations

import argparse
import json
import time

from aleo_std import ReportMode, Timer, null_sink, override, timed


def _plain(x: int) -> int:
    return x + 1


def run_once(calls: int, profiler: bool) -> dict:
    with override(timed=True, profiler=profiler):
        wrapped = timed(_plain, mode=ReportMode.BOTH, sink=null_sink)

    t0 = time.perf_counter()
    for i in range(calls):
        _plain(i)
    base = time.perf_counter() - t0

    with override(profiler=profiler):
        t0 = time.perf_counter()
        for i in range(calls):
            wrapped(i)
        instrumented = time.perf_counter() - t0

    t = Timer("lap", sink=null_sink)
    t0 = time.perf_counter()
    for _ in range(calls):
        t.lap()
    laps = time.perf_counter() - t0

    return {
        "calls": calls,
        "plain_ns_per_call": base / calls * 1e9,
        "timed_ns_per_call": instrumented / calls * 1e9,
        "lap_ns_per_call": laps / calls * 1e9,
    }


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--calls", type=int, default=100_000)
    ap.add_argument("--repeat", type=int, default=3)
    ap.add_argument("--profiler", action="store_true", help="Also record into the aggregate profiler")
    args = ap.parse_args()
    results = [run_once(args.calls, args.profiler) for _ in range(args.repeat)]
    out = {
        "runs": results,
        "avg_timed_overhead_ns": sum(r["timed_ns_per_call"] - r["plain_ns_per_call"] for r in results)
        / len(results),
    }
    print(json.dumps(out, indent=2))


if __name__ == "__main__":
    main()
