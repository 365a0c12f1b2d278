"""Call profiler demo: nested calls, marks and the aggregate report."""
from __future__ import annotations

import time

from aleo_std import PROFILER, enable, mark, timed

enable("timed", "profiler")


@timed
def parse(n: int) -> list[int]:
    time.sleep(0.002)
    return list(range(n))


@timed
def fold(xs: list[int]) -> int:
    if len(xs) <= 1:
        return sum(xs)
    mid = len(xs) // 2
    return fold(xs[:mid]) + fold(xs[mid:])


@timed
def pipeline(n: int) -> int:
    xs = parse(n)
    mark("parsed")
    total = fold(xs)
    mark("folded")
    return total


if __name__ == "__main__":
    print(pipeline(4))
    PROFILER.report()
