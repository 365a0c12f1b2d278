"""Scoped timer demo.

Starts a timer, prints the time up to a midpoint, then the total.
"""
from __future__ import annotations

from aleo_std import enable, finish, lap, timer


def foo() -> int:
    # Start the timer.
    t = timer("Arithmetic")

    # Insert expensive operation here
    x = 1 + 1

    # Print the elapsed time up to this point.
    lap(t)

    # Insert expensive operation here
    y = 1 + 1

    # Print the total time elapsed.
    finish(t)

    return x + y


if __name__ == "__main__":
    enable("timer")
    foo()
