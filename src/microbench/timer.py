"""Wall-clock timing of a single workload invocation."""

from __future__ import annotations

import time
from collections.abc import Callable

# Clock returning seconds as a float
Clock = Callable[[], float]

Workload = Callable[[], object]


def measure(func: Workload, clock: Clock = time.perf_counter) -> float:
    """Invoke ``func`` once and return the elapsed time in milliseconds.

    Timer overhead is part of the measurement. Exceptions raised by the
    workload propagate to the caller.

    Args:
        func: Zero-argument workload.
        clock: Monotonic clock returning seconds.

    Returns:
        Elapsed wall-clock time in milliseconds.
    """
    start = clock()
    func()
    end = clock()
    return (end - start) * 1000.0
