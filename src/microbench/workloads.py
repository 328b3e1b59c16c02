"""Example workloads: container insert and iterate micro-benchmarks.

Each workload is a zero-argument closure over a prepared container, so
setup cost stays out of the measurement.
"""

from __future__ import annotations

import bisect
from array import array
from collections import deque

from microbench.registry import DEFAULT_ITERATIONS, BenchmarkRegistry
from microbench.timer import Workload

DEFAULT_SIZE = 100_000

# Keeps iteration results reachable so the loops are not trivially dead
_sink: list[float] = [0.0]


def generate_value(i: int) -> float:
    """Deterministic pseudo-random value in [0, 1)."""
    return ((i * 37) % 1000) / 1000.0


def do_not_optimize(value: float) -> None:
    _sink[0] = value


def _insert_list(size: int) -> Workload:
    def run() -> None:
        data: list[float] = []
        for i in range(size):
            data.append(generate_value(i))
        do_not_optimize(data[-1])

    return run


def _insert_deque(size: int) -> Workload:
    def run() -> None:
        data: deque[float] = deque()
        for i in range(size):
            data.append(generate_value(i))
        do_not_optimize(data[-1])

    return run


def _insert_deque_front(size: int) -> Workload:
    def run() -> None:
        data: deque[float] = deque()
        for i in range(size):
            data.appendleft(generate_value(i))
        do_not_optimize(data[0])

    return run


def _insert_array(size: int) -> Workload:
    def run() -> None:
        data = array("f")
        for i in range(size):
            data.append(generate_value(i))
        do_not_optimize(data[-1])

    return run


def _insert_dict(size: int) -> Workload:
    def run() -> None:
        data: dict[int, float] = {}
        for i in range(size):
            data[i] = generate_value(i)
        do_not_optimize(data[size - 1])

    return run


def _insert_set(size: int) -> Workload:
    def run() -> None:
        data: set[int] = set()
        for i in range(size):
            data.add(i)
        do_not_optimize(float(len(data)))

    return run


def _insert_sorted(size: int) -> Workload:
    # Quadratic, so capped to keep a default run short
    count = min(size, 10_000)

    def run() -> None:
        data: list[float] = []
        for i in range(count):
            bisect.insort(data, generate_value(i))
        do_not_optimize(data[-1])

    return run


def _iterate(container) -> Workload:
    def run() -> None:
        total = 0.0
        for value in container:
            total += value
        do_not_optimize(total)

    return run


def _iterate_dict(data: dict[int, float]) -> Workload:
    def run() -> None:
        total = 0.0
        for value in data.values():
            total += value
        do_not_optimize(total)

    return run


def register_container_workloads(
    registry: BenchmarkRegistry,
    size: int = DEFAULT_SIZE,
    iterations: int = DEFAULT_ITERATIONS,
) -> None:
    """Register the container insert and iterate benchmarks.

    Args:
        registry: Registry to add the workloads to.
        size: Number of elements per container.
        iterations: Timed invocations per workload.
    """
    values = [generate_value(i) for i in range(size)]

    registry.register("list_append", "insert", _insert_list(size), iterations)
    registry.register("deque_append", "insert", _insert_deque(size), iterations)
    registry.register("deque_appendleft", "insert", _insert_deque_front(size), iterations)
    registry.register("array_append", "insert", _insert_array(size), iterations)
    registry.register("dict_setitem", "insert", _insert_dict(size), iterations)
    registry.register("set_add", "insert", _insert_set(size), iterations)
    registry.register("list_insort", "insert", _insert_sorted(size), iterations)

    registry.register("list", "iterate", _iterate(list(values)), iterations)
    registry.register("tuple", "iterate", _iterate(tuple(values)), iterations)
    registry.register("deque", "iterate", _iterate(deque(values)), iterations)
    registry.register("array", "iterate", _iterate(array("f", values)), iterations)
    registry.register(
        "dict_values", "iterate", _iterate_dict(dict(enumerate(values))), iterations
    )
