"""Benchmark registry and execution.

The registry is an explicitly constructed catalog of named, categorized
workloads. One registry is built per benchmark run and handed to whatever
needs it; there is no process-wide instance.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from microbench.errors import InvalidInputError
from microbench.stats import BenchmarkResult, reduce_durations
from microbench.timer import Clock, Workload, measure

logger = logging.getLogger(__name__)

DEFAULT_ITERATIONS = 10


@dataclass(frozen=True)
class WorkloadEntry:
    """A registered workload.

    Attributes:
        name: Benchmark name.
        category: Free-form grouping label.
        func: Zero-argument callable being timed.
        iterations: Number of timed invocations per run.
    """

    name: str
    category: str
    func: Workload
    iterations: int = DEFAULT_ITERATIONS


@dataclass(frozen=True)
class BenchmarkProgress:
    """Progress callback information.

    Attributes:
        name: Benchmark about to run.
        category: Its category.
        index: Zero-based position among the selected entries.
        total: Number of selected entries.
    """

    name: str
    category: str
    index: int
    total: int


# Type for progress callbacks
ProgressCallback = Callable[[BenchmarkProgress], None]


class BenchmarkRegistry:
    """Catalog of workloads, executed sequentially in registration order."""

    def __init__(self, clock: Clock = time.perf_counter) -> None:
        """Create an empty registry.

        Args:
            clock: Clock used by the timer; injectable for tests.
        """
        self._clock = clock
        self._entries: list[WorkloadEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def is_empty(self) -> bool:
        return not self._entries

    @property
    def entries(self) -> tuple[WorkloadEntry, ...]:
        return tuple(self._entries)

    def categories(self) -> list[str]:
        """Return the distinct categories in registration order."""
        return list(dict.fromkeys(entry.category for entry in self._entries))

    def register(
        self,
        name: str,
        category: str,
        func: Workload,
        iterations: int = DEFAULT_ITERATIONS,
    ) -> WorkloadEntry:
        """Add a workload to the catalog.

        Registering the same ``(name, category)`` twice adds a second,
        independent entry; both are timed and reported.

        Args:
            name: Benchmark name.
            category: Grouping label.
            func: Zero-argument callable to time.
            iterations: Timed invocations per run, at least 1.

        Returns:
            The new entry.

        Raises:
            InvalidInputError: If ``iterations`` is less than 1.
        """
        if iterations < 1:
            raise InvalidInputError(
                f"Benchmark {name!r} needs at least one iteration, got {iterations}"
            )
        entry = WorkloadEntry(name, category, func, iterations)
        self._entries.append(entry)
        logger.debug("Registered %s [%s] x%d", name, category, iterations)
        return entry

    def benchmark(
        self,
        category: str,
        name: str | None = None,
        iterations: int = DEFAULT_ITERATIONS,
    ) -> Callable[[Workload], Workload]:
        """Decorator form of :meth:`register`.

        The function's ``__name__`` is used when ``name`` is omitted; the
        decorated function is returned unchanged.
        """

        def decorator(func: Workload) -> Workload:
            self.register(name or func.__name__, category, func, iterations)
            return func

        return decorator

    def select(self, categories: Iterable[str] | None = None) -> list[WorkloadEntry]:
        """Return the entries matching a category filter.

        An absent or empty filter selects everything; a single string is
        treated as one category.
        """
        if isinstance(categories, str):
            categories = [categories]
        wanted = set(categories) if categories else set()
        if not wanted:
            return list(self._entries)
        return [entry for entry in self._entries if entry.category in wanted]

    def run_entry(self, entry: WorkloadEntry) -> BenchmarkResult:
        """Time one entry for its configured number of iterations."""
        durations = [measure(entry.func, self._clock) for _ in range(entry.iterations)]
        return reduce_durations(entry.name, entry.category, durations)

    def run_all(
        self,
        categories: Iterable[str] | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> list[BenchmarkResult]:
        """Run every selected entry and collect its result.

        Entries run one after another in registration order. An exception
        raised by a workload aborts the whole run and propagates.

        Args:
            categories: Categories to run; None or empty runs everything.
            progress_callback: Called before each entry starts.

        Returns:
            Results in registration order of the entries that ran.
        """
        selected = self.select(categories)
        logger.info("Running %d of %d benchmarks", len(selected), len(self._entries))

        results: list[BenchmarkResult] = []
        for index, entry in enumerate(selected):
            if progress_callback:
                progress_callback(
                    BenchmarkProgress(
                        name=entry.name,
                        category=entry.category,
                        index=index,
                        total=len(selected),
                    )
                )
            result = self.run_entry(entry)
            logger.debug(
                "%s [%s]: avg %.6fms", result.name, result.category, result.avg_ms
            )
            results.append(result)

        return results
