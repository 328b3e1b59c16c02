"""Summary statistics for benchmark timings.

Folds the per-iteration durations of one workload into a single
``BenchmarkResult`` holding average, total, median, min and max.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from microbench.errors import InvalidInputError


@dataclass(frozen=True)
class BenchmarkResult:
    """Summary of one benchmark entry for a single run.

    All durations are in milliseconds.

    Attributes:
        name: Benchmark name (e.g., "list_append").
        category: Grouping label (e.g., "insert").
        iterations: Number of timed invocations.
        avg_ms: Mean duration (``total_ms / iterations``).
        total_ms: Sum of all durations.
        median_ms: Upper median of the sorted durations.
        min_ms: Shortest duration.
        max_ms: Longest duration.
    """

    name: str
    category: str
    iterations: int
    avg_ms: float
    total_ms: float
    median_ms: float
    min_ms: float
    max_ms: float


def reduce_durations(
    name: str, category: str, durations: Sequence[float]
) -> BenchmarkResult:
    """Compute summary statistics from timing data.

    The median is the element at index ``len // 2`` of the sorted samples,
    so for an even count it is the upper of the two middle values rather
    than their average. Existing result logs depend on this.

    Args:
        name: Benchmark name.
        category: Benchmark category.
        durations: Per-iteration durations in milliseconds.

    Returns:
        BenchmarkResult for the samples.

    Raises:
        InvalidInputError: If ``durations`` is empty.
    """
    if not durations:
        raise InvalidInputError(f"No timing samples for benchmark {name!r}")

    times = sorted(durations)
    count = len(times)
    total = sum(times)

    return BenchmarkResult(
        name=name,
        category=category,
        iterations=count,
        avg_ms=total / count,
        total_ms=total,
        median_ms=times[count // 2],
        min_ms=times[0],
        max_ms=times[-1],
    )


def format_result(result: BenchmarkResult) -> str:
    """Format a result for display.

    Returns:
        Formatted string like "list_append [insert]: 1.234ms avg (10 runs)".
    """
    return (
        f"{result.name} [{result.category}]: "
        f"{result.avg_ms:.3f}ms avg ({result.iterations} runs)"
    )
