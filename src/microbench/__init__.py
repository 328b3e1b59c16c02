"""microbench: container micro-benchmark harness.

This package provides:
- A registry of named, categorized workloads, timed sequentially
- Summary statistics (average, total, median, min, max) per workload
- Per-run CSV snapshots and a merged, sorted master results log
"""

from __future__ import annotations

from microbench.errors import (
    BenchmarkError,
    BenchmarkIOError,
    ConfigError,
    InvalidInputError,
    LogFormatError,
)
from microbench.masterlog import MasterLog, merge_into_log, read_log
from microbench.registry import BenchmarkProgress, BenchmarkRegistry, WorkloadEntry
from microbench.results import LogRow, read_snapshot, write_snapshot
from microbench.runtimes import RuntimeInfo, detect_runtime, run_label
from microbench.stats import BenchmarkResult, reduce_durations
from microbench.timer import measure

__all__ = [
    "BenchmarkError",
    "BenchmarkIOError",
    "BenchmarkProgress",
    "BenchmarkRegistry",
    "BenchmarkResult",
    "ConfigError",
    "InvalidInputError",
    "LogFormatError",
    "LogRow",
    "MasterLog",
    "RuntimeInfo",
    "WorkloadEntry",
    "detect_runtime",
    "measure",
    "merge_into_log",
    "read_log",
    "read_snapshot",
    "reduce_durations",
    "run_label",
    "write_snapshot",
]
