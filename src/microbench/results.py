"""Delimited result files.

Row layout shared by per-run snapshots and the master log, plus the
snapshot writer and reader. New numbers are written with six decimals and
a ``.`` radix point regardless of locale, so output is byte-stable; rows
read from a file are written back as they were read.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from microbench.errors import BenchmarkIOError, LogFormatError
from microbench.stats import BenchmarkResult

logger = logging.getLogger(__name__)

COLUMNS = (
    "Compiler",
    "Benchmark",
    "Category",
    "Iterations",
    "Average(Ms)",
    "Total(Ms)",
    "Median(Ms)",
    "Min(Ms)",
    "Max(Ms)",
)

# Fields are never quoted; a value containing the delimiter is rejected
csv.register_dialect(
    "microbench",
    delimiter=",",
    quoting=csv.QUOTE_NONE,
    quotechar=None,
    lineterminator="\n",
    strict=True,
)


def format_number(value: float) -> str:
    """Format a duration with fixed six-decimal precision."""
    return f"{value:.6f}"


@dataclass(frozen=True)
class LogRow:
    """One result row: a run label plus the result it labels.

    Attributes:
        run_label: Interpreter/environment identifier (e.g., "CPython 3.12.1").
        result: The benchmark result.
        fields: Serialized fields as read from a file; written back unchanged
            so historical rows keep their exact text.
    """

    run_label: str
    result: BenchmarkResult
    fields: tuple[str, ...] | None = field(default=None, compare=False, repr=False)

    @property
    def name(self) -> str:
        return self.result.name

    @property
    def category(self) -> str:
        return self.result.category

    @property
    def sort_key(self) -> tuple[str, str]:
        return self.result.category, self.result.name

    def to_fields(self) -> list[str]:
        if self.fields is not None:
            return list(self.fields)
        r = self.result
        return [
            self.run_label,
            r.name,
            r.category,
            str(r.iterations),
            format_number(r.avg_ms),
            format_number(r.total_ms),
            format_number(r.median_ms),
            format_number(r.min_ms),
            format_number(r.max_ms),
        ]

    @classmethod
    def from_fields(cls, fields: Sequence[str]) -> LogRow:
        """Parse a row previously written by :meth:`to_fields`.

        The original text of every field is kept on the row.

        Raises:
            ValueError: If the field count or a numeric field is wrong.
        """
        if len(fields) != len(COLUMNS):
            raise ValueError(f"expected {len(COLUMNS)} fields, got {len(fields)}")

        label, name, category, iterations, *numbers = fields
        avg, total, median, low, high = (float(n) for n in numbers)
        result = BenchmarkResult(
            name=name,
            category=category,
            iterations=int(iterations),
            avg_ms=avg,
            total_ms=total,
            median_ms=median,
            min_ms=low,
            max_ms=high,
        )
        return cls(run_label=label, result=result, fields=tuple(fields))


def label_results(run_label: str, results: Iterable[BenchmarkResult]) -> list[LogRow]:
    """Attach a run label to each result, preserving order."""
    return [LogRow(run_label, result) for result in results]


def write_rows(handle: TextIO, rows: Iterable[LogRow]) -> None:
    """Write the column header followed by ``rows`` to an open text file.

    Raises:
        LogFormatError: If a field contains the delimiter or a newline.
    """
    writer = csv.writer(handle, dialect="microbench")
    writer.writerow(COLUMNS)
    for row in rows:
        try:
            writer.writerow(row.to_fields())
        except csv.Error as e:
            raise LogFormatError(f"Cannot serialize row {row.sort_key}: {e}") from e


def parse_rows(
    lines: Iterable[str], source: Path | str, first_line: int = 1
) -> list[LogRow]:
    """Parse data lines into rows, skipping blank lines.

    Args:
        lines: Data lines (no header).
        source: File name used in error messages.
        first_line: Line number of the first data line in the file.

    Raises:
        LogFormatError: If a line is not a valid result row.
    """
    rows: list[LogRow] = []
    reader = csv.reader(lines, dialect="microbench")
    for fields in reader:
        if not fields:
            continue
        try:
            rows.append(LogRow.from_fields(fields))
        except ValueError as e:
            raise LogFormatError(
                f"{source}:{first_line + reader.line_num - 1}: malformed result row: {e}"
            ) from e
    return rows


def read_snapshot(path: Path | str) -> list[LogRow]:
    """Read the rows of a snapshot file written by :func:`write_snapshot`.

    Raises:
        BenchmarkIOError: If the file cannot be read.
        LogFormatError: If the header or a row is malformed.
    """
    path = Path(path)
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        raise BenchmarkIOError(f"Cannot read snapshot {path}: {e}") from e

    if not lines or next(csv.reader(lines[:1], dialect="microbench")) != list(COLUMNS):
        raise LogFormatError(f"{path}: missing column header")
    return parse_rows(lines[1:], path, first_line=2)


def write_snapshot(
    path: Path | str, run_label: str, results: Sequence[BenchmarkResult]
) -> bool:
    """Write one run's results to a fresh file.

    The parent directory must already exist. Rows are written in the order
    given. Failures are logged and reported through the return value.

    Args:
        path: Destination file; truncated if it exists.
        run_label: Label written in the first column of every row.
        results: Results of the run.

    Returns:
        True on success, False if the file could not be written.
    """
    path = Path(path)
    if not path.parent.is_dir():
        logger.error("Could not write to %s: directory does not exist", path)
        return False

    try:
        with path.open("w", encoding="utf-8", newline="") as f:
            write_rows(f, label_results(run_label, results))
    except (OSError, LogFormatError) as e:
        logger.error("Could not write to %s: %s", path, e)
        return False

    logger.info("Results written to: %s", path)
    return True


def format_results_table(rows: Sequence[LogRow]) -> str:
    """Format result rows as a console table.

    Args:
        rows: Rows to display, in display order.

    Returns:
        Formatted table string.
    """
    lines = []
    header = (
        f"{'Benchmark':<24} {'Category':<12} {'Label':<16} {'Iter':>6} "
        f"{'Avg(ms)':>12} {'Median(ms)':>12} {'Min(ms)':>12} {'Max(ms)':>12}"
    )
    lines.append(header)
    lines.append("-" * len(header))

    for row in rows:
        r = row.result
        lines.append(
            f"{r.name:<24} {r.category:<12} {row.run_label:<16} {r.iterations:>6} "
            f"{r.avg_ms:>12.6f} {r.median_ms:>12.6f} {r.min_ms:>12.6f} {r.max_ms:>12.6f}"
        )

    lines.append("-" * len(header))
    lines.append(f"Total: {len(rows)} result(s)")
    return "\n".join(lines)
