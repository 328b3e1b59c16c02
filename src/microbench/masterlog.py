"""Master results log.

The master log accumulates rows from every run. Each merge reads the
existing rows, adds the new ones, sorts everything by (category, name) and
rewrites the whole file under a fresh timestamp.

Log format, version 2::

    Date:,2026-10-19 14:03:12
    Compiler,Benchmark,Category,Iterations,Average(Ms),...
    <data rows sorted by category, then benchmark name>

The header region is read structurally: a leading ``Date:`` line and the
column header are recognized by content, so files written with only the
column header (version 1) are read as well.
"""

from __future__ import annotations

import csv
import logging
import os
import tempfile
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from microbench.errors import BenchmarkIOError, LogFormatError
from microbench.results import COLUMNS, LogRow, label_results, parse_rows, write_rows
from microbench.stats import BenchmarkResult

logger = logging.getLogger(__name__)

LOG_FORMAT_VERSION = 2

# Number of metadata lines preceding the data rows: date stamp, column header
HEADER_LINES = 2

DATE_MARKER = "Date:"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class MasterLog:
    """In-memory contents of a master log.

    Attributes:
        last_updated: Timestamp from the ``Date:`` line, if present.
        rows: Data rows in file order.
    """

    last_updated: datetime | None = None
    rows: list[LogRow] = field(default_factory=list)


def sort_rows(rows: Iterable[LogRow]) -> list[LogRow]:
    """Sort rows by category, then benchmark name.

    The sort is stable: rows with the same key keep their arrival order.
    """
    return sorted(rows, key=lambda row: row.sort_key)


def read_log(path: Path | str) -> MasterLog:
    """Read a master log.

    A missing file is an empty log.

    Raises:
        BenchmarkIOError: If the file exists but cannot be read.
        LogFormatError: If the date stamp or a data row is malformed.
    """
    path = Path(path)
    if not path.exists():
        return MasterLog()

    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        raise BenchmarkIOError(f"Cannot read log {path}: {e}") from e

    log = MasterLog()
    header_end = 0
    for fields in csv.reader(lines[:HEADER_LINES], dialect="microbench"):
        if header_end == 0 and fields and fields[0] == DATE_MARKER:
            log.last_updated = _parse_timestamp(fields, path)
        elif fields != list(COLUMNS):
            break
        header_end += 1

    log.rows = parse_rows(lines[header_end:], path, first_line=header_end + 1)
    return log


def _parse_timestamp(fields: Sequence[str], path: Path) -> datetime:
    if len(fields) != 2:
        raise LogFormatError(f"{path}:1: malformed date line")
    try:
        return datetime.strptime(fields[1], TIMESTAMP_FORMAT)
    except ValueError as e:
        raise LogFormatError(f"{path}:1: malformed date line: {e}") from e


def write_log(
    path: Path | str, rows: Iterable[LogRow], now: datetime | None = None
) -> None:
    """Rewrite the master log with a fresh date stamp.

    Rows are written in the order given. The content goes to a temporary
    file next to ``path`` which then replaces it, so the existing log is
    untouched if writing fails.

    Args:
        path: Log file to replace.
        rows: Data rows.
        now: Timestamp for the date line; defaults to local time.

    Raises:
        BenchmarkIOError: If the file cannot be written.
    """
    path = Path(path)
    stamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)

    tmp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            newline="",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            csv.writer(f, dialect="microbench").writerow([DATE_MARKER, stamp])
            write_rows(f, rows)
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        if isinstance(e, BenchmarkIOError):
            raise
        raise BenchmarkIOError(f"Cannot write log {path}: {e}") from e


def merge_rows_into_log(
    path: Path | str, rows: Iterable[LogRow], now: datetime | None = None
) -> bool:
    """Fold rows into the master log and rewrite it sorted.

    Failures are logged and reported through the return value; the log is
    left as it was.

    Returns:
        True on success, False if the log could not be read or written.
    """
    path = Path(path)
    try:
        log = read_log(path)
        merged = sort_rows([*log.rows, *rows])
        write_log(path, merged, now=now)
    except OSError as e:
        logger.error("Could not merge into %s: %s", path, e)
        return False

    logger.info("Appended results to: %s (%d rows)", path, len(merged))
    return True


def merge_into_log(
    path: Path | str,
    run_label: str,
    results: Sequence[BenchmarkResult],
    now: datetime | None = None,
) -> bool:
    """Merge a run's results into the master log.

    Args:
        path: Master log file; created if missing.
        run_label: Label written in the first column of the new rows.
        results: Results of the run.
        now: Timestamp for the date line; defaults to local time.

    Returns:
        True on success, False if the log could not be read or written.
    """
    return merge_rows_into_log(path, label_results(run_label, results), now=now)
