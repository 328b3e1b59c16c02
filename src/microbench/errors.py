"""Exception types raised by the benchmark harness."""

from __future__ import annotations


class BenchmarkError(Exception):
    """Base class for all harness errors."""


class InvalidInputError(BenchmarkError, ValueError):
    """Raised when a caller passes input the harness cannot work with.

    Examples are an empty timing sample or a non-positive iteration count.
    """


class ConfigError(BenchmarkError, ValueError):
    """Raised when a suite configuration file holds invalid values."""


class BenchmarkIOError(BenchmarkError, OSError):
    """Raised when a snapshot or master log cannot be read or written."""


class LogFormatError(BenchmarkIOError):
    """Raised when a results file does not follow the expected layout."""
