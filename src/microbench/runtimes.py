"""Runtime detection for labelling benchmark runs.

Results from different interpreters end up in the same master log, so each
row carries a label naming the interpreter that produced it.
"""

from __future__ import annotations

import platform
import re
import sys
from dataclasses import dataclass


@dataclass(frozen=True)
class RuntimeInfo:
    """Information about the running interpreter.

    Attributes:
        name: Implementation name ("CPython", "PyPy", ...).
        version: Python language version (e.g., "3.12.1").
        implementation_version: Implementation's own version; differs from
            ``version`` for PyPy (e.g., "7.3.15").
        compiler: Compiler the interpreter was built with (e.g., "GCC 13.2.0").
    """

    name: str
    version: str
    implementation_version: str
    compiler: str


def _format_version(info: tuple[int, ...]) -> str:
    return ".".join(str(part) for part in info[:3])


def detect_runtime() -> RuntimeInfo:
    """Describe the interpreter this process runs on."""
    return RuntimeInfo(
        name=platform.python_implementation(),
        version=platform.python_version(),
        implementation_version=_format_version(tuple(sys.implementation.version)),
        compiler=platform.python_compiler(),
    )


def run_label(info: RuntimeInfo | None = None) -> str:
    """Build the run label written in the first column of result rows.

    Commas are replaced so the label never contains the field delimiter.

    Returns:
        Label like "CPython 3.12.1" or "PyPy 3.10.14 (7.3.15)".
    """
    info = info or detect_runtime()
    label = f"{info.name} {info.version}"
    if info.implementation_version != info.version:
        label += f" ({info.implementation_version})"
    return sanitize_label(label)


def sanitize_label(label: str) -> str:
    """Make an arbitrary string safe to use as a run label."""
    return " ".join(label.replace(",", ";").split())


def label_slug(label: str) -> str:
    """Turn a run label into a file-name fragment ("CPython 3.12.1" -> "cpython-3.12.1")."""
    slug = re.sub(r"[^A-Za-z0-9.]+", "-", label).strip("-").lower()
    return slug or "run"
