"""Unit tests for microbench.runtimes module."""

from __future__ import annotations

import pytest

from microbench.runtimes import (
    RuntimeInfo,
    detect_runtime,
    label_slug,
    run_label,
    sanitize_label,
)


class TestDetectRuntime:
    """Tests for detect_runtime function."""

    def test_detects_current_interpreter(self) -> None:
        """Test that the running interpreter is described."""
        info = detect_runtime()

        assert info.name
        assert "." in info.version
        assert info.implementation_version

    def test_runtime_info_immutable(self) -> None:
        """Test that RuntimeInfo is immutable."""
        info = detect_runtime()

        with pytest.raises(Exception):  # FrozenInstanceError
            info.name = "other"  # type: ignore[misc]


class TestRunLabel:
    """Tests for run label helpers."""

    def test_cpython_label(self) -> None:
        """Test label when implementation and language versions match."""
        info = RuntimeInfo("CPython", "3.12.1", "3.12.1", "GCC 13.2.0")

        assert run_label(info) == "CPython 3.12.1"

    def test_pypy_label(self) -> None:
        """Test that a distinct implementation version is appended."""
        info = RuntimeInfo("PyPy", "3.10.14", "7.3.17", "GCC 10.2.1")

        assert run_label(info) == "PyPy 3.10.14 (7.3.17)"

    def test_default_label_has_no_delimiter(self) -> None:
        """Test the label for the running interpreter."""
        label = run_label()

        assert label
        assert "," not in label

    def test_sanitize_label(self) -> None:
        """Test that commas and extra whitespace are removed."""
        assert sanitize_label("  GCC 13,  -O2 ") == "GCC 13; -O2"

    @pytest.mark.parametrize(
        ("label", "slug"),
        [
            ("CPython 3.12.1", "cpython-3.12.1"),
            ("PyPy 3.10.14 (7.3.17)", "pypy-3.10.14-7.3.17"),
            ("///", "run"),
        ],
    )
    def test_label_slug(self, label: str, slug: str) -> None:
        """Test conversion of labels to file-name fragments."""
        assert label_slug(label) == slug
