"""Unit tests for microbench.workloads module."""

from __future__ import annotations

from microbench.registry import BenchmarkRegistry
from microbench.workloads import generate_value, register_container_workloads


class TestGenerateValue:
    """Tests for generate_value function."""

    def test_known_values(self) -> None:
        """Test the value sequence."""
        assert generate_value(0) == 0.0
        assert generate_value(1) == 0.037
        assert generate_value(27) == 0.999
        assert generate_value(1000) == 0.0

    def test_range(self) -> None:
        """Test that values stay in [0, 1)."""
        assert all(0.0 <= generate_value(i) < 1.0 for i in range(5000))


class TestRegisterContainerWorkloads:
    """Tests for register_container_workloads function."""

    def test_registers_both_categories(self) -> None:
        """Test that insert and iterate workloads are registered."""
        registry = BenchmarkRegistry()
        register_container_workloads(registry, size=10, iterations=3)

        assert registry.categories() == ["insert", "iterate"]
        assert all(entry.iterations == 3 for entry in registry.entries)
        names = {(e.category, e.name) for e in registry.entries}
        assert ("insert", "list_append") in names
        assert ("iterate", "dict_values") in names

    def test_workloads_run(self) -> None:
        """Test that every workload runs and produces a result."""
        registry = BenchmarkRegistry()
        register_container_workloads(registry, size=50, iterations=2)

        results = registry.run_all()

        assert len(results) == len(registry)
        assert all(r.iterations == 2 for r in results)
        assert all(r.min_ms >= 0.0 for r in results)
