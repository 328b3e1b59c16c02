"""Unit tests for microbench.registry module."""

from __future__ import annotations

import pytest

from microbench.errors import InvalidInputError
from microbench.registry import (
    DEFAULT_ITERATIONS,
    BenchmarkProgress,
    BenchmarkRegistry,
)


class FakeClock:
    """Clock that only moves when a workload advances it."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000.0


def noop() -> None:
    pass


class TestRegister:
    """Tests for BenchmarkRegistry.register."""

    def test_starts_empty(self) -> None:
        """Test that a new registry has no entries."""
        registry = BenchmarkRegistry()

        assert registry.is_empty
        assert len(registry) == 0
        assert registry.run_all() == []

    def test_register_populates(self) -> None:
        """Test that registering moves the registry out of the empty state."""
        registry = BenchmarkRegistry()
        entry = registry.register("A", "cat1", noop)

        assert not registry.is_empty
        assert len(registry) == 1
        assert entry.iterations == DEFAULT_ITERATIONS
        assert registry.entries == (entry,)

    def test_duplicates_are_kept(self) -> None:
        """Test that the same (name, category) can be registered twice."""
        registry = BenchmarkRegistry()
        registry.register("A", "cat1", noop, iterations=1)
        registry.register("A", "cat1", noop, iterations=2)

        results = registry.run_all()

        assert [(r.name, r.category, r.iterations) for r in results] == [
            ("A", "cat1", 1),
            ("A", "cat1", 2),
        ]

    @pytest.mark.parametrize("iterations", [0, -1])
    def test_rejects_non_positive_iterations(self, iterations: int) -> None:
        """Test that every entry gets at least one timed iteration."""
        registry = BenchmarkRegistry()

        with pytest.raises(InvalidInputError):
            registry.register("A", "cat1", noop, iterations=iterations)
        assert registry.is_empty

    def test_decorator(self) -> None:
        """Test the decorator form of register."""
        registry = BenchmarkRegistry()

        @registry.benchmark("math", iterations=3)
        def squares() -> None:
            pass

        @registry.benchmark("math", name="cubes")
        def other() -> None:
            pass

        assert [(e.name, e.category, e.iterations) for e in registry.entries] == [
            ("squares", "math", 3),
            ("cubes", "math", DEFAULT_ITERATIONS),
        ]
        assert registry.entries[0].func is squares

    def test_categories_in_registration_order(self) -> None:
        """Test that categories are unique and ordered by first use."""
        registry = BenchmarkRegistry()
        registry.register("A", "iterate", noop)
        registry.register("B", "insert", noop)
        registry.register("C", "iterate", noop)

        assert registry.categories() == ["iterate", "insert"]


class TestRunAll:
    """Tests for BenchmarkRegistry.run_all."""

    def test_fixed_durations(self) -> None:
        """Test the 10/20/30 ms scenario with a fake clock."""
        clock = FakeClock()
        durations = iter([10.0, 20.0, 30.0])
        registry = BenchmarkRegistry(clock=clock)
        registry.register("A", "cat1", lambda: clock.advance_ms(next(durations)), 3)

        (result,) = registry.run_all()

        assert result.iterations == 3
        assert result.avg_ms == pytest.approx(20.0)
        assert result.total_ms == pytest.approx(60.0)
        assert result.median_ms == pytest.approx(20.0)
        assert result.min_ms == pytest.approx(10.0)
        assert result.max_ms == pytest.approx(30.0)

    def test_runs_each_iteration(self) -> None:
        """Test that a workload is invoked once per iteration."""
        calls: list[int] = []
        registry = BenchmarkRegistry()
        registry.register("A", "cat1", lambda: calls.append(1), iterations=7)

        registry.run_all()

        assert len(calls) == 7

    def test_registration_order(self) -> None:
        """Test that results follow registration order, not sort order."""
        registry = BenchmarkRegistry()
        for name, category in [("Z", "b"), ("A", "c"), ("M", "a")]:
            registry.register(name, category, noop, iterations=1)

        names = [r.name for r in registry.run_all()]

        assert names == ["Z", "A", "M"]

    def test_category_filter(self) -> None:
        """Test that only filtered categories run, in registration order."""
        ran: list[str] = []
        registry = BenchmarkRegistry()
        for name, category in [("A", "x"), ("B", "y"), ("C", "z"), ("D", "x")]:
            registry.register(name, category, lambda n=name: ran.append(n), 1)

        results = registry.run_all({"x", "z"})

        assert [r.name for r in results] == ["A", "C", "D"]
        assert ran == ["A", "C", "D"]

    @pytest.mark.parametrize("categories", [None, set(), []])
    def test_empty_filter_runs_everything(self, categories) -> None:
        """Test that an absent or empty filter selects every entry."""
        registry = BenchmarkRegistry()
        registry.register("A", "x", noop, 1)
        registry.register("B", "y", noop, 1)

        assert len(registry.run_all(categories)) == 2

    def test_single_string_filter(self) -> None:
        """Test that a bare category name selects that category."""
        registry = BenchmarkRegistry()
        registry.register("A", "insert", noop, 1)
        registry.register("B", "iterate", noop, 1)

        assert [r.name for r in registry.run_all("insert")] == ["A"]

    def test_unknown_category(self) -> None:
        """Test that a filter matching nothing yields no results."""
        registry = BenchmarkRegistry()
        registry.register("A", "x", noop, 1)

        assert registry.run_all(["nope"]) == []

    def test_repeatable(self) -> None:
        """Test that run_all leaves the catalog unchanged."""
        registry = BenchmarkRegistry()
        registry.register("A", "x", noop, 2)

        first = registry.run_all()
        second = registry.run_all()

        assert len(first) == len(second) == 1
        assert len(registry) == 1

    def test_workload_failure_aborts_run(self) -> None:
        """Test that a failing workload propagates and stops the run."""
        ran: list[str] = []

        def broken() -> None:
            raise RuntimeError("workload failed")

        registry = BenchmarkRegistry()
        registry.register("A", "x", lambda: ran.append("A"), 1)
        registry.register("B", "x", broken, 1)
        registry.register("C", "x", lambda: ran.append("C"), 1)

        with pytest.raises(RuntimeError, match="workload failed"):
            registry.run_all()
        assert ran == ["A"]

    def test_progress_callback(self) -> None:
        """Test that progress is reported before each selected entry."""
        events: list[BenchmarkProgress] = []
        registry = BenchmarkRegistry()
        registry.register("A", "x", noop, 1)
        registry.register("B", "y", noop, 1)
        registry.register("C", "x", noop, 1)

        registry.run_all(["x"], progress_callback=events.append)

        assert events == [
            BenchmarkProgress(name="A", category="x", index=0, total=2),
            BenchmarkProgress(name="C", category="x", index=1, total=2),
        ]
