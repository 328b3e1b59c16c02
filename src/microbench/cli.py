"""Command-line interface for the benchmark harness.

Provides the `microbench` command with subcommands for:
- Running the container benchmarks
- Listing registered benchmarks
- Merging a saved snapshot into the master log
- Showing the master log
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from microbench.config import SuiteConfig, load_suite_config
from microbench.errors import BenchmarkIOError, ConfigError
from microbench.masterlog import merge_into_log, merge_rows_into_log, read_log
from microbench.registry import BenchmarkProgress, BenchmarkRegistry
from microbench.results import (
    format_results_table,
    label_results,
    read_snapshot,
    write_snapshot,
)
from microbench.runtimes import label_slug, run_label, sanitize_label
from microbench.workloads import register_container_workloads

DEFAULT_SUITE_PATH = Path("microbench.yaml")


def _load_config(args: argparse.Namespace) -> SuiteConfig:
    suite_path = Path(args.suite) if args.suite else DEFAULT_SUITE_PATH
    config = load_suite_config(suite_path)

    # Command-line overrides
    if getattr(args, "output_dir", None):
        config.output_dir = Path(args.output_dir)
    if getattr(args, "label", None):
        config.run_label = args.label
    if getattr(args, "iterations", None) is not None:
        config.iterations = args.iterations
    if getattr(args, "size", None) is not None:
        config.size = args.size
    if getattr(args, "category", None):
        config.categories = args.category
    return config


def build_registry(config: SuiteConfig) -> BenchmarkRegistry:
    """Create a registry holding the configured workloads."""
    registry = BenchmarkRegistry()
    register_container_workloads(registry, size=config.size, iterations=config.iterations)
    return registry


def snapshot_path(output_dir: Path, label: str, now: datetime) -> Path:
    """Path of the snapshot file for a run started at ``now``."""
    return output_dir / f"{label_slug(label)}_{now:%Y%m%d-%H%M%S}.csv"


def cmd_run(args: argparse.Namespace) -> int:
    """Run benchmarks."""
    config = _load_config(args)
    if config.iterations < 1 or config.size < 1:
        print("Error: --iterations and --size must be positive")
        return 1

    label = sanitize_label(config.run_label) if config.run_label else run_label()
    registry = build_registry(config)

    def progress(p: BenchmarkProgress) -> None:
        print(
            f"  [{p.index + 1}/{p.total}] {p.category}/{p.name}...",
            end="\r",
            flush=True,
        )

    print(f"microbench: {config.name} ({label})")
    categories = ", ".join(config.categories) or "all"
    print(f"  Categories: {categories}")
    print(f"  Iterations: {config.iterations}, size: {config.size}")
    print()

    started = datetime.now()
    results = registry.run_all(
        config.categories, progress_callback=progress if not args.quiet else None
    )

    # Clear progress line and print results
    print(" " * 60, end="\r")
    print(format_results_table(label_results(label, results)))

    if not results:
        print("\nNo benchmarks matched the category filter.")
        return 0

    config.output_dir.mkdir(parents=True, exist_ok=True)

    status = 0
    snapshot = snapshot_path(config.output_dir, label, started)
    if write_snapshot(snapshot, label, results):
        print(f"\nResults written to: {snapshot}")
    else:
        status = 1

    if not args.no_log:
        if merge_into_log(config.log_path, label, results):
            print(f"Appended results to: {config.log_path}")
        else:
            status = 1

    return status


def cmd_list(args: argparse.Namespace) -> int:
    """List registered benchmarks."""
    config = _load_config(args)
    registry = build_registry(config)

    print("Registered Benchmarks")
    print("=" * 50)
    print(f"{'Category':<12} {'Benchmark':<24} {'Iter':>6}")
    print("-" * 50)
    for entry in registry.select(config.categories):
        print(f"{entry.category:<12} {entry.name:<24} {entry.iterations:>6}")
    print("-" * 50)
    print(f"Categories: {', '.join(registry.categories())}")

    return 0


def cmd_merge(args: argparse.Namespace) -> int:
    """Merge a snapshot file into the master log."""
    config = _load_config(args)
    log_path = Path(args.log) if args.log else config.log_path

    try:
        rows = read_snapshot(args.snapshot)
    except BenchmarkIOError as e:
        print(f"Error: {e}")
        return 1

    if not merge_rows_into_log(log_path, rows):
        return 1

    print(f"Merged {len(rows)} row(s) from {args.snapshot} into {log_path}")
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    """Show the master log."""
    config = _load_config(args)
    log_path = Path(args.log) if args.log else config.log_path

    if not log_path.exists():
        print(f"No master log found at {log_path}.")
        return 0

    try:
        log = read_log(log_path)
    except BenchmarkIOError as e:
        print(f"Error: {e}")
        return 1

    if log.last_updated:
        print(f"Last updated: {log.last_updated:%Y-%m-%d %H:%M:%S}")
    print(format_results_table(log.rows))
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="microbench",
        description="Container micro-benchmark harness with a merged results log",
    )
    parser.add_argument(
        "--suite",
        help="Path to suite YAML configuration (default: microbench.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only log errors and suppress progress output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # run command
    run_parser = subparsers.add_parser("run", help="Run benchmarks")
    run_parser.add_argument(
        "-c",
        "--category",
        action="append",
        help="Run only this category (repeatable)",
    )
    run_parser.add_argument(
        "--iterations",
        type=int,
        help="Timed iterations per benchmark (default: 10)",
    )
    run_parser.add_argument(
        "--size",
        type=int,
        help="Elements per container (default: 100000)",
    )
    run_parser.add_argument(
        "--label",
        help="Run label for result rows (default: detected interpreter)",
    )
    run_parser.add_argument(
        "-o",
        "--output-dir",
        help="Directory for snapshot and master log files",
    )
    run_parser.add_argument(
        "--no-log",
        action="store_true",
        help="Write the snapshot only, do not merge into the master log",
    )
    run_parser.set_defaults(func=cmd_run)

    # list command
    list_parser = subparsers.add_parser("list", help="List registered benchmarks")
    list_parser.add_argument(
        "-c",
        "--category",
        action="append",
        help="List only this category (repeatable)",
    )
    list_parser.set_defaults(func=cmd_list)

    # merge command
    merge_parser = subparsers.add_parser(
        "merge", help="Merge a snapshot file into the master log"
    )
    merge_parser.add_argument("snapshot", help="Snapshot CSV file")
    merge_parser.add_argument("--log", help="Master log path (default: from suite)")
    merge_parser.set_defaults(func=cmd_merge)

    # show command
    show_parser = subparsers.add_parser("show", help="Show the master log")
    show_parser.add_argument("--log", help="Master log path (default: from suite)")
    show_parser.set_defaults(func=cmd_show)

    return parser


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Send library log records to stderr."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(name)s: %(message)s")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except ConfigError as e:
        print(f"Error loading suite configuration: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
