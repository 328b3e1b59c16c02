"""Suite configuration loaded from YAML."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from microbench.errors import ConfigError
from microbench.registry import DEFAULT_ITERATIONS
from microbench.workloads import DEFAULT_SIZE


@dataclass
class SuiteConfig:
    """Configuration for a benchmark run.

    Attributes:
        name: Suite name.
        output_dir: Directory receiving snapshots and the master log.
        log_file: Master log file name inside ``output_dir``.
        run_label: Label for result rows; None means detect the interpreter.
        iterations: Timed invocations per workload.
        size: Element count for the container workloads.
        categories: Categories to run; empty runs everything.
    """

    name: str = "containers"
    output_dir: Path = Path("results")
    log_file: str = "master_results.csv"
    run_label: str | None = None
    iterations: int = DEFAULT_ITERATIONS
    size: int = DEFAULT_SIZE
    categories: list[str] = field(default_factory=list)

    @property
    def log_path(self) -> Path:
        return self.output_dir / self.log_file


def load_suite_config(config_path: Path | str) -> SuiteConfig:
    """Load suite configuration from YAML.

    Relative ``output_dir`` values are resolved against the directory
    holding the YAML file. A missing file yields the defaults.

    Args:
        config_path: Path to the suite YAML file.

    Returns:
        SuiteConfig configuration.

    Raises:
        ConfigError: If the file is not a mapping or holds invalid values.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        return SuiteConfig()

    with config_path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path}: expected a mapping at top level")

    config = SuiteConfig()
    config.name = str(data.get("name", config.name))

    output_dir = Path(data.get("output_dir", config.output_dir))
    if not output_dir.is_absolute():
        output_dir = config_path.parent / output_dir
    config.output_dir = output_dir

    config.log_file = str(data.get("log_file", config.log_file))
    if data.get("run_label") is not None:
        config.run_label = str(data["run_label"])

    config.iterations = _positive_int(data, "iterations", config.iterations, config_path)
    config.size = _positive_int(data, "size", config.size, config_path)

    categories = data.get("categories") or []
    if not isinstance(categories, list):
        raise ConfigError(f"{config_path}: 'categories' must be a list")
    config.categories = [str(c) for c in categories]

    return config


def _positive_int(data: dict, key: str, default: int, config_path: Path) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"{config_path}: '{key}' must be a positive integer")
    return value
