"""Run command - discovers benchmark groups and runs them.

CLI Examples:
    quickbench run benchmarks/                  # Run every group found
    quickbench run -m mypkg.bench               # Scan an importable module
    quickbench run benchmarks/ -g ListBuilding  # Run one group
    quickbench run benchmarks/ -r 3             # Three passes
    quickbench run benchmarks/ -a 100000        # Pass argv to init hooks
    quickbench run benchmarks/ -o results.json  # Save structured results
    quickbench run --config bench.yaml          # Use config file
"""

import os
import sys
from pathlib import Path
from typing import Any

import click
import yaml
from pydantic import ValidationError

from quickbench.harness import (
    BenchmarkGroup,
    ConsoleReporter,
    GroupNotFoundError,
    GroupRegistry,
    GroupRegistryError,
    OutputFormat,
    run_benchmarks,
)
from quickbench.models import RunConfiguration
from quickbench.utils.env import SettingError, get_setting


def load_config(config_path: str) -> dict[str, Any]:
    """Load run configuration from a YAML file.

    Config format:
        run:
          repeat_count: 3
          collect_garbage: true

        paths:
          - benchmarks/
        modules:
          - mypkg.bench
        groups:
          - ListBuilding
        args:
          - "100000"

    Raises:
        click.ClickException: If file not found or invalid YAML.
    """
    path = Path(config_path)
    if not path.exists():
        raise click.ClickException(f"Config file not found: {config_path}")

    try:
        with open(path) as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise click.ClickException(f"Error parsing config: {e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise click.ClickException("Config must be a YAML dictionary")

    return config


def resolve_run_configuration(
    config_data: dict[str, Any],
    repeat: int | None,
    no_gc: bool,
) -> RunConfiguration:
    """Merge settings: CLI options > config file > environment > defaults.

    Raises:
        click.ClickException: If any source holds an invalid value.
    """
    try:
        values: dict[str, Any] = {}
        env_repeat = get_setting("REPEAT", as_type=int)
        if env_repeat is not None:
            values["repeat_count"] = env_repeat
        if get_setting("NO_GC", default=False, as_type=bool):
            values["collect_garbage"] = False

        file_section = config_data.get("run") or {}
        if not isinstance(file_section, dict):
            raise click.ClickException("Config 'run' section must be a dictionary")
        values.update(file_section)

        return RunConfiguration.from_mapping(
            values,
            repeat_count=repeat,
            collect_garbage=False if no_gc else None,
        )
    except (SettingError, ValidationError) as e:
        raise click.ClickException(f"Invalid run configuration: {e}") from e


def get_output_format(output: str | None, fmt: str | None) -> OutputFormat:
    """Determine output format from filename or explicit format."""
    if fmt:
        return OutputFormat(fmt.lower())

    if output:
        suffix = Path(output).suffix.lower()
        if suffix == ".json":
            return OutputFormat.JSON
        elif suffix in (".yaml", ".yml"):
            return OutputFormat.YAML

    return OutputFormat.TEXT


def _as_list(config_data: dict[str, Any], key: str) -> list[str]:
    value = config_data.get(key) or []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise click.ClickException(f"Config '{key}' must be a list")
    return [str(item) for item in value]


def collect_groups(
    paths: list[str],
    modules: list[str],
    group_names: list[str],
) -> list[BenchmarkGroup]:
    """Discover groups and narrow them to the requested names.

    Raises:
        click.ClickException: On unknown group names or registry errors.
    """
    # Module names resolve relative to where quickbench was started
    cwd = os.getcwd()
    if modules and cwd not in sys.path:
        sys.path.insert(0, cwd)

    registry = GroupRegistry(search_paths=list(paths), modules=list(modules))

    try:
        if not group_names:
            return registry.get_all_groups()
        return [registry.get_group(name) for name in dict.fromkeys(group_names)]
    except GroupNotFoundError as e:
        raise click.ClickException(
            f"{e}. Use 'quickbench list' to see discovered groups."
        ) from e
    except GroupRegistryError as e:
        raise click.ClickException(str(e)) from e


def run_run(
    paths: tuple[str, ...],
    modules: tuple[str, ...],
    group_names: tuple[str, ...],
    init_args: tuple[str, ...],
    repeat: int | None,
    no_gc: bool,
    config: str | None,
    outputs: tuple[str, ...],
    fmt: str | None,
    strict: bool,
) -> None:
    """Run benchmark groups based on CLI arguments."""
    config_data: dict[str, Any] = load_config(config) if config else {}

    all_paths = list(paths) + _as_list(config_data, "paths")
    all_modules = list(modules) + _as_list(config_data, "modules")
    if not all_paths and not all_modules:
        raise click.UsageError(
            "No benchmark sources given. Pass a path, --module, or a config file."
        )

    run_config = resolve_run_configuration(config_data, repeat, no_gc)
    argv = list(init_args) if init_args else _as_list(config_data, "args")

    groups = collect_groups(
        all_paths,
        all_modules,
        list(group_names) or _as_list(config_data, "groups"),
    )
    if not groups:
        raise click.ClickException("No benchmark groups found.")

    results = run_benchmarks(
        groups, argv=argv, config=run_config, reporter=ConsoleReporter()
    )

    for out_path in outputs:
        results.emit(out_path, get_output_format(out_path, None))
        click.echo(f"✓ Results saved to: {out_path}")

    if fmt:
        results.emit(sys.stdout, get_output_format(None, fmt))

    summary = results.to_dict()["summary"]
    click.echo(
        f"\n✓ Completed: {summary['succeeded']}/{summary['total_records']} succeeded"
    )
    if summary["groups_aborted"]:
        click.echo(f"⚠️  Groups aborted by init: {summary['groups_aborted']}")

    if strict and results.has_failures:
        sys.exit(1)
