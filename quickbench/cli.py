#!/usr/bin/env python3
"""quickbench CLI - Command-line interface for quickbench."""

import click

from quickbench.utils.env import get_setting
from quickbench.utils.logger import Logger


@click.group()
def quickbench():
    """quickbench - run tagged micro-benchmarks in-process."""
    # Logs go to stderr so they never interleave with results on stdout
    if not Logger.is_configured():
        Logger.configure(
            level=get_setting("LOG_LEVEL", default="WARNING"),
            output="stderr",
            timestamps=True,
        )


@quickbench.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True))
@click.option(
    "--module",
    "-m",
    "modules",
    multiple=True,
    help="Importable module to scan for groups (repeatable)",
)
@click.option(
    "--group",
    "-g",
    "group_names",
    multiple=True,
    help="Only run this group (repeatable)",
)
@click.option(
    "--arg",
    "-a",
    "init_args",
    multiple=True,
    help="Argument passed to every group's init hook (repeatable, in order)",
)
@click.option(
    "--repeat",
    "-r",
    type=click.IntRange(min=1),
    default=None,
    help="Number of full passes over all benchmarks [env: QUICKBENCH_REPEAT]",
)
@click.option(
    "--no-gc",
    is_flag=True,
    help="Skip garbage collection before each timed run [env: QUICKBENCH_NO_GC]",
)
@click.option(
    "--config",
    type=click.Path(exists=True),
    help="YAML configuration file",
)
@click.option(
    "--output",
    "-o",
    "outputs",
    multiple=True,
    type=click.Path(),
    help="Write results to file; format from extension (repeatable)",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["text", "json", "yaml"]),
    default=None,
    help="Also print structured results to stdout in this format",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Exit with status 1 if any benchmark fails or any group is aborted",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def run(
    paths,
    modules,
    group_names,
    init_args,
    repeat,
    no_gc,
    config,
    outputs,
    fmt,
    strict,
    verbose,
):
    r"""Discover and run benchmark groups.

    \b
    Examples:
      quickbench run benchmarks/                 # Run all groups in a directory
      quickbench run -m mypkg.bench -r 3         # Three passes over a module
      quickbench run bench.py -a 100000          # Pass argv to init hooks
      quickbench run bench.py -o results.json    # Save structured results
    """
    from quickbench.commands.run_cmd import run_run

    if verbose:
        Logger.set_level("DEBUG")

    run_run(
        paths=paths,
        modules=modules,
        group_names=group_names,
        init_args=init_args,
        repeat=repeat,
        no_gc=no_gc,
        config=config,
        outputs=outputs,
        fmt=fmt,
        strict=strict,
    )


@quickbench.command(name="list")
@click.argument("paths", nargs=-1, type=click.Path(exists=True))
@click.option(
    "--module",
    "-m",
    "modules",
    multiple=True,
    help="Importable module to scan for groups (repeatable)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show where each group came from")
def list_groups(paths, modules, verbose):
    """List discovered benchmark groups."""
    from quickbench.commands.list_cmd import run_list

    run_list(paths=paths, modules=modules, verbose=verbose)


@quickbench.command()
@click.option("--verbose", "-v", is_flag=True, help="Show detailed version information")
def version(verbose):
    """Display quickbench version information."""
    from quickbench.commands.version_cmd import run_version

    run_version(verbose=verbose)


if __name__ == "__main__":
    quickbench()
