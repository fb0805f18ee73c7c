"""
Version command - displays quickbench version information
"""

import click

from quickbench.version import QUICKBENCH_VERSION


def run_version(verbose: bool = False) -> None:
    """
    Display quickbench version information.

    Args:
        verbose: If True, show the release date and semantic version parts
    """
    if verbose:
        click.echo(f"quickbench version {QUICKBENCH_VERSION.full_version()}")
        click.echo("\nDetailed version information:")
        major, minor, patch = QUICKBENCH_VERSION.semver()
        click.echo(f"  Semantic Version: {major}.{minor}.{patch}")
        click.echo(f"  Release Date:     {QUICKBENCH_VERSION.date_string()}")
    else:
        click.echo(f"quickbench {QUICKBENCH_VERSION}")
