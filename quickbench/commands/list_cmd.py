"""List command - shows discovered benchmark groups."""

import click

from quickbench.commands.run_cmd import collect_groups


def run_list(
    paths: tuple[str, ...],
    modules: tuple[str, ...],
    verbose: bool = False,
) -> None:
    """List benchmark groups, their hooks, and their benchmarks."""
    if not paths and not modules:
        raise click.UsageError("No benchmark sources given. Pass a path or --module.")

    groups = collect_groups(list(paths), list(modules), [])

    click.echo("\nBenchmark Groups\n")
    if not groups:
        click.echo("  No groups found.")
        return

    click.echo("-" * 60)
    for group in groups:
        hooks = ", ".join(group.hooks) or "none"
        click.echo(f"\n[{group.name}]  hooks: {hooks}")
        if verbose and group.source:
            click.echo(f"  source: {group.source}")
        for operation in group.benchmarks:
            click.echo(f"  {operation.name}")

    total = sum(len(group.benchmarks) for group in groups)
    click.echo("\n" + "-" * 60)
    click.echo(f"\nTotal: {len(groups)} groups, {total} benchmarks")
