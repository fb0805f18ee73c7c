"""Reporting boundary for the benchmark runner.

The runner hands every GroupOutcome and OutcomeRecord to a Reporter as soon
as it is produced, so long runs show partial results progressively.

Usage:
    from quickbench.harness.reporting import (
        CompositeReporter,
        ConsoleReporter,
        ResultCollector,
    )

    collector = ResultCollector()
    runner.run(groups, reporter=CompositeReporter(ConsoleReporter(), collector))
    collector.results.emit_json("results.json")
"""

from collections.abc import Sequence
from typing import TextIO

import click

from quickbench.harness.base import BenchmarkGroup
from quickbench.harness.results import RunResults, format_elapsed
from quickbench.models.harness_models import (
    GroupOutcome,
    OutcomeRecord,
    RunConfiguration,
)


class Reporter:
    """Receives run events in order. Every method is a no-op by default."""

    def on_run_start(
        self, groups: Sequence[BenchmarkGroup], config: RunConfiguration
    ) -> None:
        pass

    def on_group_start(self, group: BenchmarkGroup) -> None:
        pass

    def on_group_outcome(self, outcome: GroupOutcome) -> None:
        pass

    def on_pass_start(
        self, group: BenchmarkGroup, pass_index: int, repeat_count: int
    ) -> None:
        pass

    def on_outcome(self, record: OutcomeRecord) -> None:
        pass

    def on_run_end(self) -> None:
        pass


class CompositeReporter(Reporter):
    """Fan every event out to several reporters, in order."""

    def __init__(self, *reporters: Reporter) -> None:
        self.reporters = list(reporters)

    def on_run_start(
        self, groups: Sequence[BenchmarkGroup], config: RunConfiguration
    ) -> None:
        for reporter in self.reporters:
            reporter.on_run_start(groups, config)

    def on_group_start(self, group: BenchmarkGroup) -> None:
        for reporter in self.reporters:
            reporter.on_group_start(group)

    def on_group_outcome(self, outcome: GroupOutcome) -> None:
        for reporter in self.reporters:
            reporter.on_group_outcome(outcome)

    def on_pass_start(
        self, group: BenchmarkGroup, pass_index: int, repeat_count: int
    ) -> None:
        for reporter in self.reporters:
            reporter.on_pass_start(group, pass_index, repeat_count)

    def on_outcome(self, record: OutcomeRecord) -> None:
        for reporter in self.reporters:
            reporter.on_outcome(record)

    def on_run_end(self) -> None:
        for reporter in self.reporters:
            reporter.on_run_end()


class ConsoleReporter(Reporter):
    """Stream results as plain lines.

    Output looks like::

        Benchmarking group ListBuilding
        Run #1
          simple               0:00:00.512345
          right_sizing: Failed (bad state)
    """

    def __init__(self, output: TextIO | None = None, name_width: int = 20) -> None:
        self.output = output
        self.name_width = name_width

    def _echo(self, line: str) -> None:
        click.echo(line, file=self.output)

    def on_group_start(self, group: BenchmarkGroup) -> None:
        self._echo(f"Benchmarking group {group.name}")

    def on_group_outcome(self, outcome: GroupOutcome) -> None:
        if outcome.aborted:
            self._echo(f"Init failed ({outcome.failure_message})")

    def on_pass_start(
        self, group: BenchmarkGroup, pass_index: int, repeat_count: int
    ) -> None:
        if repeat_count > 1:
            self._echo(f"Run #{pass_index}")

    def on_outcome(self, record: OutcomeRecord) -> None:
        if record.success and record.elapsed_seconds is not None:
            elapsed = format_elapsed(record.elapsed_seconds)
            self._echo(f"  {record.name:<{self.name_width}} {elapsed}")
        else:
            self._echo(f"  {record.name}: Failed ({record.failure_message})")


class ResultCollector(Reporter):
    """Accumulate everything into a RunResults for structured emission."""

    def __init__(self) -> None:
        self.results = RunResults()

    def on_run_start(
        self, groups: Sequence[BenchmarkGroup], config: RunConfiguration
    ) -> None:
        self.results.set_configuration(config)

    def on_group_outcome(self, outcome: GroupOutcome) -> None:
        self.results.add_group_outcome(outcome)

    def on_outcome(self, record: OutcomeRecord) -> None:
        self.results.add_record(record)

    def on_run_end(self) -> None:
        self.results.finalize()
