"""Benchmark runner: lifecycle hooks, timing, and failure isolation.

Usage:
    from quickbench.harness.registry import GroupRegistry
    from quickbench.harness.runner import BenchmarkRunner
    from quickbench.harness.reporting import ConsoleReporter

    registry = GroupRegistry(modules=["benchmarks.lists"])
    runner = BenchmarkRunner(RunConfiguration(repeat_count=3))
    runner.add_groups(registry.get_all_groups())
    runner.run(argv=["100000"], reporter=ConsoleReporter())

Execution is strictly sequential: groups in order, then passes, then
benchmarks. Nothing a hook or benchmark raises stops the run; an init
failure only skips its own group.
"""

import gc
import time
from collections.abc import Callable, Sequence

from quickbench.harness.base import BenchmarkGroup, BenchmarkOperation
from quickbench.harness.invocation import InvocationFailure, failure_message, invoke
from quickbench.harness.reporting import CompositeReporter, Reporter, ResultCollector
from quickbench.harness.results import RunResults, format_elapsed
from quickbench.models.harness_models import (
    GroupOutcome,
    GroupStatus,
    OutcomeRecord,
    RunConfiguration,
)
from quickbench.utils.logger import Logger

_LOG = "harness.runner"


def quiesce_memory() -> None:
    """Collect garbage before a timed invocation to reduce timing noise.

    The second pass reclaims objects released by finalizers run in the first.
    Advisory only; correctness never depends on it.
    """
    gc.collect()
    gc.collect()


class BenchmarkRunner:
    """Runs benchmark groups and streams outcomes to a Reporter.

    Example:
        >>> runner = BenchmarkRunner()
        >>> runner.add_group(group)
        >>> runner.run(reporter=ConsoleReporter())
    """

    def __init__(
        self,
        config: RunConfiguration | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        """Initialize the runner.

        Args:
            config: Run configuration; defaults to a single pass.
            clock: Monotonic clock returning seconds.
        """
        self.config = config if config is not None else RunConfiguration()
        self._clock = clock
        self._groups: list[BenchmarkGroup] = []

    def add_group(self, group: BenchmarkGroup) -> None:
        """Queue a group. Adding the same group twice has no effect."""
        if group not in self._groups:
            self._groups.append(group)

    def add_groups(self, groups: Sequence[BenchmarkGroup]) -> None:
        for group in groups:
            self.add_group(group)

    def clear(self) -> None:
        """Clear all queued groups."""
        self._groups.clear()

    @property
    def group_count(self) -> int:
        """Return number of queued groups."""
        return len(self._groups)

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    def run(self, argv: Sequence[str] = (), reporter: Reporter | None = None) -> None:
        """Run every queued group.

        Args:
            argv: Argument vector passed to each group's init hook.
            reporter: Receives outcomes as they are produced.
        """
        reporter = reporter if reporter is not None else Reporter()
        groups = [group for group in self._groups if group.benchmarks]

        Logger.debug_if_configured(
            _LOG,
            f"Running {len(groups)} group(s), {self.config.repeat_count} pass(es)",
        )
        reporter.on_run_start(groups, self.config)
        for group in groups:
            self._run_group(group, list(argv), reporter)
        reporter.on_run_end()

    def _run_group(
        self, group: BenchmarkGroup, argv: list[str], reporter: Reporter
    ) -> None:
        reporter.on_group_start(group)

        outcome = self._init_group(group, argv)
        reporter.on_group_outcome(outcome)
        if outcome.aborted:
            return

        repeat_count = self.config.repeat_count
        for pass_index in range(1, repeat_count + 1):
            Logger.debug_if_configured(
                _LOG, f"{group.name}: pass {pass_index} of {repeat_count}"
            )
            reporter.on_pass_start(group, pass_index, repeat_count)
            for operation in group.benchmarks:
                reporter.on_outcome(self._run_cycle(group, operation, pass_index))

    def _init_group(self, group: BenchmarkGroup, argv: list[str]) -> GroupOutcome:
        """Run the init hook once; an init failure aborts the group."""
        if group.init is not None:
            try:
                invoke(f"{group.name}.init", group.init, argv)
            except InvocationFailure as e:
                message = failure_message(e)
                Logger.warning_if_configured(
                    _LOG, f"{group.name}: init failed ({message}), skipping group"
                )
                return GroupOutcome(
                    group=group.name,
                    status=GroupStatus.ABORTED,
                    failure_message=message,
                )
        return GroupOutcome(group=group.name, status=GroupStatus.PROCEEDED)

    def _run_cycle(
        self, group: BenchmarkGroup, operation: BenchmarkOperation, pass_index: int
    ) -> OutcomeRecord:
        """Reset, time, and check a single benchmark invocation."""
        target = f"{group.name}.{operation.name}"
        try:
            if group.reset is not None:
                invoke(f"{group.name}.reset", group.reset)

            if self.config.collect_garbage:
                quiesce_memory()

            elapsed = self._timed_invoke(target, operation)

            if group.check is not None:
                invoke(f"{group.name}.check", group.check)

        except InvocationFailure as e:
            message = failure_message(e)
            Logger.warning_if_configured(_LOG, f"{target} failed ({message})")
            return OutcomeRecord.failed(group.name, operation.name, pass_index, message)

        Logger.debug_if_configured(_LOG, f"{target} {format_elapsed(elapsed)}")
        return OutcomeRecord.succeeded(group.name, operation.name, pass_index, elapsed)

    def _timed_invoke(self, target: str, operation: BenchmarkOperation) -> float:
        """Invoke the benchmark body; the timed window covers nothing else."""
        start = self._clock()
        invoke(target, operation.func)
        end = self._clock()
        return max(end - start, 0.0)


def run_benchmarks(
    groups: Sequence[BenchmarkGroup],
    argv: Sequence[str] = (),
    config: RunConfiguration | None = None,
    reporter: Reporter | None = None,
) -> RunResults:
    """Run groups and collect every outcome.

    Args:
        groups: Groups to run, in order.
        argv: Argument vector for init hooks.
        config: Run configuration.
        reporter: Optional extra reporter to stream to (e.g. ConsoleReporter).

    Returns:
        RunResults with all group outcomes and records.
    """
    collector = ResultCollector()
    streaming: Reporter = (
        collector if reporter is None else CompositeReporter(reporter, collector)
    )

    runner = BenchmarkRunner(config)
    runner.add_groups(groups)
    runner.run(argv=argv, reporter=streaming)
    return collector.results
