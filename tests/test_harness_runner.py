"""Tests for the benchmark runner: lifecycle, timing, and isolation."""

import time
from unittest.mock import MagicMock, patch

from quickbench.harness.base import BenchmarkGroup, BenchmarkOperation
from quickbench.harness.reporting import Reporter, ResultCollector
from quickbench.harness.runner import BenchmarkRunner, run_benchmarks
from quickbench.models import GroupStatus, RunConfiguration


class EventLog(Reporter):
    """Records every reporter event in order."""

    def __init__(self):
        self.events = []

    def on_group_start(self, group):
        self.events.append(("group", group.name))

    def on_group_outcome(self, outcome):
        self.events.append(("outcome", outcome.group, outcome.status.value))

    def on_pass_start(self, group, pass_index, repeat_count):
        self.events.append(("pass", group.name, pass_index))

    def on_outcome(self, record):
        self.events.append(("record", record.name, record.pass_index, record.success))


def _raise(exc):
    def raiser(*args):
        raise exc

    return raiser


def _group(name="G", benchmarks=None, **hooks):
    ops = tuple(
        BenchmarkOperation(name=op_name, func=func)
        for op_name, func in (benchmarks or {}).items()
    )
    return BenchmarkGroup(name=name, benchmarks=ops, **hooks)


def _run(groups, config=None, argv=()):
    collector = ResultCollector()
    runner = BenchmarkRunner(config or RunConfiguration(collect_garbage=False))
    runner.add_groups(groups)
    runner.run(argv=argv, reporter=collector)
    return collector.results


def test_scenario_init_success_with_failing_benchmark():
    """Test group G: A succeeds, B fails with 'bad state'."""
    init = MagicMock()
    group = _group(
        benchmarks={"A": lambda: None, "B": _raise(RuntimeError("bad state"))},
        init=init,
    )

    results = _run([group], argv=["x"])

    init.assert_called_once_with(["x"])
    a, b = results.records
    assert (a.name, a.success) == ("A", True)
    assert a.elapsed_seconds is not None and a.elapsed_seconds < 0.5
    assert (b.name, b.success, b.failure_message) == ("B", False, "bad state")
    assert b.elapsed_seconds is None
    assert results.group_outcomes[0].status is GroupStatus.PROCEEDED


def test_empty_group_excluded():
    """Test a group without benchmarks runs no hooks and reports nothing."""
    init, reset, check = MagicMock(), MagicMock(), MagicMock()
    group = _group(init=init, reset=reset, check=check)
    log = EventLog()

    runner = BenchmarkRunner()
    runner.add_group(group)
    runner.run(reporter=log)

    init.assert_not_called()
    reset.assert_not_called()
    check.assert_not_called()
    assert log.events == []


def test_init_failure_aborts_group_for_every_pass():
    """Test a failing init yields one aborted outcome and no invocations."""
    body, reset, check = MagicMock(), MagicMock(), MagicMock()
    failing = _group(
        name="Failing",
        benchmarks={"A": body},
        init=_raise(OSError("no fixture")),
        reset=reset,
        check=check,
    )
    healthy = _group(name="Healthy", benchmarks={"B": lambda: None})

    results = _run([failing, healthy], RunConfiguration(repeat_count=3))

    body.assert_not_called()
    reset.assert_not_called()
    check.assert_not_called()

    aborted = results.aborted_groups
    assert len(aborted) == 1
    assert aborted[0].group == "Failing"
    assert aborted[0].failure_message == "no fixture"
    # The next group still runs, once per pass
    assert [r.name for r in results.records] == ["B", "B", "B"]


def test_init_runs_once_across_passes():
    """Test init is not repeated per pass."""
    init = MagicMock()
    group = _group(benchmarks={"A": lambda: None}, init=init)

    _run([group], RunConfiguration(repeat_count=4, collect_garbage=False))

    init.assert_called_once()


def test_repeat_count_invocations_and_pass_order():
    """Test N passes invoke body, reset, and check N times each."""
    a, b = MagicMock(), MagicMock()
    reset, check = MagicMock(), MagicMock()
    group = _group(benchmarks={"A": a, "B": b}, reset=reset, check=check)
    log = EventLog()

    runner = BenchmarkRunner(RunConfiguration(repeat_count=3, collect_garbage=False))
    runner.add_group(group)
    runner.run(reporter=log)

    assert a.call_count == 3
    assert b.call_count == 3
    assert reset.call_count == 6
    assert check.call_count == 6

    passes = [event[2] for event in log.events if event[0] == "pass"]
    assert passes == [1, 2, 3]
    records = [event[1:3] for event in log.events if event[0] == "record"]
    assert records == [("A", 1), ("B", 1), ("A", 2), ("B", 2), ("A", 3), ("B", 3)]


def test_timing_excludes_reset_and_check():
    """Test slow hooks do not count towards the measured duration."""
    group = _group(
        benchmarks={"fast": lambda: None},
        reset=lambda: time.sleep(0.3),
        check=lambda: time.sleep(0.3),
    )

    results = _run([group])

    record = results.records[0]
    assert record.success
    assert record.elapsed_seconds < 0.1


def test_timing_window_uses_clock_around_body_only():
    """Test elapsed is the difference of the two clock reads around the body."""
    ticks = iter([10.0, 10.25])
    order = []
    group = _group(
        benchmarks={"A": lambda: order.append("body")},
        reset=lambda: order.append("reset"),
        check=lambda: order.append("check"),
    )
    collector = ResultCollector()

    runner = BenchmarkRunner(
        RunConfiguration(collect_garbage=False), clock=lambda: next(ticks)
    )
    runner.add_group(group)
    runner.run(reporter=collector)

    assert order == ["reset", "body", "check"]
    assert collector.results.records[0].elapsed_seconds == 0.25


def test_isolation_middle_benchmark_fails():
    """Test a failing benchmark does not stop the rest of the group."""
    first, third = MagicMock(), MagicMock()
    group = _group(
        benchmarks={
            "first": first,
            "second": _raise(ValueError("always")),
            "third": third,
        }
    )

    results = _run([group])

    assert [(r.name, r.success) for r in results.records] == [
        ("first", True),
        ("second", False),
        ("third", True),
    ]
    third.assert_called_once()


def test_reset_failure_fails_only_that_benchmark():
    """Test a reset failure skips the body and is reported for it."""
    calls = []

    def reset():
        if not calls:
            calls.append("reset-failed")
            raise RuntimeError("reset broke")

    body_a, body_b = MagicMock(), MagicMock()
    group = _group(benchmarks={"A": body_a, "B": body_b}, reset=reset)

    results = _run([group])

    body_a.assert_not_called()
    body_b.assert_called_once()
    a, b = results.records
    assert (a.success, a.failure_message) == (False, "reset broke")
    assert b.success


def test_check_failure_supersedes_timing():
    """Test a failing check marks the benchmark failed without a duration."""
    group = _group(
        benchmarks={"A": lambda: None},
        check=_raise(AssertionError("wrong result")),
    )

    record = _run([group]).records[0]

    assert not record.success
    assert record.failure_message == "wrong result"
    assert record.elapsed_seconds is None


def test_failure_without_message():
    """Test an exception with no message is reported with the placeholder."""
    group = _group(benchmarks={"A": _raise(RuntimeError())})

    record = _run([group]).records[0]

    assert record.failure_message == "(No message)"


def test_outcomes_are_streamed():
    """Test each record reaches the reporter before the next benchmark runs."""
    seen_before_second = []
    collector = ResultCollector()

    def second():
        seen_before_second.append(len(collector.results))

    group = _group(benchmarks={"first": lambda: None, "second": second})
    runner = BenchmarkRunner(RunConfiguration(collect_garbage=False))
    runner.add_group(group)
    runner.run(reporter=collector)

    assert seen_before_second == [1]


def test_memory_hint_per_invocation():
    """Test garbage collection is requested before every benchmark."""
    group = _group(benchmarks={"A": lambda: None, "B": lambda: None})

    with patch("quickbench.harness.runner.quiesce_memory") as quiesce:
        _run([group], RunConfiguration(repeat_count=2))
        assert quiesce.call_count == 4

    with patch("quickbench.harness.runner.quiesce_memory") as quiesce:
        _run([group], RunConfiguration(collect_garbage=False))
        quiesce.assert_not_called()


def test_run_benchmarks_collects_and_streams():
    """Test the convenience function returns results and forwards events."""
    group = _group(benchmarks={"A": lambda: None})
    log = EventLog()

    results = run_benchmarks([group], config=RunConfiguration(), reporter=log)

    assert len(results) == 1
    assert ("record", "A", 1, True) in log.events
    assert results.to_dict()["metadata"]["timestamp_end"] is not None


def test_runner_queue_management():
    """Test adding the same group twice queues it once."""
    group = _group(benchmarks={"A": lambda: None})
    runner = BenchmarkRunner()

    runner.add_group(group)
    runner.add_groups([group])
    assert runner.group_count == 1

    runner.clear()
    assert runner.group_count == 0
