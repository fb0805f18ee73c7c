"""Tests for run results collection, emission, and reporters."""

import json
from io import StringIO

import yaml

from quickbench.harness.base import BenchmarkGroup, BenchmarkOperation
from quickbench.harness.reporting import (
    CompositeReporter,
    ConsoleReporter,
    Reporter,
    ResultCollector,
)
from quickbench.harness.results import OutputFormat, RunResults, format_elapsed
from quickbench.harness.runner import BenchmarkRunner
from quickbench.models import GroupOutcome, GroupStatus, OutcomeRecord, RunConfiguration


def _sample_results() -> RunResults:
    results = RunResults()
    results.set_configuration(RunConfiguration(repeat_count=2))
    results.add_group_outcome(GroupOutcome(group="G", status=GroupStatus.PROCEEDED))
    results.add_group_outcome(
        GroupOutcome(group="H", status=GroupStatus.ABORTED, failure_message="nope")
    )
    results.add_record(OutcomeRecord.succeeded("G", "A", 1, 0.5))
    results.add_record(OutcomeRecord.failed("G", "B", 1, "bad state"))
    return results


def test_generate_summary():
    """Test results summary generation."""
    summary = _sample_results().to_dict()["summary"]

    assert summary["total_records"] == 2
    assert summary["succeeded"] == 1
    assert summary["failed"] == 1
    assert summary["groups_run"] == 1
    assert summary["groups_aborted"] == 1
    assert summary["success_rate"] == 0.5


def test_failures_and_aborted_groups():
    """Test failure helpers."""
    results = _sample_results()

    assert [r.name for r in results.failures] == ["B"]
    assert [g.group for g in results.aborted_groups] == ["H"]
    assert results.has_failures
    assert not RunResults().has_failures


def test_emit_json():
    """Test JSON emission."""
    output = StringIO()
    _sample_results().emit(output, format=OutputFormat.JSON)

    data = json.loads(output.getvalue())
    assert data["metadata"]["repeat_count"] == 2
    assert data["metadata"]["timestamp_end"] is not None
    assert data["groups"][1] == {
        "group": "H",
        "status": "aborted",
        "failure_message": "nope",
    }
    assert data["results"][0]["elapsed_seconds"] == 0.5
    assert data["results"][1]["failure_message"] == "bad state"


def test_emit_yaml_file(tmp_path):
    """Test YAML emission to a file path."""
    path = tmp_path / "results.yaml"
    _sample_results().emit_yaml(path)

    data = yaml.safe_load(path.read_text())
    assert data["summary"]["failed"] == 1
    assert data["results"][0]["name"] == "A"


def test_emit_text():
    """Test human-readable text emission."""
    output = StringIO()
    _sample_results().emit(output, format=OutputFormat.TEXT)

    text = output.getvalue()
    assert "QUICKBENCH RESULTS" in text
    assert "G.A #1" in text
    assert "0:00:00.500000" in text
    assert "FAILED (bad state)" in text
    assert "H: nope" in text


def test_format_elapsed():
    """Test elapsed time rendering."""
    assert format_elapsed(0.0) == "0:00:00"
    assert format_elapsed(61.25) == "0:01:01.250000"


def test_console_reporter_lines():
    """Test the console format for a two-pass run with a failure."""
    group = BenchmarkGroup(
        name="G",
        benchmarks=(BenchmarkOperation(name="A", func=lambda: None),),
    )
    output = StringIO()
    reporter = ConsoleReporter(output=output)

    reporter.on_group_start(group)
    reporter.on_pass_start(group, 1, 2)
    reporter.on_outcome(OutcomeRecord.succeeded("G", "A", 1, 1.5))
    reporter.on_outcome(OutcomeRecord.failed("G", "B", 1, "bad state"))
    reporter.on_group_outcome(
        GroupOutcome(group="H", status=GroupStatus.ABORTED, failure_message="no db")
    )

    assert output.getvalue().splitlines() == [
        "Benchmarking group G",
        "Run #1",
        "  A                    0:00:01.500000",
        "  B: Failed (bad state)",
        "Init failed (no db)",
    ]


def test_console_reporter_single_pass_has_no_run_label():
    """Test pass labels only appear when repeating."""
    group = BenchmarkGroup(name="G", benchmarks=())
    output = StringIO()

    ConsoleReporter(output=output).on_pass_start(group, 1, 1)

    assert output.getvalue() == ""


def test_composite_reporter_fans_out():
    """Test every reporter receives the run's events."""

    class Counter(Reporter):
        def __init__(self):
            self.records = 0
            self.ended = False

        def on_outcome(self, record):
            self.records += 1

        def on_run_end(self):
            self.ended = True

    first, second = Counter(), Counter()
    collector = ResultCollector()
    group = BenchmarkGroup(
        name="G",
        benchmarks=(
            BenchmarkOperation(name="A", func=lambda: None),
            BenchmarkOperation(name="B", func=lambda: None),
        ),
    )

    runner = BenchmarkRunner(RunConfiguration(collect_garbage=False))
    runner.add_group(group)
    runner.run(reporter=CompositeReporter(first, second, collector))

    assert first.records == second.records == 2
    assert first.ended and second.ended
    assert len(collector.results) == 2
    assert collector.results.group_outcomes[0].group == "G"
