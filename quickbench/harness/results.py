"""Collected run results and their emission.

Supports multiple output formats: JSON, YAML, and text.

Usage:
    from quickbench.harness.results import RunResults, OutputFormat

    results = RunResults()
    results.add_group_outcome(outcome)
    results.add_record(record)

    results.emit("results.json", OutputFormat.JSON)
    results.emit(sys.stdout, OutputFormat.TEXT)
"""

import json
import sys
from datetime import UTC, datetime, timedelta
from enum import Enum
from io import StringIO
from pathlib import Path
from typing import Any, TextIO

import yaml

from quickbench.models.harness_models import (
    GroupOutcome,
    OutcomeRecord,
    RunConfiguration,
)


class OutputFormat(Enum):
    """Supported output formats for run results."""

    JSON = "json"
    YAML = "yaml"
    TEXT = "text"  # Human-readable text for stdout


def format_elapsed(seconds: float) -> str:
    """Render an elapsed time the way the console report shows it.

    >>> format_elapsed(1.5)
    '0:00:01.500000'
    """
    return str(timedelta(seconds=seconds))


class RunResults:
    """All group outcomes and benchmark records of one run.

    Example:
        >>> results = RunResults()
        >>> results.add_record(OutcomeRecord.succeeded("G", "A", 1, 0.01))
        >>> results.to_dict()["summary"]["succeeded"]
        1
    """

    def __init__(self) -> None:
        """Initialize an empty results collection."""
        self._records: list[OutcomeRecord] = []
        self._group_outcomes: list[GroupOutcome] = []
        self._metadata: dict[str, Any] = {
            "timestamp_start": datetime.now(UTC).isoformat(),
            "timestamp_end": None,
            "quickbench_version": self._get_version(),
            "repeat_count": None,
        }

    def _get_version(self) -> str:
        from quickbench import __version__

        return str(__version__)

    def set_configuration(self, config: RunConfiguration) -> None:
        """Record the configuration the run used."""
        self._metadata["repeat_count"] = config.repeat_count
        self._metadata["collect_garbage"] = config.collect_garbage

    def add_group_outcome(self, outcome: GroupOutcome) -> None:
        self._group_outcomes.append(outcome)

    def add_record(self, record: OutcomeRecord) -> None:
        self._records.append(record)

    def finalize(self) -> None:
        """Mark results as complete, setting end timestamp."""
        self._metadata["timestamp_end"] = datetime.now(UTC).isoformat()

    @property
    def records(self) -> list[OutcomeRecord]:
        return list(self._records)

    @property
    def group_outcomes(self) -> list[GroupOutcome]:
        return list(self._group_outcomes)

    @property
    def failures(self) -> list[OutcomeRecord]:
        """Failed benchmark records, in the order they were produced."""
        return [r for r in self._records if not r.success]

    @property
    def aborted_groups(self) -> list[GroupOutcome]:
        return [g for g in self._group_outcomes if g.aborted]

    @property
    def has_failures(self) -> bool:
        """True if any benchmark failed or any group was aborted."""
        return bool(self.failures or self.aborted_groups)

    def to_dict(self) -> dict[str, Any]:
        """Convert results to a dictionary for serialization."""
        return {
            "metadata": self._metadata,
            "groups": [g.model_dump(mode="json") for g in self._group_outcomes],
            "results": [r.model_dump(mode="json") for r in self._records],
            "summary": self._generate_summary(),
        }

    def _generate_summary(self) -> dict[str, Any]:
        total = len(self._records)
        succeeded = sum(1 for r in self._records if r.success)

        return {
            "total_records": total,
            "succeeded": succeeded,
            "failed": total - succeeded,
            "groups_run": len(self._group_outcomes) - len(self.aborted_groups),
            "groups_aborted": len(self.aborted_groups),
            "success_rate": succeeded / total if total > 0 else 0.0,
        }

    # -------------------------------------------------------------------------
    # Emission Methods
    # -------------------------------------------------------------------------

    def emit(
        self,
        output: str | Path | TextIO,
        format: OutputFormat = OutputFormat.JSON,
        indent: int = 2,
    ) -> None:
        """Emit results to a file or stream.

        Args:
            output: File path or file-like object (e.g., sys.stdout).
            format: Output format (JSON, YAML, TEXT).
            indent: Indentation level for JSON/YAML.
        """
        if self._metadata["timestamp_end"] is None:
            self.finalize()

        if format == OutputFormat.JSON:
            content = json.dumps(self.to_dict(), indent=indent, default=str)
        elif format == OutputFormat.YAML:
            content = yaml.safe_dump(
                self.to_dict(), indent=indent, default_flow_style=False, sort_keys=False
            )
        elif format == OutputFormat.TEXT:
            content = self._to_text()
        else:
            raise ValueError(f"Unknown format: {format}")

        self._write_output(output, content)

    def _to_text(self) -> str:
        """Convert results to human-readable text."""
        output = StringIO()
        data = self.to_dict()

        output.write("\n" + "=" * 60 + "\n")
        output.write("  QUICKBENCH RESULTS\n")
        output.write("=" * 60 + "\n\n")

        meta = data["metadata"]
        output.write(f"Started:  {meta['timestamp_start']}\n")
        output.write(f"Finished: {meta['timestamp_end']}\n")
        output.write(f"Version:  {meta['quickbench_version']}\n")
        if meta["repeat_count"] is not None:
            output.write(f"Passes:   {meta['repeat_count']}\n")
        output.write("\n")

        summary = data["summary"]
        output.write("-" * 40 + "\n")
        output.write(f"Benchmarks Run: {summary['total_records']}\n")
        output.write(f"Succeeded:      {summary['succeeded']}\n")
        output.write(f"Failed:         {summary['failed']}\n")
        output.write(f"Groups Aborted: {summary['groups_aborted']}\n")
        output.write(f"Success Rate:   {summary['success_rate']:.1%}\n")
        output.write("-" * 40 + "\n\n")

        for record in self._records:
            label = f"{record.group}.{record.name}"
            if meta["repeat_count"] and meta["repeat_count"] > 1:
                label += f" #{record.pass_index}"
            if record.success and record.elapsed_seconds is not None:
                output.write(f"  {label:<40} {format_elapsed(record.elapsed_seconds)}\n")
            else:
                output.write(f"  {label:<40} FAILED ({record.failure_message})\n")

        if self.aborted_groups:
            output.write("\nABORTED GROUPS\n")
            output.write("-" * 40 + "\n")
            for outcome in self.aborted_groups:
                output.write(f"  {outcome.group}: {outcome.failure_message}\n")

        output.write("\n" + "=" * 60 + "\n")
        return output.getvalue()

    def _write_output(self, output: str | Path | TextIO, content: str) -> None:
        if isinstance(output, str | Path):
            Path(output).write_text(content)
        else:
            output.write(content)
            if output is not sys.stdout and output is not sys.stderr:
                output.flush()

    # -------------------------------------------------------------------------
    # Convenience Methods
    # -------------------------------------------------------------------------

    def emit_json(self, path: str | Path) -> None:
        self.emit(path, OutputFormat.JSON)

    def emit_yaml(self, path: str | Path) -> None:
        self.emit(path, OutputFormat.YAML)

    def emit_stdout(self) -> None:
        """Emit human-readable results to stdout."""
        self.emit(sys.stdout, OutputFormat.TEXT)

    def __len__(self) -> int:
        """Return number of benchmark records."""
        return len(self._records)
