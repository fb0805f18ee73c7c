"""Benchmark harness for quickbench.

This module provides:
- benchmark: Tag marking a callable as a benchmark operation
- GroupRegistry: Group discovery and explicit registration
- BenchmarkRunner: Lifecycle hooks, timing, and failure isolation
- Reporter: Streaming boundary for outcomes (console, collector, composite)
- RunResults: Flexible result emission (JSON/YAML/text)

Quick Start:
    from quickbench.harness import GroupRegistry, run_benchmarks, ConsoleReporter

    registry = GroupRegistry(search_paths=["benchmarks/"])
    results = run_benchmarks(registry.get_all_groups(), reporter=ConsoleReporter())
    results.emit_json("results.json")
"""

from quickbench.harness.base import (
    BenchmarkGroup,
    BenchmarkOperation,
    GroupBuilder,
    GroupContext,
    HarnessError,
    HookShapeError,
    benchmark,
    discover_group,
)
from quickbench.harness.invocation import (
    NO_MESSAGE,
    InvocationFailure,
    failure_message,
    invoke,
)
from quickbench.harness.registry import (
    GroupNameCollisionError,
    GroupNotFoundError,
    GroupRegistry,
    GroupRegistryError,
)
from quickbench.harness.reporting import (
    CompositeReporter,
    ConsoleReporter,
    Reporter,
    ResultCollector,
)
from quickbench.harness.results import OutputFormat, RunResults
from quickbench.harness.runner import BenchmarkRunner, run_benchmarks

__all__ = [
    "NO_MESSAGE",
    # Base
    "BenchmarkGroup",
    "BenchmarkOperation",
    # Runner
    "BenchmarkRunner",
    # Reporting
    "CompositeReporter",
    "ConsoleReporter",
    "GroupBuilder",
    "GroupContext",
    # Registry
    "GroupNameCollisionError",
    "GroupNotFoundError",
    "GroupRegistry",
    "GroupRegistryError",
    "HarnessError",
    "HookShapeError",
    # Invocation
    "InvocationFailure",
    # Results
    "OutputFormat",
    "Reporter",
    "ResultCollector",
    "RunResults",
    "benchmark",
    "discover_group",
    "failure_message",
    "invoke",
    "run_benchmarks",
]
