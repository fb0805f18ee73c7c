"""Pydantic models for structured output."""

from quickbench.models.harness_models import (
    GroupOutcome,
    GroupStatus,
    OutcomeRecord,
    RunConfiguration,
)

__all__ = [
    "GroupOutcome",
    "GroupStatus",
    "OutcomeRecord",
    "RunConfiguration",
]
