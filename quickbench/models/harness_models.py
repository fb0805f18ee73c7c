"""Pydantic models for run configuration and benchmark outcomes."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

# ============================================================================
# Configuration
# ============================================================================


class RunConfiguration(BaseModel):
    """Read-only settings shared by every group in a run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    repeat_count: int = Field(
        1, ge=1, description="Number of full passes over all benchmark operations"
    )
    collect_garbage: bool = Field(
        True,
        description="Force garbage collection before each timed invocation",
    )

    @classmethod
    def from_mapping(
        cls, data: dict[str, Any] | None, **overrides: Any
    ) -> "RunConfiguration":
        """Build a configuration from a config-file section plus overrides.

        Overrides whose value is None are ignored, so CLI options that were
        not given fall through to the file value.
        """
        values = dict(data or {})
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


# ============================================================================
# Outcomes
# ============================================================================


class GroupStatus(str, Enum):
    """Result of attempting a group's init hook."""

    PROCEEDED = "proceeded"
    ABORTED = "aborted"


class GroupOutcome(BaseModel):
    """Whether a group ran its benchmarks or was aborted by its init hook."""

    model_config = ConfigDict(frozen=True)

    group: str = Field(..., description="Group name")
    status: GroupStatus = Field(..., description="proceeded or aborted")
    failure_message: str | None = Field(
        None, description="Init failure message (aborted groups only)"
    )

    @model_validator(mode="after")
    def _message_only_when_aborted(self) -> "GroupOutcome":
        if self.status is GroupStatus.ABORTED and self.failure_message is None:
            raise ValueError("aborted group outcome requires a failure_message")
        if self.status is GroupStatus.PROCEEDED and self.failure_message is not None:
            raise ValueError("proceeded group outcome cannot carry a failure_message")
        return self

    @property
    def aborted(self) -> bool:
        return self.status is GroupStatus.ABORTED


class OutcomeRecord(BaseModel):
    """Result of one benchmark invocation cycle."""

    model_config = ConfigDict(frozen=True)

    group: str = Field(..., description="Group the benchmark belongs to")
    name: str = Field(..., description="Benchmark operation name")
    pass_index: int = Field(1, ge=1, description="1-based repeat pass")
    success: bool = Field(..., description="True if reset, body and check all passed")
    elapsed_seconds: float | None = Field(
        None, ge=0, description="Wall-clock time of the benchmark body (success only)"
    )
    failure_message: str | None = Field(
        None, description="Extracted failure message (failure only)"
    )

    @model_validator(mode="after")
    def _fields_match_success(self) -> "OutcomeRecord":
        if self.success:
            if self.elapsed_seconds is None:
                raise ValueError("successful outcome requires elapsed_seconds")
            if self.failure_message is not None:
                raise ValueError("successful outcome cannot carry a failure_message")
        else:
            if self.failure_message is None:
                raise ValueError("failed outcome requires a failure_message")
            if self.elapsed_seconds is not None:
                raise ValueError("failed outcome cannot carry elapsed_seconds")
        return self

    @classmethod
    def succeeded(
        cls, group: str, name: str, pass_index: int, elapsed_seconds: float
    ) -> "OutcomeRecord":
        return cls(
            group=group,
            name=name,
            pass_index=pass_index,
            success=True,
            elapsed_seconds=elapsed_seconds,
        )

    @classmethod
    def failed(
        cls, group: str, name: str, pass_index: int, failure_message: str
    ) -> "OutcomeRecord":
        return cls(
            group=group,
            name=name,
            pass_index=pass_index,
            success=False,
            failure_message=failure_message,
        )
