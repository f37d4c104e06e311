"""
Pydantic domain models for QueryLens.

These models describe one instrumented statement as it flows through the gate:
StatementCall → (delegate runs) → ExecutionOutcome
"""

import logging
from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StatementKind(StrEnum):
    """Whether an intercepted statement reads or mutates data."""
    READ = "read"
    MUTATE = "mutate"


class ParameterMode(StrEnum):
    """Direction of a bound parameter."""
    IN = "in"
    OUT = "out"
    INOUT = "inout"


class Severity(StrEnum):
    """Log severities emitted by the instrumentation layer."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def level(self) -> int:
        return _LEVELS[self]


_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


class SummaryKind(StrEnum):
    """Which notice the result summarizer produced."""
    EMPTY = "empty"
    DUMP = "dump"
    TOO_LARGE = "too_large"


# ─── Statement Models ─────────────────────────────────────────


class PlaceholderBinding(BaseModel):
    """One bound parameter, in the order its placeholder appears in the statement."""

    model_config = ConfigDict(frozen=True)

    property_name: str
    mode: ParameterMode = ParameterMode.IN

    @property
    def is_output_only(self) -> bool:
        return self.mode == ParameterMode.OUT


class StatementCall(BaseModel):
    """Immutable snapshot of one intercepted data-access call."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    statement: str = ""
    kind: StatementKind = StatementKind.READ
    bindings: tuple[PlaceholderBinding, ...] = ()
    parameter: Any = None
    additional_parameters: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)
    placeholder: str = Field(default="?", min_length=1)

    @field_validator("additional_parameters", mode="after")
    @classmethod
    def freeze_additional_parameters(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    @property
    def is_read(self) -> bool:
        return self.kind == StatementKind.READ

    def has_additional_parameter(self, name: str) -> bool:
        return name in self.additional_parameters

    def get_additional_parameter(self, name: str) -> Any:
        return self.additional_parameters[name]


# ─── Configuration Models ─────────────────────────────────────


class Thresholds(BaseModel):
    """Operator-configured limits that select WARNING over INFO."""

    model_config = ConfigDict(frozen=True)

    row_count: int = Field(default=1000, ge=0)
    duration_ms: int = Field(default=5000, ge=0)


class InstrumentationConfig(BaseModel):
    """Immutable gate configuration, built once and shared by reference."""

    model_config = ConfigDict(frozen=True)

    thresholds: Thresholds = Field(default_factory=Thresholds)
    dump_results_enabled: bool = False

    @classmethod
    def from_settings(cls, settings: Any) -> "InstrumentationConfig":
        return cls(
            thresholds=Thresholds(
                row_count=settings.row_count_warning_threshold,
                duration_ms=settings.duration_warning_threshold_ms,
            ),
            dump_results_enabled=settings.dump_results_enabled,
        )


# ─── Outcome Models ───────────────────────────────────────────


class ExecutionOutcome(BaseModel):
    """What the gate observed about one call, computed after it finished."""

    model_config = ConfigDict(frozen=True)

    duration_ms: float = Field(..., ge=0)
    row_count: int | None = None
    succeeded: bool = True
    severity: Severity = Severity.INFO
    display_statement: str = ""


class ResultSummary(BaseModel):
    """Textual dump (or notice) describing a read's result collection."""

    model_config = ConfigDict(frozen=True)

    kind: SummaryKind
    size: int = 0
    text: str = ""
