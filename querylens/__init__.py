"""
QueryLens: reconstruct, time and log data-access statements.

Usage:
    from querylens import InstrumentationGate, StatementCall, PlaceholderBinding

    gate = InstrumentationGate()
    call = StatementCall(
        statement="SELECT * FROM users WHERE id = ?",
        bindings=[PlaceholderBinding(property_name="id")],
        parameter={"id": 42},
    )
    rows = gate.instrument(call, lambda: repo.find(42))
"""

from querylens.core.exceptions import QueryLensError, SubstitutionError, SummarizationError
from querylens.core.models import (
    ExecutionOutcome,
    InstrumentationConfig,
    ParameterMode,
    PlaceholderBinding,
    ResultSummary,
    Severity,
    StatementCall,
    StatementKind,
    SummaryKind,
    Thresholds,
)
from querylens.formatter.normalizer import normalize_statement
from querylens.formatter.renderer import render_value
from querylens.formatter.substituter import substitute_placeholders
from querylens.formatter.summarizer import describe_object, summarize_results
from querylens.instrumentation.gate import InstrumentationGate

__version__ = "0.1.0"

__all__ = [
    "ExecutionOutcome",
    "InstrumentationConfig",
    "InstrumentationGate",
    "ParameterMode",
    "PlaceholderBinding",
    "QueryLensError",
    "ResultSummary",
    "Severity",
    "StatementCall",
    "StatementKind",
    "SubstitutionError",
    "SummarizationError",
    "SummaryKind",
    "Thresholds",
    "describe_object",
    "normalize_statement",
    "render_value",
    "substitute_placeholders",
    "summarize_results",
]
