"""
Instrumentation gate: time a data-access call and log what ran.

The gate wraps an arbitrary zero-argument callable. Whatever the callable
returns or raises reaches the caller unchanged; everything the gate does
afterwards (formatting the statement, classifying severity, logging) runs in
an epilogue whose failures are logged at ERROR and otherwise swallowed.

Usage:
    gate = InstrumentationGate(InstrumentationConfig())
    rows = gate.instrument(call, lambda: session.execute(stmt, params).all())
"""

import logging
import time
from collections.abc import Awaitable, Callable, Collection, Mapping
from typing import Any, TypeVar

from querylens.core.interfaces import ParameterResolver
from querylens.core.models import (
    ExecutionOutcome,
    InstrumentationConfig,
    Severity,
    StatementCall,
    SummaryKind,
)
from querylens.formatter.normalizer import normalize_statement
from querylens.formatter.substituter import substitute_placeholders
from querylens.formatter.summarizer import summarize_results

logger = logging.getLogger(__name__)

T = TypeVar("T")

_SUMMARY_SEVERITY = {
    SummaryKind.EMPTY: Severity.INFO,
    SummaryKind.DUMP: Severity.INFO,
    SummaryKind.TOO_LARGE: Severity.WARNING,
}


class InstrumentationGate:
    """
    Threshold-gated statement logger around a delegated invocation.

    Args:
        config: Immutable thresholds and dump flag, shared by reference.
        log: Logger that receives every record (defaults to this module's).
        resolver: Parameter resolver handed to the substituter.
        clock: Monotonic clock in seconds, injectable for tests.
    """

    def __init__(
        self,
        config: InstrumentationConfig | None = None,
        log: logging.Logger | None = None,
        resolver: ParameterResolver | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.config = config or InstrumentationConfig()
        self.log = log or logger
        self.resolver = resolver
        self._clock = clock

    # ─── Invocation ───────────────────────────────────────────

    def instrument(self, call: StatementCall, invoke: Callable[[], T]) -> T:
        """Run ``invoke`` once, log the statement, return or re-raise its outcome."""
        start = self._clock()
        result: Any = None
        error: BaseException | None = None
        try:
            result = invoke()
            return result
        except BaseException as e:
            error = e
            raise
        finally:
            self._finish(call, start, result, error)

    async def ainstrument(self, call: StatementCall, invoke: Callable[[], Awaitable[T]]) -> T:
        """Async variant of :meth:`instrument` for coroutine-returning thunks."""
        start = self._clock()
        result: Any = None
        error: BaseException | None = None
        try:
            result = await invoke()
            return result
        except BaseException as e:
            error = e
            raise
        finally:
            self._finish(call, start, result, error)

    def _finish(self, call: StatementCall, start: float, result: Any, error: BaseException | None) -> None:
        try:
            elapsed_ms = (self._clock() - start) * 1000.0
        except Exception:
            self.log.exception("statement_instrumentation_failed")
            return
        self.observe(call, elapsed_ms, result=result, error=error)

    # ─── Epilogue ─────────────────────────────────────────────

    def observe(
        self,
        call: StatementCall,
        elapsed_ms: float,
        result: Any = None,
        error: BaseException | None = None,
    ) -> ExecutionOutcome | None:
        """
        Classify and log one finished call. Never raises.

        Args:
            call: The intercepted statement.
            elapsed_ms: Wall-clock duration of the delegated call.
            result: What the call returned (ignored when it failed).
            error: What the call raised, if anything.

        Returns:
            The computed ExecutionOutcome, or None if the epilogue failed.
        """
        try:
            display = self.format_statement(call)
            succeeded = error is None
            row_count = result_size(result) if call.is_read and succeeded else None
            severity = self.classify(call, elapsed_ms, row_count)

            extra: dict[str, Any] = {
                "statement": display,
                "duration_ms": round(elapsed_ms, 2),
                "kind": call.kind.value,
                "succeeded": succeeded,
            }
            if call.is_read:
                extra["row_count"] = row_count
            if error is not None:
                extra["error_type"] = type(error).__name__

            self.log.log(severity.level, "statement_executed", extra=extra)

            if self.config.dump_results_enabled and call.is_read:
                if succeeded and row_count is None and result is not None:
                    self.log.info(
                        "statement_result_unavailable",
                        extra={"statement": display, "result_type": type(result).__name__},
                    )
                else:
                    self._dump_results(display, result if succeeded else None)

            return ExecutionOutcome(
                duration_ms=max(elapsed_ms, 0.0),
                row_count=row_count,
                succeeded=succeeded,
                severity=severity,
                display_statement=display,
            )
        except Exception:
            self.log.exception("statement_instrumentation_failed")
            return None

    def format_statement(self, call: StatementCall) -> str:
        """Normalize the statement and substitute its bindings, best-effort."""
        normalized = normalize_statement(call.statement)
        try:
            return substitute_placeholders(normalized, call.bindings, call, self.resolver, marker=call.placeholder)
        except Exception:
            self.log.exception("statement_format_failed", extra={"statement": normalized})
            return normalized

    def classify(self, call: StatementCall, elapsed_ms: float, row_count: int | None) -> Severity:
        """WARNING for oversized reads or slow calls, INFO otherwise."""
        thresholds = self.config.thresholds
        if call.is_read and row_count is not None and row_count > thresholds.row_count:
            return Severity.WARNING
        if elapsed_ms > thresholds.duration_ms:
            return Severity.WARNING
        return Severity.INFO

    def _dump_results(self, display: str, results: Collection[Any] | None) -> None:
        try:
            summary = summarize_results(results, self.config.thresholds.row_count)
        except Exception:
            self.log.exception("statement_result_dump_failed", extra={"statement": display})
            return

        self.log.log(
            _SUMMARY_SEVERITY[summary.kind].level,
            f"statement_result_{summary.kind.value}",
            extra={"statement": display, "row_count": summary.size, "result": summary.text},
        )


def result_size(result: Any) -> int | None:
    """Row count of a result collection; None when the result is not one."""
    if isinstance(result, (str, bytes, bytearray, Mapping)):
        return None
    if isinstance(result, Collection):
        return len(result)
    return None
