"""
Statement logging via SQLAlchemy engine events.

Hooks into before_cursor_execute / after_cursor_execute / handle_error to
measure statement wall-clock time and hand each finished statement to an
InstrumentationGate, which reconstructs the SQL with its literal parameter
values and logs it at INFO or WARNING.

Positional statements (``qmark`` for SQLite and pyodbc, ``format`` for
psycopg2 and PyMySQL) get their parameters substituted; named paramstyles
are logged normalized.

Row counts are not known at cursor level, so reads are classified by
duration alone here and result dumps report the rows as unavailable. Use
``InstrumentationGate.instrument`` around a repository call when the
row-count threshold matters.

Usage:
    from querylens.db.query_logger import attach_query_logger
    attach_query_logger(engine)
"""

import logging
import re
import time
from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy import event

from querylens.config import Settings, get_settings
from querylens.core.models import InstrumentationConfig, PlaceholderBinding, StatementCall, StatementKind
from querylens.instrumentation.gate import InstrumentationGate

logger = logging.getLogger(__name__)

START_TIMES_KEY = "querylens_query_start_time"

MUTATING_KEYWORDS = frozenset({
    "INSERT", "UPDATE", "DELETE", "MERGE", "REPLACE", "UPSERT",
    "CREATE", "ALTER", "DROP", "TRUNCATE", "RENAME", "GRANT", "REVOKE",
})

_LEADING_NOISE = re.compile(r"^(?:\s+|\(|--[^\n]*\n?|/\*.*?\*/)+", re.DOTALL)
_FIRST_WORD = re.compile(r"[A-Za-z]+")

POSITIONAL_MARKERS = {"qmark": "?", "format": "%s"}


def build_gate(settings: Settings | None = None) -> InstrumentationGate:
    """Create a gate configured from application settings."""
    settings = settings or get_settings()
    return InstrumentationGate(InstrumentationConfig.from_settings(settings), log=logger)


def attach_query_logger(engine: Any, gate: InstrumentationGate | None = None) -> InstrumentationGate:
    """
    Attach statement logging to an engine.

    Args:
        engine: A SQLAlchemy ``Engine`` or ``AsyncEngine`` (its sync engine
                is instrumented).
        gate: Gate that classifies and logs statements; built from settings
              when omitted.

    Returns:
        The gate receiving the engine's statements.
    """
    sync_engine = getattr(engine, "sync_engine", engine)
    gate = gate or build_gate()

    @event.listens_for(sync_engine, "before_cursor_execute")
    def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault(START_TIMES_KEY, []).append(time.perf_counter())

    @event.listens_for(sync_engine, "after_cursor_execute")
    def _after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        elapsed_ms = _pop_elapsed_ms(conn)
        if elapsed_ms is None:
            return
        call = build_statement_call(statement, parameters, sync_engine.dialect.paramstyle, executemany)
        gate.observe(call, elapsed_ms, result=cursor)

    @event.listens_for(sync_engine, "handle_error")
    def _handle_error(exception_context):
        conn = exception_context.connection
        if conn is None or exception_context.statement is None:
            return
        elapsed_ms = _pop_elapsed_ms(conn)
        if elapsed_ms is None:
            return
        call = build_statement_call(
            exception_context.statement,
            exception_context.parameters,
            sync_engine.dialect.paramstyle,
            bool(getattr(exception_context.execution_context, "executemany", False)),
        )
        gate.observe(call, elapsed_ms, error=exception_context.original_exception)

    return gate


def _pop_elapsed_ms(conn) -> float | None:
    start_times = conn.info.get(START_TIMES_KEY)
    if not start_times:
        return None
    start = start_times.pop()
    return (time.perf_counter() - start) * 1000.0


def build_statement_call(
    statement: str,
    parameters: Any,
    paramstyle: str,
    executemany: bool = False,
) -> StatementCall:
    """
    Describe one DBAPI-level statement as a StatementCall.

    Each positional value becomes a binding named ``param_<n>`` whose value is
    supplied as an additional parameter, so resolution never touches the
    parameter tuple itself. ``executemany`` batches use their first row.
    """
    kind = classify_statement(statement)

    if executemany and isinstance(parameters, Sequence) and parameters:
        parameters = parameters[0]

    marker = POSITIONAL_MARKERS.get(paramstyle)
    if marker is None or not _is_positional(parameters):
        return StatementCall(statement=statement, kind=kind, parameter=parameters)

    values = tuple(parameters)
    names = [f"param_{index}" for index in range(len(values))]
    return StatementCall(
        statement=statement,
        kind=kind,
        bindings=tuple(PlaceholderBinding(property_name=name) for name in names),
        parameter=values,
        additional_parameters=dict(zip(names, values)),
        placeholder=marker,
    )


def classify_statement(statement: str | None) -> StatementKind:
    """MUTATE when the leading keyword writes data or schema, READ otherwise."""
    if not statement:
        return StatementKind.READ
    body = _LEADING_NOISE.sub("", statement)
    match = _FIRST_WORD.match(body)
    if match and match.group(0).upper() in MUTATING_KEYWORDS:
        return StatementKind.MUTATE
    return StatementKind.READ


def _is_positional(parameters: Any) -> bool:
    return isinstance(parameters, Sequence) and not isinstance(parameters, (str, bytes, Mapping))
