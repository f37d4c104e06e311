"""
Sentry error tracking configuration for QueryLens.

With the logging integration, every ERROR record becomes a Sentry event.
The instrumentation gate only logs at ERROR when it misbehaves itself
(substitution failures, broken result dumps, epilogue crashes), so those
faults surface in Sentry without touching the instrumented call.

When ``dsn`` is empty (the default), Sentry is completely disabled —
no SDK overhead, no network calls.
"""

import logging

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

from querylens.config import AppEnv
from querylens.core.exceptions import QueryLensError


def init_sentry(
    dsn: str,
    app_env: AppEnv,
    app_version: str,
    traces_sample_rate: float = 0.0,
) -> None:
    """
    Initialize Sentry SDK for instrumentation fault tracking.

    Args:
        dsn: Sentry DSN. Empty string disables Sentry entirely.
        app_env: Current environment (used as Sentry ``environment``).
        app_version: Package version (used as Sentry ``release``).
        traces_sample_rate: Fraction of transactions to trace (0.0–1.0).
    """
    if not dsn:
        return

    sentry_sdk.init(
        dsn=dsn,
        environment=app_env.value,
        release=f"querylens@{app_version}",
        traces_sample_rate=traces_sample_rate,
        integrations=[
            LoggingIntegration(
                level=logging.INFO,
                event_level=logging.ERROR,
            ),
        ],
        before_send=_filter_events,
        send_default_pii=False,
    )


def _filter_events(event: dict, hint: dict) -> dict | None:
    """
    Filter Sentry events before sending.

    - Tags QueryLensError subclasses with their type and details.
    - Strips the reconstructed statement, which embeds literal parameter values.
    """
    if "exc_info" in hint:
        _, exc_value, _ = hint["exc_info"]

        if isinstance(exc_value, QueryLensError):
            event.setdefault("tags", {})
            event["tags"]["error_type"] = type(exc_value).__name__
            if exc_value.details:
                event["extra"] = {**event.get("extra", {}), **exc_value.details}

    extra = event.get("extra")
    if isinstance(extra, dict) and "statement" in extra:
        extra["statement"] = "[filtered]"

    return event
