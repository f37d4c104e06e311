"""
QueryLens process bootstrap.

Usage:
    from querylens.main import configure
    from querylens.db.query_logger import attach_query_logger

    gate = configure()
    attach_query_logger(engine, gate=gate)
"""

import logging

from querylens import __version__
from querylens.config import Settings, get_settings
from querylens.core.logging_config import setup_logging
from querylens.core.sentry_config import init_sentry
from querylens.db.query_logger import build_gate
from querylens.instrumentation.gate import InstrumentationGate

logger = logging.getLogger(__name__)


def configure(settings: Settings | None = None) -> InstrumentationGate:
    """Configure logging and error tracking, then build the settings-driven gate."""
    settings = settings or get_settings()

    # 1. Configure structured logging (before anything else)
    setup_logging(
        app_env=settings.app_env,
        log_level=settings.log_level,
        log_format=settings.log_format,
    )

    # 2. Initialize Sentry so instrumentation faults become events
    init_sentry(
        dsn=settings.sentry_dsn,
        app_env=settings.app_env,
        app_version=__version__,
        traces_sample_rate=settings.sentry_traces_sample_rate,
    )

    logger.info(f"Starting {settings.app_name} v{__version__} ({settings.app_env.value})")
    return build_gate(settings)
