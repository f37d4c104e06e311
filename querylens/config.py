"""
QueryLens configuration.

Loads settings from environment variables with validation via Pydantic Settings.
"""

from enum import StrEnum
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppEnv(StrEnum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Application settings loaded from .env file and environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ─── Application ──────────────────────────────────────────
    app_name: str = "QueryLens"
    app_env: AppEnv = AppEnv.DEVELOPMENT

    # ─── Statement Instrumentation ────────────────────────────
    # Reads returning more rows than this are logged at WARNING.
    row_count_warning_threshold: int = Field(default=1000, ge=0)
    # Statements slower than this are logged at WARNING.
    duration_warning_threshold_ms: int = Field(default=5000, ge=0)
    # Dump read results to the log (bounded by row_count_warning_threshold).
    dump_results_enabled: bool = False

    # ─── Observability ──────────────────────────────────────────
    sentry_dsn: str = ""
    sentry_traces_sample_rate: float = 0.0
    log_level: str = "INFO"
    log_format: str = "auto"

    @model_validator(mode="after")
    def enforce_production_safety(self) -> "Settings":
        """Block boot if result dumping is switched on in production.

        Result dumps write literal row contents to the log stream, which is
        acceptable on a developer box and not on shared log aggregation.
        """
        if not self.is_production:
            return self

        violations: list[str] = []

        if self.dump_results_enabled:
            violations.append("DUMP_RESULTS_ENABLED must be False in production")

        if self.log_format == "console":
            violations.append("LOG_FORMAT must not be 'console' in production")

        if violations:
            raise ValueError(
                "Production safety check failed:\n  - " + "\n  - ".join(violations)
            )

        return self

    @property
    def is_production(self) -> bool:
        return self.app_env == AppEnv.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings singleton."""
    return Settings()
