"""Tests for querylens.main — process bootstrap."""

import logging
from unittest.mock import MagicMock, patch

from querylens import __version__
from querylens.config import AppEnv, Settings
from querylens.instrumentation.gate import InstrumentationGate
from querylens.main import configure


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestConfigure:

    @patch("querylens.main.init_sentry")
    @patch("querylens.main.setup_logging")
    def test_configures_logging_from_settings(self, mock_logging: MagicMock, mock_sentry: MagicMock):
        settings = _settings(app_env=AppEnv.STAGING, log_level="DEBUG", log_format="json")
        configure(settings)
        mock_logging.assert_called_once_with(app_env=AppEnv.STAGING, log_level="DEBUG", log_format="json")

    @patch("querylens.main.init_sentry")
    @patch("querylens.main.setup_logging")
    def test_initializes_sentry_with_package_version(self, mock_logging: MagicMock, mock_sentry: MagicMock):
        settings = _settings(sentry_dsn="https://key@sentry.io/1", sentry_traces_sample_rate=0.5)
        configure(settings)
        mock_sentry.assert_called_once_with(
            dsn="https://key@sentry.io/1",
            app_env=AppEnv.DEVELOPMENT,
            app_version=__version__,
            traces_sample_rate=0.5,
        )

    @patch("querylens.main.init_sentry")
    @patch("querylens.main.setup_logging")
    def test_returns_gate_built_from_settings(self, mock_logging: MagicMock, mock_sentry: MagicMock):
        settings = _settings(row_count_warning_threshold=25, duration_warning_threshold_ms=75, dump_results_enabled=True)
        gate = configure(settings)
        assert isinstance(gate, InstrumentationGate)
        assert gate.config.thresholds.row_count == 25
        assert gate.config.thresholds.duration_ms == 75
        assert gate.config.dump_results_enabled is True

    @patch("querylens.main.init_sentry")
    @patch("querylens.main.setup_logging")
    def test_logs_startup_line(self, mock_logging: MagicMock, mock_sentry: MagicMock, caplog):
        with caplog.at_level(logging.INFO, logger="querylens.main"):
            configure(_settings(app_name="Orders", app_env=AppEnv.STAGING))
        messages = [r.getMessage() for r in caplog.records if r.name == "querylens.main"]
        assert messages == [f"Starting Orders v{__version__} (staging)"]

    @patch("querylens.main.init_sentry")
    @patch("querylens.main.setup_logging")
    def test_falls_back_to_cached_settings(self, mock_logging: MagicMock, mock_sentry: MagicMock):
        settings = _settings(row_count_warning_threshold=3)
        with patch("querylens.main.get_settings", return_value=settings):
            gate = configure()
        assert gate.config.thresholds.row_count == 3
