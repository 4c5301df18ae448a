"""
Tests for settings and logging setup.
"""

import json
import logging

from appkit.core.config import Settings
from appkit.core.logging import setup_logging


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self):
        settings = Settings()

        assert settings.APP_ATTRIBUTE == "app"
        assert settings.METADATA_FILE == "metadata.json"
        assert "custom-tool" in settings.ALLOWED_CATEGORIES
        assert settings.ALLOWED_FEATURES == ["toolkit", "channel"]
        assert settings.use_json_logs() is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("APPKIT_LOG_FORMAT", "JSON")
        monkeypatch.setenv("APPKIT_HTTP_TIMEOUT_SECONDS", "5")
        monkeypatch.setenv("APPKIT_ALLOWED_FEATURES", '["toolkit"]')

        settings = Settings()

        assert settings.use_json_logs() is True
        assert settings.HTTP_TIMEOUT_SECONDS == 5.0
        assert settings.ALLOWED_FEATURES == ["toolkit"]


class TestLogging:
    """Tests for logging configuration."""

    def test_json_records(self, capsys):
        setup_logging(log_level="INFO", json_format=True)

        logging.getLogger("appkit.tests").info("loaded app", extra={"app_id": "basic-integration"})

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["message"] == "loaded app"
        assert record["levelname"] == "INFO"
        assert record["app_id"] == "basic-integration"

    def test_http_libraries_stay_quiet(self):
        setup_logging(log_level="DEBUG")

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("appkit").level == logging.DEBUG
