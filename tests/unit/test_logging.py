"""
Unit tests for logging configuration.
"""

from og_image.config.logging import get_logging_config

from tests.conftest import build_settings


class TestLoggingConfig:
    """Test the stdlib logging dictionary."""

    def test_production_uses_json_formatter(self):
        config = get_logging_config(build_settings(environment="production"))
        assert config["handlers"]["console"]["formatter"] == "json"

    def test_development_uses_console_formatter(self):
        config = get_logging_config(build_settings(environment="development"))
        assert config["handlers"]["console"]["formatter"] == "console"

    def test_root_logger_follows_log_level(self):
        config = get_logging_config(build_settings(log_level="WARNING"))
        assert config["loggers"][""]["level"] == "WARNING"
        assert config["handlers"]["console"]["level"] == "WARNING"

    def test_only_configured_loggers(self):
        config = get_logging_config(build_settings())
        assert set(config["loggers"]) == {"", "uvicorn", "playwright"}
        assert config["loggers"]["playwright"]["level"] == "WARNING"
