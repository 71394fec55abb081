"""Tests for log level selection."""

import logging

from calorie_app.config import Settings
from calorie_app.logging_config import resolve_log_level


class TestResolveLogLevel:
    def test_development_is_debug(self):
        assert resolve_log_level(Settings(environment="development", log_level=None)) == logging.DEBUG

    def test_production_is_error(self):
        assert resolve_log_level(Settings(environment="production", log_level=None)) == logging.ERROR

    def test_explicit_level_wins(self):
        assert resolve_log_level(Settings(environment="production", log_level="info")) == logging.INFO

    def test_unknown_level_falls_back_to_info(self):
        assert resolve_log_level(Settings(log_level="chatty")) == logging.INFO
