"""Tests for adkdetect.core.logging."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from adkdetect.core.logging import setup_logging


@pytest.fixture(autouse=True)
def _reset_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("adkdetect").setLevel(logging.NOTSET)


class TestSetupLogging:
    def test_default_level(self, monkeypatch):
        monkeypatch.delenv("ADKDETECT_LOG_LEVEL", raising=False)
        setup_logging()
        assert logging.getLogger("adkdetect").level == logging.INFO

    def test_level_from_env(self, monkeypatch):
        monkeypatch.setenv("ADKDETECT_LOG_LEVEL", "debug")
        setup_logging()
        assert logging.getLogger("adkdetect").level == logging.DEBUG

    def test_json_format(self, monkeypatch, capsys):
        monkeypatch.setenv("ADKDETECT_LOG_FORMAT", "json")
        monkeypatch.setenv("ADKDETECT_LOG_LEVEL", "INFO")
        setup_logging()
        structlog.get_logger("adkdetect.test").info("detector.project_detected", root="/ws/app")
        line = capsys.readouterr().err.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "detector.project_detected"
        assert record["root"] == "/ws/app"
        assert record["level"] == "info"

    def test_host_loggers_stay_at_warning(self, monkeypatch):
        monkeypatch.setenv("ADKDETECT_LOG_LEVEL", "DEBUG")
        setup_logging()
        assert logging.getLogger().level == logging.WARNING
        assert logging.getLogger("adkdetect").getEffectiveLevel() == logging.DEBUG
