"""Tests for environment-driven settings and logging setup."""

import logging
from decimal import Decimal
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from armory.domain.exceptions import ValidationError
from armory.infrastructure.config import Settings
from armory.infrastructure.logging_config import configure_logging

_VARS = (
    "ARMORY_DATA_DIR",
    "ARMORY_COMMISSION_RATE",
    "ARMORY_LOG_LEVEL",
    "ARMORY_LOG_PATH",
    "ARMORY_LEDGER_TIMESTAMPS",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:

    def test_defaults(self, clean_env):
        cfg = Settings.from_env()
        assert cfg.commission_rate == Decimal("0.07")
        assert cfg.log_level == "INFO"
        assert cfg.log_path is None
        assert cfg.data_dir.name == "data"
        assert cfg.ledger_schema.tracks_updated_at

    def test_overrides(self, clean_env, tmp_path):
        clean_env.setenv("ARMORY_DATA_DIR", str(tmp_path))
        clean_env.setenv("ARMORY_COMMISSION_RATE", "0.1")
        clean_env.setenv("ARMORY_LOG_LEVEL", "debug")
        clean_env.setenv("ARMORY_LOG_PATH", str(tmp_path / "armory.log"))
        clean_env.setenv("ARMORY_LEDGER_TIMESTAMPS", "no")

        cfg = Settings.from_env()

        assert cfg.data_dir == tmp_path
        assert cfg.commission_rate == Decimal("0.1")
        assert cfg.log_level == "DEBUG"
        assert cfg.log_path == tmp_path / "armory.log"
        assert not cfg.ledger_schema.tracks_updated_at

    @pytest.mark.parametrize("raw", ["abc", "1.5", "-0.01"])
    def test_bad_commission_rate_rejected(self, clean_env, raw):
        clean_env.setenv("ARMORY_COMMISSION_RATE", raw)
        with pytest.raises(ValidationError, match="ommission rate"):
            Settings.from_env()


class TestConfigureLogging:

    def test_adds_rotating_file_handler_once(self, tmp_path):
        log_path = tmp_path / "logs" / "armory.log"
        root = logging.getLogger()
        before, level = list(root.handlers), root.level
        try:
            configure_logging("INFO", log_path)
            configure_logging("INFO", log_path)
            file_handlers = [
                h for h in root.handlers
                if isinstance(h, RotatingFileHandler)
                and Path(h.baseFilename) == log_path.resolve()
            ]
            assert len(file_handlers) == 1
            assert log_path.parent.exists()
        finally:
            for handler in root.handlers[:]:
                if handler not in before:
                    root.removeHandler(handler)
                    handler.close()
            root.setLevel(level)

    def test_stream_handler_added_next_to_existing_file_handler(self, tmp_path):
        root = logging.getLogger()
        before, level = list(root.handlers), root.level
        existing = RotatingFileHandler(tmp_path / "other.log")
        root.addHandler(existing)
        try:
            configure_logging("WARNING")
            assert any(type(h) is logging.StreamHandler for h in root.handlers)
        finally:
            for handler in root.handlers[:]:
                if handler not in before:
                    root.removeHandler(handler)
                    handler.close()
            root.setLevel(level)
