"""Tests for configuration resolution and logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from vending import config


@pytest.fixture
def vending_logger():
    logger = logging.getLogger("vending")
    handlers = list(logger.handlers)
    level, propagate = logger.level, logger.propagate
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def test_defaults(monkeypatch):
    monkeypatch.delenv("VENDING_EXPORT_PATH", raising=False)
    monkeypatch.delenv("VENDING_STAFF_PIN", raising=False)
    assert config.resolve_export_path() == Path("build/vending_items.csv")
    assert config.resolve_staff_pin() == "1234"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("VENDING_STAFF_PIN", "9876")
    monkeypatch.setenv("VENDING_DEBUG_LOG", "/var/log/vending.log")
    assert config.resolve_staff_pin() == "9876"
    assert config.resolve_debug_log_path() == Path("/var/log/vending.log")


def test_configure_logging_writes_to_file(tmp_path, monkeypatch, vending_logger):
    log_file = tmp_path / "logs" / "debug.log"
    monkeypatch.setenv("VENDING_DEBUG_LOG", str(log_file))

    assert config.configure_logging() == log_file
    config.configure_logging()
    file_handlers = [h for h in vending_logger.handlers if isinstance(h, logging.FileHandler)]
    assert len(file_handlers) == 1

    logging.getLogger("vending.till").info("till deposit denomination=%s", 2000)
    file_handlers[0].flush()
    assert "till deposit denomination=2000" in log_file.read_text(encoding="utf-8")
