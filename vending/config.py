"""Runtime configuration defaults for export, logging and staff access."""

from __future__ import annotations

import logging
import os
from pathlib import Path

CURRENCY_CODE = "PHP"

CATALOG_EXPORT_PATH = "build/vending_items.csv"
DEBUG_LOG_PATH = "/tmp/vending-debug.log"
STAFF_PIN = "1234"

# None keeps the order unbounded.
MAX_ORDER_LINES: int | None = None

_EXPORT_PATH_ENV = "VENDING_EXPORT_PATH"
_DEBUG_LOG_ENV = "VENDING_DEBUG_LOG"
_STAFF_PIN_ENV = "VENDING_STAFF_PIN"
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def resolve_export_path() -> Path:
    """Catalog CSV destination, VENDING_EXPORT_PATH wins over the default."""
    return Path(os.environ.get(_EXPORT_PATH_ENV) or CATALOG_EXPORT_PATH)


def resolve_debug_log_path() -> Path:
    return Path(os.environ.get(_DEBUG_LOG_ENV) or DEBUG_LOG_PATH)


def resolve_staff_pin() -> str:
    return os.environ.get(_STAFF_PIN_ENV) or STAFF_PIN


def configure_logging(level: int = logging.INFO) -> Path:
    """
    Send vending.* log records to the debug log file.

    The Textual UI owns the terminal, so nothing is written to stdout/stderr.
    Returns the resolved log path.
    """
    log_path = resolve_debug_log_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger("vending")
    root.setLevel(level)
    for handler in list(root.handlers):
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == os.path.abspath(log_path):
            return log_path

    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root.addHandler(handler)
    root.propagate = False
    return log_path
