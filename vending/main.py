"""Entry point for the vending terminal Textual app."""

from __future__ import annotations

import logging

from vending.config import configure_logging
from vending.models import SessionState
from vending.terminal_app import VendingApp

logger = logging.getLogger(__name__)


def main() -> None:
    """Run the Textual application."""
    log_path = configure_logging()
    app = VendingApp()
    logger.info("starting terminal log=%s", log_path)
    try:
        app.run()
    finally:
        # An open order is cancelled on exit.
        if app.terminal.state != SessionState.EMPTY or app.terminal.inserted:
            result = app.terminal.abandon()
            logger.info("abandoned open order on exit result=%r", result)


if __name__ == "__main__":
    main()
