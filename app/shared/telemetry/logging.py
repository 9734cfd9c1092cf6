"""Logging configuration for the application."""

import logging
import sys

from app.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(debug: bool | None = None) -> None:
    """Configure application-wide logging.

    Level is DEBUG when debug (default: settings.debug) is True, otherwise INFO.
    Cache HIT/MISS/SET/DELETE lines are DEBUG; cache degradation is WARNING.
    Output goes to stdout.
    """
    if debug is None:
        debug = get_settings().debug
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # SQL echo is controlled by database_echo, not the root level.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

