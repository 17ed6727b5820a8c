"""Logging setup for the ``ledgerview`` package.

Library modules call ``get_logger(__name__)`` and stay silent until the CLI
calls ``configure_logging`` with a level.
"""

import logging
import sys

PACKAGE_LOGGER = "ledgerview"
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_configured = False


def configure_logging(level: str) -> None:
    """Send package log records at ``level`` and above to stderr.

    Only the first call has an effect.

    Args:
        level: Level name such as "INFO" or "debug"

    Raises:
        ValueError: If the level name is unknown
    """
    global _configured
    if _configured:
        return

    numeric_level = logging.getLevelName(level.strip().upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level '{level}'")

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers = [handler]
    logger.setLevel(numeric_level)
    logger.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a module logger; the package logger gets a NullHandler until configured."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if not package_logger.handlers:
        package_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
