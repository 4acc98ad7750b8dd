"""
Shared helpers: the package logger and JSON coercion utilities.
"""

import logging
from typing import Any, Union

LOGGER_NAME = "submarine_client"

logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())


def setup_logger(level: Union[int, str] = "INFO", fmt: str = "%(asctime)s %(levelname)s %(name)s %(message)s") -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Library code only ever logs through ``logger``; applications that want to
    see the output call this once at start-up.

    Args:
        level: Logging level name or number
        fmt: Log record format

    Returns:
        The configured package logger
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def stringify(value: Any) -> str:
    """
    Render a query or placeholder value the way a browser would.

    Booleans become ``true``/``false``, ``None`` becomes ``null`` and sequences
    are comma-joined.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else stringify(item) for item in value)
    return str(value)
