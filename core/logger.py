"""
Logging configuration for the YNAB CSV importer.
Every handler masks bearer tokens so an access token echoed in an error
body or exception message never reaches the console.
"""
import logging
import os
import re
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_BEARER_TOKEN = re.compile(r"(Bearer\s+)[A-Za-z0-9._~+/=-]+", re.IGNORECASE)


class TokenRedactionFilter(logging.Filter):
    """Replace bearer tokens in the rendered message with a placeholder."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _BEARER_TOKEN.sub(r"\1[REDACTED]", message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def _resolve_level(level: Optional[str]) -> int:
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    return getattr(logging, name, logging.INFO)


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Configure and return a logger writing to stdout.

    Args:
        name: Logger name (usually __name__)
        level: Log level name. Defaults to env LOG_LEVEL, falling back to INFO
            for unknown names.

    Returns:
        Configured logger instance
    """
    numeric_level = _resolve_level(level)

    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(numeric_level)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        handler.addFilter(TokenRedactionFilter())
        logger.addHandler(handler)

    return logger
