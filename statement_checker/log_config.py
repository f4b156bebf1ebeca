"""Loguru sink setup shared by the CLI and the Streamlit front-end."""
from __future__ import annotations

import sys

from loguru import logger

from statement_checker.config import SETTINGS

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} | {message}"


def configure_logging(level: str | None = None) -> int:
    """Replace loguru's default sink with a single stderr sink.

    Returns the sink id so callers can remove it again.
    """
    logger.remove()
    return logger.add(sys.stderr, level=(level or SETTINGS.log_level).upper(), format=LOG_FORMAT)
