"""Classifies an upload as CSV or JSON from its content type and filename."""
from __future__ import annotations

from loguru import logger

from statement_checker.config import SETTINGS
from statement_checker.domain.errors import UnsupportedFormatError
from statement_checker.domain.models import FileFormat

UNSUPPORTED_FORMAT_MESSAGE = "Unsupported file format. Only CSV and JSON are supported"

_EXTENSIONS = {
    ".csv": FileFormat.CSV,
    ".json": FileFormat.JSON,
}


def detect_format(content_type: str | None, filename: str | None) -> FileFormat:
    """Content type wins when recognised; the filename suffix is the fallback."""
    if content_type in SETTINGS.csv_content_types:
        logger.debug("Detected CSV format from content type {}", content_type)
        return FileFormat.CSV
    if content_type in SETTINGS.json_content_types:
        logger.debug("Detected JSON format from content type {}", content_type)
        return FileFormat.JSON

    if filename:
        lowered = filename.lower()
        for suffix, file_format in _EXTENSIONS.items():
            if lowered.endswith(suffix):
                logger.debug("Detected {} format from file extension", file_format.value)
                return file_format

    logger.warning("Unsupported file format: filename={}, content type={}", filename, content_type)
    raise UnsupportedFormatError(UNSUPPORTED_FORMAT_MESSAGE)
