"""Entry point of the record parser: bytes of a known format in, records out."""
from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import BinaryIO

from loguru import logger

from statement_checker.domain.errors import StatementParseError
from statement_checker.domain.models import FileFormat, TransactionRecord
from statement_checker.infrastructure.parsing.csv_format import parse_csv
from statement_checker.infrastructure.parsing.json_format import parse_json
from statement_checker.infrastructure.parsing.utils import decode_text, ensure_bytes

_PARSERS = {
    FileFormat.CSV: parse_csv,
    FileFormat.JSON: parse_json,
}


def parse_statement(
    source: BinaryIO | BytesIO | Path | bytes, file_format: FileFormat
) -> list[TransactionRecord]:
    """Parse a whole statement or raise on the first malformed line/element."""
    try:
        raw_bytes = ensure_bytes(source)
    except OSError as exc:
        logger.error("I/O error while reading statement: {}", exc)
        raise StatementParseError(f"Failed to read file: {exc}") from exc

    logger.info("Parsing file with format: {}, size: {} bytes", file_format.value, len(raw_bytes))
    try:
        text = decode_text(raw_bytes)
    except UnicodeDecodeError as exc:
        raise StatementParseError(f"File is not valid UTF-8 text: {exc.reason} at byte {exc.start}") from exc

    try:
        records = _PARSERS[FileFormat(file_format)](text)
    except StatementParseError as exc:
        logger.warning("Failed to parse file: {}", exc.message)
        raise
    logger.info("Successfully parsed {} records", len(records))
    return records
