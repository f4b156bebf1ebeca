"""JSON statement parser producing canonical transaction records."""
from __future__ import annotations

import json
from decimal import Decimal
from typing import Any, Callable, Mapping

from loguru import logger

from statement_checker.domain.errors import StatementParseError
from statement_checker.domain.models import TransactionRecord
from statement_checker.infrastructure.parsing.utils import parse_decimal, parse_reference

JSON_FIELDS = ("reference", "accountNumber", "description", "startBalance", "mutation", "endBalance")


def _missing(field: str, index: int) -> StatementParseError:
    return StatementParseError(
        f"Missing required field '{field}' at record {index}",
        record_index=index,
        field_name=field,
    )


def _required_text(node: Mapping[str, Any], field: str, index: int) -> str:
    value = node.get(field)
    if isinstance(value, Decimal):
        value = str(value)
    if not isinstance(value, str) or not value.strip():
        raise _missing(field, index)
    return value.strip()


def _required_number(node: Mapping[str, Any], field: str, index: int, convert: Callable[[object], Any]):
    value = node.get(field)
    if value is None:
        raise _missing(field, index)
    if isinstance(value, str) and not value.strip():
        raise _missing(field, index)
    try:
        return convert(value)
    except ValueError as exc:
        raise StatementParseError(
            f"Invalid {field} at record {index}",
            record_index=index,
            field_name=field,
        ) from exc


def _parse_element(node: object, index: int) -> TransactionRecord:
    if not isinstance(node, dict):
        raise StatementParseError(f"Record at index {index} must be an object", record_index=index)
    return TransactionRecord(
        reference=_required_number(node, "reference", index, parse_reference),
        account_number=_required_text(node, "accountNumber", index),
        description=_required_text(node, "description", index),
        start_balance=_required_number(node, "startBalance", index, parse_decimal),
        mutation=_required_number(node, "mutation", index, parse_decimal),
        end_balance=_required_number(node, "endBalance", index, parse_decimal),
    )


def parse_json(text: str) -> list[TransactionRecord]:
    logger.debug("Starting JSON parsing")
    try:
        root = json.loads(text, parse_float=Decimal, parse_int=Decimal)
    except json.JSONDecodeError as exc:
        logger.warning("JSON syntax error: {}", exc)
        raise StatementParseError(f"Malformed JSON: {exc}") from exc

    if not isinstance(root, list):
        raise StatementParseError("JSON root element must be an array")

    records = [_parse_element(node, index) for index, node in enumerate(root)]
    logger.debug("Parsed {} records from JSON", len(records))
    return records
