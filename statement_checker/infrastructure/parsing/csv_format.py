"""CSV statement parser producing canonical transaction records."""
from __future__ import annotations

import csv
import io
from decimal import Decimal
from typing import Callable, Iterator, Sequence

from loguru import logger

from statement_checker.domain.errors import StatementParseError
from statement_checker.domain.models import TransactionRecord
from statement_checker.infrastructure.parsing.utils import (
    normalize_header,
    parse_decimal,
    parse_reference,
    strip_plus_sign,
)

REFERENCE = "Reference"
ACCOUNT_NUMBER = "AccountNumber"
DESCRIPTION = "Description"
START_BALANCE = "Start Balance"
MUTATION = "Mutation"
END_BALANCE = "End Balance"

CSV_COLUMNS = (REFERENCE, ACCOUNT_NUMBER, DESCRIPTION, START_BALANCE, MUTATION, END_BALANCE)


def _iter_rows(reader) -> Iterator[tuple[int, list[str]]]:
    """Yield (starting line number, row) pairs, skipping blank lines."""
    next_line = 1
    while True:
        try:
            row = next(reader)
        except StopIteration:
            return
        except csv.Error as exc:
            raise StatementParseError(
                f"Malformed CSV at line {next_line}: {exc}", line_number=next_line
            ) from exc
        line_number = next_line
        next_line = reader.line_num + 1
        if not any(value.strip() for value in row):
            continue
        yield line_number, row


def _locate_columns(header: Sequence[str], line_number: int) -> dict[str, int]:
    normalized = [normalize_header(name) for name in header]
    positions: dict[str, int] = {}
    for column in CSV_COLUMNS:
        try:
            positions[column] = normalized.index(normalize_header(column))
        except ValueError:
            raise StatementParseError(
                f"Missing required header: {column}",
                line_number=line_number,
                field_name=column,
            ) from None
    return positions


def _required(row: Sequence[str], positions: dict[str, int], column: str, line_number: int) -> str:
    value = row[positions[column]].strip()
    if not value:
        raise StatementParseError(
            f"Empty required field '{column}' at line {line_number}",
            line_number=line_number,
            field_name=column,
        )
    return value


def _convert(convert: Callable[[str], object], value: str, label: str, column: str, line_number: int):
    try:
        return convert(value)
    except ValueError as exc:
        raise StatementParseError(
            f"Invalid {label} at line {line_number}",
            line_number=line_number,
            field_name=column,
        ) from exc


def _parse_row(
    row: Sequence[str], positions: dict[str, int], width: int, line_number: int
) -> TransactionRecord:
    if len(row) != width:
        raise StatementParseError(
            f"Expected {width} fields but found {len(row)} at line {line_number}",
            line_number=line_number,
        )

    reference = _convert(
        parse_reference, _required(row, positions, REFERENCE, line_number), "reference number", REFERENCE, line_number
    )
    account_number = _required(row, positions, ACCOUNT_NUMBER, line_number)
    description = _required(row, positions, DESCRIPTION, line_number)
    start_balance: Decimal = _convert(
        parse_decimal, _required(row, positions, START_BALANCE, line_number), "start balance", START_BALANCE, line_number
    )
    mutation: Decimal = _convert(
        parse_decimal,
        strip_plus_sign(_required(row, positions, MUTATION, line_number)),
        "mutation amount",
        MUTATION,
        line_number,
    )
    end_balance: Decimal = _convert(
        parse_decimal, _required(row, positions, END_BALANCE, line_number), "end balance", END_BALANCE, line_number
    )

    return TransactionRecord(
        reference=reference,
        account_number=account_number,
        description=description,
        start_balance=start_balance,
        mutation=mutation,
        end_balance=end_balance,
    )


def parse_csv(text: str) -> list[TransactionRecord]:
    logger.debug("Starting CSV parsing")
    rows = _iter_rows(csv.reader(io.StringIO(text, newline="")))

    header_entry = next(rows, None)
    if header_entry is None:
        raise StatementParseError("CSV file is empty or has no header row", line_number=1)
    header_line, header = header_entry
    positions = _locate_columns(header, header_line)

    records = [_parse_row(row, positions, len(header), line_number) for line_number, row in rows]
    logger.debug("Parsed {} records from CSV", len(records))
    return records
