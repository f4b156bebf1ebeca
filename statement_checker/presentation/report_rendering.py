"""Report renderers for validation results and errors."""
from __future__ import annotations

import csv
import html
import io
import json
from typing import Any, Sequence

import pandas as pd

from statement_checker.domain.errors import StatementParseError
from statement_checker.domain.models import TransactionRecord, ValidationFailure
from statement_checker.domain.results import ValidationReport

FAILURE_COLUMNS = ["reference", "description", "reasons"]
RECORD_COLUMNS = ["reference", "account_number", "description", "start_balance", "mutation", "end_balance"]


def failure_to_dict(failure: ValidationFailure) -> dict[str, Any]:
    return {
        "reference": failure.reference,
        "description": failure.description,
        "reasons": [reason.value for reason in failure.sorted_reasons()],
    }


def report_to_dict(report: ValidationReport) -> dict[str, Any]:
    return {
        "valid": report.valid,
        "totalRecords": report.total_records,
        "failedRecords": report.failed_records,
        "failures": [failure_to_dict(failure) for failure in report.failures],
    }


def render_json(report: ValidationReport, indent: int | None = 2) -> str:
    return json.dumps(report_to_dict(report), indent=indent)


def error_to_dict(error: Exception) -> dict[str, Any]:
    """Problem-details style payload for a failed validation run."""
    code = getattr(error, "error_code", "INTERNAL_ERROR")
    payload: dict[str, Any] = {
        "code": code,
        "title": getattr(error, "title", "Internal Error"),
        "detail": str(error),
    }
    if isinstance(error, StatementParseError):
        detail = f"Failed to parse file: {error.message}"
        if error.field_name:
            detail += f", field: {error.field_name}"
        payload["detail"] = detail
        if error.line_number is not None:
            payload["lineNumber"] = error.line_number
        if error.record_index is not None:
            payload["recordIndex"] = error.record_index
        if error.field_name:
            payload["field"] = error.field_name
    elif code == "INTERNAL_ERROR":
        payload["detail"] = "An unexpected error occurred"
    return payload


def failures_to_rows(failures: Sequence[ValidationFailure]) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for failure in failures:
        rows.append(
            {
                "reference": str(failure.reference),
                "description": failure.description,
                "reasons": ", ".join(reason.value for reason in failure.sorted_reasons()),
            }
        )
    return rows


def render_csv(failures: Sequence[ValidationFailure]) -> bytes:
    rows = failures_to_rows(failures)
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=FAILURE_COLUMNS)
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


def render_html(report: ValidationReport) -> str:
    rows = failures_to_rows(report.failures)
    if not rows:
        return f"<p>All {report.total_records} records are valid.</p>"
    header = "".join(f"<th>{col}</th>" for col in FAILURE_COLUMNS)
    body_parts = []
    for row in rows:
        body_parts.append("<tr>" + "".join(f"<td>{html.escape(value)}</td>" for value in row.values()) + "</tr>")
    body_html = "".join(body_parts)
    return f"<table><thead><tr>{header}</tr></thead><tbody>{body_html}</tbody></table>"


def failures_to_dataframe(report: ValidationReport) -> pd.DataFrame:
    return pd.DataFrame(failures_to_rows(report.failures), columns=FAILURE_COLUMNS)


def records_to_dataframe(records: Sequence[TransactionRecord]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "reference": r.reference,
                "account_number": r.account_number,
                "description": r.description,
                "start_balance": r.start_balance,
                "mutation": r.mutation,
                "end_balance": r.end_balance,
            }
            for r in records
        ],
        columns=RECORD_COLUMNS,
    )
