"""Error taxonomy shared by the detector, the parser and the orchestrator."""
from __future__ import annotations


class StatementError(Exception):
    """Base class for failures the caller can act on."""

    error_code = "STATEMENT_ERROR"
    title = "Statement Error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def location(self) -> str:
        return ""


class UnsupportedFormatError(StatementError):
    error_code = "UNSUPPORTED_FORMAT"
    title = "Unsupported File Format"


class EmptyFileError(StatementError):
    error_code = "EMPTY_FILE"
    title = "Empty File"


class StatementParseError(StatementError):
    """Structural or field-level problem in an uploaded statement.

    ``line_number`` is the 1-based physical line for CSV input and
    ``record_index`` the 0-based array position for JSON input; at most one
    of them is set.
    """

    error_code = "PARSE_ERROR"
    title = "Parse Error"

    def __init__(
        self,
        message: str,
        *,
        line_number: int | None = None,
        record_index: int | None = None,
        field_name: str | None = None,
    ) -> None:
        super().__init__(message)
        self.line_number = line_number
        self.record_index = record_index
        self.field_name = field_name

    def location(self) -> str:
        parts: list[str] = []
        if self.line_number is not None:
            parts.append(f"line {self.line_number}")
        if self.record_index is not None:
            parts.append(f"record {self.record_index}")
        if self.field_name:
            parts.append(f"field {self.field_name}")
        return ", ".join(parts)


class StatementValidationError(Exception):
    """Unexpected internal failure while validating an upload."""

    error_code = "VALIDATION_ERROR"
    title = "Validation Error"
