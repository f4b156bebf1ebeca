"""Upload-backed repositories for statement data."""
from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Sequence

from statement_checker.domain.models import FileFormat, TransactionRecord
from statement_checker.domain.repositories import StatementRepository
from statement_checker.infrastructure.parsing.detection import detect_format
from statement_checker.infrastructure.parsing.statement import parse_statement
from statement_checker.infrastructure.parsing.utils import ensure_bytes


class UploadedStatementRepository(StatementRepository):
    def __init__(
        self,
        source: BytesIO | Path | bytes,
        content_type: str | None = None,
        filename: str | None = None,
    ) -> None:
        if filename is None and isinstance(source, Path):
            filename = source.name
        self._source = ensure_bytes(source)
        self._content_type = content_type
        self._filename = filename

    def detect_format(self) -> FileFormat:
        return detect_format(self._content_type, self._filename)

    def list_transaction_records(self, file_format: FileFormat | None = None) -> Sequence[TransactionRecord]:
        return parse_statement(BytesIO(self._source), file_format or self.detect_format())
