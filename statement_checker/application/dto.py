"""Application-level DTOs for statement validation."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from statement_checker.domain.models import FileFormat, TransactionRecord
from statement_checker.domain.results import ValidationReport


@dataclass(slots=True, frozen=True)
class StatementUpload:
    content: bytes
    filename: str | None = None
    content_type: str | None = None

    @classmethod
    def from_path(cls, path: Path, content_type: str | None = None) -> "StatementUpload":
        return cls(content=path.read_bytes(), filename=path.name, content_type=content_type)


@dataclass(slots=True, frozen=True)
class ValidationResponse:
    report: ValidationReport
    file_format: FileFormat
    records: Sequence[TransactionRecord]
