"""Repository interfaces anchoring the domain layer."""
from __future__ import annotations

from typing import Protocol, Sequence

from .models import FileFormat, TransactionRecord


class StatementRepository(Protocol):
    """Provides transaction records from one uploaded statement."""

    def detect_format(self) -> FileFormat:
        ...

    def list_transaction_records(self, file_format: FileFormat | None = None) -> Sequence[TransactionRecord]:
        ...
