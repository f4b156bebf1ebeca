"""Application services orchestrating the statement validation workflow."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from loguru import logger

from statement_checker.application.dto import StatementUpload, ValidationResponse
from statement_checker.domain.errors import EmptyFileError, StatementError, StatementValidationError
from statement_checker.domain.repositories import StatementRepository
from statement_checker.domain.services import ValidationRuleEngine
from statement_checker.infrastructure.repositories.upload_repositories import UploadedStatementRepository


def _upload_repository(upload: StatementUpload) -> StatementRepository:
    return UploadedStatementRepository(
        upload.content,
        content_type=upload.content_type,
        filename=upload.filename,
    )


@dataclass(slots=True)
class StatementValidationContext:
    engine: ValidationRuleEngine = field(default_factory=ValidationRuleEngine)
    repository_factory: Callable[[StatementUpload], StatementRepository] = _upload_repository


class ValidateStatementUseCase:
    """Detect, parse and validate one upload.

    Client errors propagate unchanged; anything else is wrapped in
    ``StatementValidationError`` so callers can tell the two apart.
    """

    def __init__(self, context: StatementValidationContext | None = None) -> None:
        self._context = context or StatementValidationContext()

    def execute(self, upload: StatementUpload) -> ValidationResponse:
        logger.info("Starting validation of {}, size: {} bytes", upload.filename, len(upload.content))
        try:
            if not upload.content:
                raise EmptyFileError("File is empty")

            repository = self._context.repository_factory(upload)
            file_format = repository.detect_format()
            logger.debug("Detected file format: {}", file_format.value)

            records = repository.list_transaction_records(file_format)
            report = self._context.engine.validate(records)
        except StatementError as exc:
            logger.warning("Client error during validation: {} [{}]", exc.message, exc.location() or "no location")
            raise
        except Exception as exc:
            logger.exception("Unexpected error during validation")
            raise StatementValidationError("Unexpected error during validation") from exc

        logger.info(
            "Validation complete. Valid: {}, Failed records: {}/{}",
            report.valid,
            report.failed_records,
            report.total_records,
        )
        return ValidationResponse(report=report, file_format=file_format, records=records)
