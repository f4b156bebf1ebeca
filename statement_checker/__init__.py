"""Bank statement validation toolkit."""
from statement_checker.application.use_cases import StatementValidationContext, ValidateStatementUseCase
from statement_checker.domain.services import ValidationRuleEngine
from statement_checker.infrastructure.parsing.detection import detect_format
from statement_checker.infrastructure.parsing.statement import parse_statement
from statement_checker.infrastructure.repositories.upload_repositories import UploadedStatementRepository

__all__ = [
    "ValidateStatementUseCase",
    "StatementValidationContext",
    "ValidationRuleEngine",
    "UploadedStatementRepository",
    "detect_format",
    "parse_statement",
]
