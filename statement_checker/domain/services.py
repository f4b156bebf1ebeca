"""Domain services implementing the statement validation rules."""
from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Mapping, Sequence

from loguru import logger

from statement_checker.config import SETTINGS

from .models import FailureReason, TransactionRecord, ValidationFailure
from .results import ValidationReport


class ValidationRuleEngine:
    """Applies reference-uniqueness and balance rules to parsed records.

    Holds no state between calls, so one instance can be shared.
    """

    def __init__(self, balance_tolerance: Decimal | None = None) -> None:
        if balance_tolerance is None:
            balance_tolerance = SETTINGS.balance_tolerance
        self._tolerance = balance_tolerance

    @property
    def balance_tolerance(self) -> Decimal:
        return self._tolerance

    def validate(self, records: Sequence[TransactionRecord] | None) -> ValidationReport:
        if not records:
            logger.info("No records to validate, returning empty report")
            return ValidationReport.from_failures(0, ())

        logger.info("Starting validation for {} transaction records", len(records))
        duplicate_counts = self._detect_duplicates(records)
        logger.debug("Found {} duplicate references", len(duplicate_counts))

        failures: list[ValidationFailure] = []
        for record in records:
            reasons = self._reasons_for(record, duplicate_counts)
            if reasons:
                failures.append(
                    ValidationFailure(
                        reference=record.reference,
                        description=record.description,
                        reasons=reasons,
                    )
                )

        report = ValidationReport.from_failures(len(records), failures)
        logger.info(
            "Validation complete: {} total records, {} failed records",
            report.total_records,
            report.failed_records,
        )
        return report

    def _reasons_for(
        self, record: TransactionRecord, duplicate_counts: Mapping[int, int]
    ) -> frozenset[FailureReason]:
        reasons: set[FailureReason] = set()
        if record.reference in duplicate_counts:
            reasons.add(FailureReason.DUPLICATE_REFERENCE)
            logger.debug("Record with reference {} marked as duplicate", record.reference)
        if not record.is_balance_correct(self._tolerance):
            reasons.add(FailureReason.INCORRECT_END_BALANCE)
            logger.debug("Record with reference {} has incorrect balance", record.reference)
        return frozenset(reasons)

    @staticmethod
    def _detect_duplicates(records: Sequence[TransactionRecord]) -> Mapping[int, int]:
        counts: dict[int, int] = defaultdict(int)
        for record in records:
            if record.reference is None:
                continue
            counts[record.reference] += 1
        return {reference: count for reference, count in counts.items() if count > 1}
