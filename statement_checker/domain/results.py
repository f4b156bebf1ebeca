"""Domain-level results for statement validation."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Sequence

from .models import FailureReason, ValidationFailure


@dataclass(frozen=True)
class ValidationReport:
    valid: bool
    total_records: int
    failed_records: int
    failures: Sequence[ValidationFailure] = field(default_factory=tuple)

    @classmethod
    def from_failures(cls, total_records: int, failures: Sequence[ValidationFailure]) -> "ValidationReport":
        failures = tuple(failures)
        return cls(
            valid=not failures,
            total_records=total_records,
            failed_records=len(failures),
            failures=failures,
        )

    def has_issues(self) -> bool:
        return not self.valid

    def reason_counts(self) -> dict[FailureReason, int]:
        counts: Counter[FailureReason] = Counter()
        for failure in self.failures:
            counts.update(failure.reasons)
        return {reason: counts.get(reason, 0) for reason in FailureReason}
