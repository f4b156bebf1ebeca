"""Domain models for the statement validation pipeline.

These dataclasses capture the canonical schema for parsed transaction records
and the failures the rule engine attaches to them.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, localcontext
from enum import Enum

from statement_checker.config import SETTINGS


class FileFormat(str, Enum):
    """Supported statement encodings."""

    CSV = "CSV"
    JSON = "JSON"


class FailureReason(str, Enum):
    """Why a record failed validation."""

    DUPLICATE_REFERENCE = "DUPLICATE_REFERENCE"
    INCORRECT_END_BALANCE = "INCORRECT_END_BALANCE"


@dataclass(frozen=True)
class TransactionRecord:
    """One transaction line of an uploaded statement."""

    reference: int
    account_number: str
    description: str
    start_balance: Decimal
    mutation: Decimal
    end_balance: Decimal

    @property
    def expected_end_balance(self) -> Decimal | None:
        if self.start_balance is None or self.mutation is None:
            return None
        with localcontext(SETTINGS.decimal_context):
            return self.start_balance + self.mutation

    def is_balance_correct(self, tolerance: Decimal) -> bool:
        expected = self.expected_end_balance
        if expected is None or self.end_balance is None:
            return False
        with localcontext(SETTINGS.decimal_context):
            return abs(expected - self.end_balance) <= tolerance


@dataclass(frozen=True)
class ValidationFailure:
    """A record that failed at least one rule."""

    reference: int
    description: str
    reasons: frozenset[FailureReason]

    def sorted_reasons(self) -> list[FailureReason]:
        order = list(FailureReason)
        return sorted(self.reasons, key=order.index)
