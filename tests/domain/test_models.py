from decimal import Decimal

from helpers import make_record
from statement_checker.domain.errors import StatementParseError
from statement_checker.domain.models import FailureReason, ValidationFailure


def test_expected_end_balance():
    record = make_record(start="21.6", mutation="-41.83", end="-20.23")

    assert record.expected_end_balance == Decimal("-20.23")
    assert record.is_balance_correct(Decimal("0.01"))


def test_sorted_reasons_follow_enum_order():
    failure = ValidationFailure(
        reference=1,
        description="x",
        reasons=frozenset({FailureReason.INCORRECT_END_BALANCE, FailureReason.DUPLICATE_REFERENCE}),
    )

    assert failure.sorted_reasons() == [FailureReason.DUPLICATE_REFERENCE, FailureReason.INCORRECT_END_BALANCE]


def test_parse_error_location():
    error = StatementParseError("Invalid mutation amount at line 3", line_number=3, field_name="Mutation")

    assert error.error_code == "PARSE_ERROR"
    assert error.location() == "line 3, field Mutation"
    assert StatementParseError("Malformed JSON").location() == ""
