import json
from decimal import Decimal
from io import BytesIO
from pathlib import Path

import pytest

from statement_checker.domain.errors import StatementParseError
from statement_checker.domain.models import FileFormat
from statement_checker.infrastructure.parsing.statement import parse_statement

DATA_DIR = Path(__file__).resolve().parents[2] / "data"


def valid_element(**overrides):
    element = {
        "reference": 194261,
        "accountNumber": "NL91RABO0315273637",
        "description": "Book John Smith",
        "startBalance": 21.6,
        "mutation": -41.83,
        "endBalance": -20.23,
    }
    element.update(overrides)
    return element


def to_bytes(payload) -> bytes:
    return json.dumps(payload).encode("utf-8")


def parse(content: bytes):
    return parse_statement(content, FileFormat.JSON)


def test_parse_sample_file():
    records = parse_statement(DATA_DIR / "records.json", FileFormat.JSON)

    assert [record.reference for record in records] == [130498, 167875, 130498]
    assert records[0].start_balance == Decimal("26.9")
    assert records[2].end_balance == Decimal("63.8")


def test_numbers_are_read_exactly():
    records = parse(b'[{"reference": 1, "accountNumber": "A", "description": "D",'
                    b' "startBalance": 0.1, "mutation": 0.2, "endBalance": 0.3}]')

    assert records[0].start_balance + records[0].mutation == records[0].end_balance


def test_numeric_strings_are_accepted():
    records = parse(to_bytes([valid_element(reference="194261", startBalance="21.6", mutation="+1", endBalance="22.6")]))

    assert records[0].reference == 194261
    assert records[0].mutation == Decimal("1")


def test_text_fields_are_trimmed():
    records = parse(to_bytes([valid_element(accountNumber="  NL91RABO0315273637 ", description="  Test  ")]))

    assert records[0].account_number == "NL91RABO0315273637"
    assert records[0].description == "Test"


def test_empty_array():
    assert parse(b"[]") == []


def test_stream_source():
    records = parse_statement(BytesIO(to_bytes([valid_element()])), FileFormat.JSON)

    assert len(records) == 1


def test_malformed_json():
    with pytest.raises(StatementParseError, match="Malformed JSON"):
        parse(b'[{"reference": 1,')


def test_root_must_be_array():
    with pytest.raises(StatementParseError, match="JSON root element must be an array"):
        parse(to_bytes(valid_element()))


def test_element_must_be_object():
    with pytest.raises(StatementParseError, match="Record at index 1 must be an object") as exc_info:
        parse(to_bytes([valid_element(), 42]))

    assert exc_info.value.record_index == 1


def test_missing_account_number():
    element = valid_element()
    del element["accountNumber"]

    with pytest.raises(StatementParseError, match="Missing required field 'accountNumber' at record 0") as exc_info:
        parse(to_bytes([element]))

    assert exc_info.value.field_name == "accountNumber"
    assert exc_info.value.record_index == 0
    assert exc_info.value.line_number is None


@pytest.mark.parametrize(
    ("overrides", "message", "field"),
    [
        ({"reference": None}, "Missing required field 'reference'", "reference"),
        ({"accountNumber": None}, "Missing required field 'accountNumber'", "accountNumber"),
        ({"accountNumber": ""}, "Missing required field 'accountNumber'", "accountNumber"),
        ({"description": "   "}, "Missing required field 'description'", "description"),
        ({"endBalance": ""}, "Missing required field 'endBalance'", "endBalance"),
        ({"reference": "abc"}, "Invalid reference", "reference"),
        ({"reference": 1.5}, "Invalid reference", "reference"),
        ({"reference": True}, "Invalid reference", "reference"),
        ({"reference": "\u0661\u0662\u0663"}, "Invalid reference", "reference"),
        ({"reference": "99999999999999999999"}, "Invalid reference", "reference"),
        ({"startBalance": 1e300}, "Invalid startBalance", "startBalance"),
        ({"startBalance": "abc"}, "Invalid startBalance", "startBalance"),
        ({"mutation": "12abc"}, "Invalid mutation", "mutation"),
        ({"endBalance": {"amount": 1}}, "Invalid endBalance", "endBalance"),
    ],
)
def test_field_errors(overrides, message, field):
    with pytest.raises(StatementParseError, match=message) as exc_info:
        parse(to_bytes([valid_element(**overrides)]))

    assert exc_info.value.field_name == field
    assert exc_info.value.record_index == 0


def test_first_invalid_element_aborts_parse():
    payload = [valid_element(), valid_element(startBalance="invalid"), valid_element(mutation="invalid")]

    with pytest.raises(StatementParseError, match="Invalid startBalance at record 1") as exc_info:
        parse(to_bytes(payload))

    assert exc_info.value.record_index == 1


def test_huge_exponent_reference_rejected_without_expanding():
    content = (
        b'[{"reference": 1e2000000, "accountNumber": "A", "description": "D",'
        b' "startBalance": 1, "mutation": 1, "endBalance": 2}]'
    )

    with pytest.raises(StatementParseError, match="Invalid reference at record 0"):
        parse(content)


def test_long_integer_literal_reference_rejected():
    content = (
        b'[{"reference": ' + b"9" * 5000 + b', "accountNumber": "A", "description": "D",'
        b' "startBalance": 1, "mutation": 1, "endBalance": 2}]'
    )

    with pytest.raises(StatementParseError, match="Invalid reference at record 0"):
        parse(content)


def test_integral_decimal_reference_accepted():
    records = parse(to_bytes([valid_element()]).replace(b"194261", b"1.94261e5"))

    assert records[0].reference == 194261
