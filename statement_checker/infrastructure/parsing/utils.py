"""Shared parsing utilities for statement ingestion."""
from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from io import BytesIO
from pathlib import Path
from typing import BinaryIO

from statement_checker.config import SETTINGS

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
_INT64_DIGITS = 19

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_DECIMAL_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_WHITESPACE = re.compile(r"\s+")


def ensure_bytes(source: BinaryIO | Path | bytes | bytearray) -> bytes:
    if isinstance(source, bytes):
        return source
    if isinstance(source, bytearray):
        return bytes(source)
    if isinstance(source, BytesIO):
        return source.getvalue()
    if isinstance(source, Path):
        return source.read_bytes()
    if hasattr(source, "read"):
        return source.read()
    raise TypeError(f"Unsupported source type: {type(source)!r}")


def decode_text(data: bytes) -> str:
    return data.decode(SETTINGS.text_encoding)


def normalize_header(header: str) -> str:
    """Header names compare without whitespace and case: "Start Balance" == "startbalance"."""
    return _WHITESPACE.sub("", header).lower()


def parse_reference(value: object) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Boolean is not a reference: {value!r}")
    if isinstance(value, int):
        result = value
    elif isinstance(value, Decimal):
        # adjusted() > 18 cannot fit in 64 bits; checked before int() expands the exponent
        if not value.is_finite() or value.adjusted() > _INT64_DIGITS - 1:
            raise ValueError(f"Not a 64-bit integer: {value!r}")
        if value != value.to_integral_value():
            raise ValueError(f"Not an integer: {value!r}")
        result = int(value)
    elif isinstance(value, str):
        text = value.strip()
        if not _INTEGER_PATTERN.fullmatch(text):
            raise ValueError(f"Not an integer: {value!r}")
        if len(text.lstrip("+-").lstrip("0")) > _INT64_DIGITS:
            raise ValueError(f"Not a 64-bit integer: {value!r}")
        result = int(text)
    else:
        raise ValueError(f"Unsupported reference value: {value!r}")
    if not INT64_MIN <= result <= INT64_MAX:
        raise ValueError(f"Reference out of 64-bit range: {result}")
    return result


def _check_amount_range(value: Decimal) -> Decimal:
    limit = SETTINGS.amount_exponent_limit
    if not value.is_finite():
        raise ValueError(f"Amount is not finite: {value!r}")
    if value.adjusted() > limit or value.as_tuple().exponent < -limit:
        raise ValueError(f"Amount exponent out of range: {value!r}")
    return value


def parse_decimal(value: object) -> Decimal:
    if isinstance(value, bool):
        raise ValueError(f"Boolean is not an amount: {value!r}")
    if isinstance(value, int):
        return _check_amount_range(Decimal(value))
    if isinstance(value, Decimal):
        return _check_amount_range(value)
    if isinstance(value, str):
        text = value.strip()
        if not _DECIMAL_PATTERN.fullmatch(text):
            raise ValueError(f"Not a decimal: {value!r}")
        try:
            return _check_amount_range(Decimal(text))
        except InvalidOperation as exc:
            raise ValueError(f"Not a decimal: {value!r}") from exc
    raise ValueError(f"Unsupported amount value: {value!r}")


def strip_plus_sign(value: str) -> str:
    return value[1:] if value.startswith("+") else value
