"""Central configuration for the statement checker package."""
from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, Context, Decimal

CSV_CONTENT_TYPES = frozenset({"text/csv", "application/csv"})
JSON_CONTENT_TYPES = frozenset({"application/json"})


@dataclass(slots=True, frozen=True)
class Settings:
    decimal_context: Context
    balance_tolerance: Decimal
    amount_exponent_limit: int
    text_encoding: str
    csv_content_types: frozenset[str]
    json_content_types: frozenset[str]
    log_level: str


SETTINGS = Settings(
    decimal_context=Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN),
    balance_tolerance=Decimal("0.01"),
    amount_exponent_limit=64,
    text_encoding="utf-8-sig",
    csv_content_types=CSV_CONTENT_TYPES,
    json_content_types=JSON_CONTENT_TYPES,
    log_level=os.environ.get("STATEMENT_CHECKER_LOG_LEVEL", "INFO").upper(),
)
