"""Command-line entrypoint for statement validation."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from statement_checker.application.dto import StatementUpload
from statement_checker.application.use_cases import ValidateStatementUseCase
from statement_checker.domain.errors import StatementError, StatementValidationError
from statement_checker.log_config import configure_logging
from statement_checker.presentation.report_rendering import error_to_dict, render_json

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_CLIENT_ERROR = 2
EXIT_INTERNAL_ERROR = 3


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate a bank statement file (CSV or JSON)")
    parser.add_argument("statement", type=str, help="Path to the statement file")
    parser.add_argument("--content-type", type=str, help="Declared content type, e.g. text/csv")
    parser.add_argument("--output", choices=("text", "json"), default="text", help="Report format")
    parser.add_argument("--strict", action="store_true", help="Exit with status 1 when records fail validation")
    parser.add_argument("--log-level", type=str, default=None, help="Loguru level, e.g. DEBUG")
    return parser.parse_args(argv)


def _print_summary(report) -> None:
    print("Validation Summary")
    print("==================")
    print(f"Total records: {report.total_records}")
    print(f"Failed records: {report.failed_records}")
    for reason, count in report.reason_counts().items():
        print(f"{reason.value}: {count}")

    if report.has_issues():
        print("\nFailures:")
        for failure in report.failures:
            reasons = ", ".join(reason.value for reason in failure.sorted_reasons())
            print(f"- {failure.reference} ({failure.description}): {reasons}")
    else:
        print("\nAll records are valid.")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(args.log_level)

    path = Path(args.statement)
    try:
        upload = StatementUpload.from_path(path, content_type=args.content_type)
    except OSError as exc:
        print(f"Cannot read {path}: {exc}", file=sys.stderr)
        return EXIT_CLIENT_ERROR

    try:
        response = ValidateStatementUseCase().execute(upload)
    except StatementError as exc:
        print(json.dumps(error_to_dict(exc), indent=2), file=sys.stderr)
        return EXIT_CLIENT_ERROR
    except StatementValidationError as exc:
        print(json.dumps(error_to_dict(exc), indent=2), file=sys.stderr)
        return EXIT_INTERNAL_ERROR

    report = response.report
    if args.output == "json":
        print(render_json(report))
    else:
        _print_summary(report)

    if args.strict and not report.valid:
        return EXIT_INVALID
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
