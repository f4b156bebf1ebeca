from decimal import Decimal

from statement_checker.domain.models import TransactionRecord

CSV_HEADER = "Reference,AccountNumber,Description,Start Balance,Mutation,End Balance"


def make_record(
    reference: int = 194261,
    start: str = "100.00",
    mutation: str = "50.00",
    end: str = "150.00",
    description: str = "Test transaction",
) -> TransactionRecord:
    return TransactionRecord(
        reference=reference,
        account_number="NL91RABO0315273637",
        description=description,
        start_balance=Decimal(start),
        mutation=Decimal(mutation),
        end_balance=Decimal(end),
    )


def csv_content(*rows: str, header: str = CSV_HEADER) -> bytes:
    return "\n".join((header,) + rows).encode("utf-8")
