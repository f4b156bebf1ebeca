from io import BytesIO
from pathlib import Path

from helpers import csv_content
from statement_checker.domain.models import FileFormat
from statement_checker.infrastructure.repositories.upload_repositories import UploadedStatementRepository

DATA_DIR = Path(__file__).resolve().parents[1] / "data"


def test_repository_from_path_uses_file_name():
    repository = UploadedStatementRepository(DATA_DIR / "records.json")

    assert repository.detect_format() is FileFormat.JSON
    assert len(repository.list_transaction_records()) == 3


def test_repository_from_stream_with_content_type():
    content = csv_content("194261,NL91RABO0315273637,Test,21.6,-41.83,-20.23")
    repository = UploadedStatementRepository(BytesIO(content), content_type="text/csv")

    assert repository.detect_format() is FileFormat.CSV
    assert repository.list_transaction_records(FileFormat.CSV)[0].reference == 194261
