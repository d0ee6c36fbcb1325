"""
Ingestion service.

Validates an uploaded file, parses the CSV text into header-keyed records,
checks the required columns and hands every surviving row to the normalizer.
Any error raised here aborts the ingestion as a whole; nothing is published.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from pathlib import PurePath

from fatigue.config import settings
from fatigue.features.analysis.domain import MessageEvent
from fatigue.infrastructure.observability.logging import get_logger, log_pipeline_stage

from .normalizer import (
    CUSTOMER_ID_COLUMN,
    EMAIL_COLUMN,
    ID_COLUMN,
    RECIPIENT_COLUMN,
    TIMESTAMP_COLUMN,
    normalize_row,
)

logger = get_logger(__name__)

REQUIRED_COLUMNS = [CUSTOMER_ID_COLUMN, EMAIL_COLUMN, TIMESTAMP_COLUMN]
VALID_DATA_MESSAGE = "All required columns found. Data is valid."


class IngestionError(Exception):
    """Base exception for ingestion failures."""

    def __init__(self, message: str, filename: str | None = None):
        super().__init__(message)
        self.message = message
        self.filename = filename


class InvalidFileError(IngestionError):
    """Raised when the upload has the wrong extension or is too large."""

    def __init__(self, message: str, filename: str | None = None, too_large: bool = False):
        super().__init__(message, filename)
        self.too_large = too_large


class ParseError(IngestionError):
    """Raised when the CSV text cannot be parsed."""

    pass


class MissingColumnsError(IngestionError):
    """Raised when required columns are absent from the header row."""

    def __init__(self, missing_columns: list[str], filename: str | None = None):
        super().__init__(f"Missing required columns: {', '.join(missing_columns)}", filename)
        self.missing_columns = missing_columns


@dataclass(slots=True)
class IngestedBatch:
    events: list[MessageEvent]
    header: list[str]
    total_records: int
    rejected_rows: int
    prefiltered_rows: int = 0
    raw_row_count: int = 0
    validation_message: str = VALID_DATA_MESSAGE


class IngestionService:
    def validate_upload(self, filename: str, size_bytes: int) -> None:
        limits = settings.get_upload_limits()
        suffix = PurePath(filename or "").suffix.lower()

        if suffix not in limits["extensions"]:
            logger.warning("Upload rejected - extension", filename=filename, suffix=suffix)
            raise InvalidFileError("Please select a CSV file.", filename)

        if size_bytes > limits["max_bytes"]:
            raise InvalidFileError(
                f"File size must be less than {limits['max_megabytes']:g}MB.",
                filename,
                too_large=True,
            )

    def parse_csv(
        self, content: bytes, filename: str | None = None
    ) -> tuple[list[str], list[dict[str, str]]]:
        """
        Parse CSV bytes using the first row as field names.

        Short rows are padded with empty strings and surplus cells dropped, so
        every record maps each header column to a string.
        """
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParseError(f"Error parsing CSV: {e}", filename) from e

        try:
            reader = csv.DictReader(io.StringIO(text, newline=""), restval="")
            header = list(reader.fieldnames or [])
            rows = [
                {key: value or "" for key, value in row.items() if key is not None}
                for row in reader
            ]
        except csv.Error as e:
            raise ParseError(f"Error parsing CSV: {e}", filename) from e

        return header, rows

    def check_required_columns(self, header: list[str], filename: str | None = None) -> None:
        columns = set(header)
        missing = []
        for column in REQUIRED_COLUMNS:
            if column in columns:
                continue
            if column == EMAIL_COLUMN and RECIPIENT_COLUMN in columns:
                continue
            missing.append(column)

        if missing:
            logger.warning("Upload rejected - missing columns", filename=filename, missing=missing)
            raise MissingColumnsError(missing, filename)

    def prefilter_rows(self, header: list[str], rows: list[dict[str, str]]) -> list[dict[str, str]]:
        """
        Drop rows whose ``id`` cell is blank, when the file has an id column.

        Files without an id column keep every row rather than being emptied
        before the header check runs.
        """
        if ID_COLUMN not in header:
            return rows
        return [row for row in rows if (row.get(ID_COLUMN) or "").strip()]

    def ingest(self, filename: str, content: bytes) -> IngestedBatch:
        self.validate_upload(filename, len(content))
        header, rows = self.parse_csv(content, filename)
        records = self.prefilter_rows(header, rows)
        self.check_required_columns(header, filename)

        events: list[MessageEvent] = []
        rejected = 0
        for record in records:
            event = normalize_row(record)
            if event is None:
                rejected += 1
                continue
            events.append(event)

        log_pipeline_stage(
            "ingestion",
            filename=filename,
            raw_rows=len(rows),
            records=len(records),
            prefiltered=len(rows) - len(records),
            rejected=rejected,
            accepted=len(events),
        )

        return IngestedBatch(
            events=events,
            header=header,
            total_records=len(records),
            rejected_rows=rejected,
            prefiltered_rows=len(rows) - len(records),
            raw_row_count=len(rows),
        )


ingestion_service = IngestionService()
