"""
Ingestion package for the fatigue analysis.

Validates uploads, parses CSV text and normalizes rows into MessageEvents.
"""

from .normalizer import normalize_row, parse_rfc3339
from .service import (
    IngestedBatch,
    IngestionError,
    IngestionService,
    InvalidFileError,
    MissingColumnsError,
    ParseError,
    ingestion_service,
)

__all__ = [
    "IngestedBatch",
    "IngestionError",
    "IngestionService",
    "InvalidFileError",
    "MissingColumnsError",
    "ParseError",
    "ingestion_service",
    "normalize_row",
    "parse_rfc3339",
]
