"""
Row normalizer.

Turns one raw CSV record into a MessageEvent, or rejects it. Rejection is
silent by contract: callers count rejected rows, they never raise.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime

from fatigue.features.analysis.domain import (
    UNKNOWN_MESSAGE_NAME,
    MessageEvent,
    MessageIdentity,
    MessageKind,
)

RawRecord = Mapping[str, str | None]

EMAIL_COLUMN = "email"
RECIPIENT_COLUMN = "recipient"
CUSTOMER_ID_COLUMN = "customer_id"
TIMESTAMP_COLUMN = "created_RFC3339"
ID_COLUMN = "id"

# Checked in order, first non-empty column wins
IDENTITY_COLUMNS: tuple[tuple[str, MessageKind], ...] = (
    ("campaign_name", MessageKind.CAMPAIGN),
    ("newsletter_name", MessageKind.NEWSLETTER),
    ("transactional_message_name", MessageKind.TRANSACTIONAL),
    ("template_name", MessageKind.TEMPLATE),
)

UNKNOWN_IDENTITY = MessageIdentity(name=UNKNOWN_MESSAGE_NAME, kind=MessageKind.UNKNOWN)


def parse_rfc3339(value: str | None) -> datetime | None:
    """
    Parse an RFC3339 timestamp into an aware UTC datetime.

    A trailing ``Z`` is accepted, naive values are taken as UTC and anything
    ``datetime.fromisoformat`` cannot read returns None, as does a value
    whose UTC conversion falls outside the datetime range.
    """
    if not value:
        return None

    text = value.strip()
    if not text:
        return None
    if text[-1] in ("Z", "z"):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return parsed.astimezone(UTC)
    except (ValueError, OverflowError):
        return None


def resolve_identity(row: RawRecord) -> MessageIdentity:
    for column, kind in IDENTITY_COLUMNS:
        name = row.get(column)
        if name and name.strip():
            return MessageIdentity(name=name, kind=kind)
    return UNKNOWN_IDENTITY


def normalize_row(row: RawRecord) -> MessageEvent | None:
    """
    Extract the fields the analysis needs from one record.

    Returns None when the email (``email``, falling back to ``recipient``),
    the customer id or the timestamp is missing or unusable. Emails are kept
    verbatim; grouping is case and whitespace sensitive.
    """
    email = row.get(EMAIL_COLUMN) or row.get(RECIPIENT_COLUMN)
    if not email:
        return None

    customer_id = row.get(CUSTOMER_ID_COLUMN)
    if not customer_id:
        return None

    timestamp = parse_rfc3339(row.get(TIMESTAMP_COLUMN))
    if timestamp is None:
        return None

    return MessageEvent(
        recipient_email=email,
        customer_id=customer_id,
        timestamp=timestamp,
        identity=resolve_identity(row),
    )
