import csv
import io
from datetime import UTC, datetime

import pytest

from fatigue.features.analysis.domain import MessageEvent, MessageIdentity, MessageKind
from fatigue.features.analysis.pipeline import AnalysisPipeline
from fatigue.features.analysis.services import analysis_store

DEFAULT_HEADER = [
    "id",
    "customer_id",
    "email",
    "created_RFC3339",
    "campaign_name",
    "newsletter_name",
    "transactional_message_name",
    "template_name",
]

GENERATED_AT = datetime(2024, 2, 1, 9, 30, tzinfo=UTC)


def _row(row_id, customer_id, email, created, **identity) -> dict:
    return {
        "id": row_id,
        "customer_id": customer_id,
        "email": email,
        "created_RFC3339": created,
        **identity,
    }


# a@x.com: 3 sends over 2 days, b@x.com: 1 send, c@x.com: 4 sends in one morning.
# The last two rows are dropped: blank id (pre-filter) and bad timestamp (rejected).
SAMPLE_ROWS = [
    _row("1", "c1", "a@x.com", "2024-01-01T00:00:00Z", campaign_name="Promo"),
    _row("2", "c1", "a@x.com", "2024-01-02T00:00:00Z", campaign_name="Promo"),
    _row("3", "c1", "a@x.com", "2024-01-03T00:00:00Z", newsletter_name="Weekly"),
    _row("4", "c2", "b@x.com", "2024-01-01T12:00:00Z", campaign_name="Promo"),
    _row("5", "c3", "c@x.com", "2024-01-02T08:00:00Z"),
    _row("6", "c3", "c@x.com", "2024-01-02T09:00:00Z", transactional_message_name="Receipt"),
    _row("7", "c3", "c@x.com", "2024-01-02T10:00:00Z", transactional_message_name="Receipt"),
    _row("8", "c3", "c@x.com", "2024-01-02T11:00:00Z", transactional_message_name="Receipt"),
    _row("", "c4", "d@x.com", "2024-01-02T11:00:00Z", campaign_name="Promo"),
    _row("9", "c5", "e@x.com", "not-a-date", campaign_name="Promo"),
]


def _build_csv(rows: list[dict], header: list[str] | None = None) -> bytes:
    buffer = io.StringIO()
    writer = csv.DictWriter(
        buffer,
        fieldnames=header or DEFAULT_HEADER,
        restval="",
        extrasaction="ignore",
        lineterminator="\n",
    )
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


@pytest.fixture
def build_csv():
    return _build_csv


@pytest.fixture
def sample_csv() -> bytes:
    return _build_csv(SAMPLE_ROWS)


@pytest.fixture
def sample_result(sample_csv):
    return AnalysisPipeline().run("sample.csv", sample_csv, now=GENERATED_AT)


@pytest.fixture
def make_event():
    def _make(
        email: str = "a@x.com",
        timestamp: datetime | None = None,
        name: str = "Promo",
        kind: MessageKind = MessageKind.CAMPAIGN,
        customer_id: str = "c1",
    ) -> MessageEvent:
        return MessageEvent(
            recipient_email=email,
            customer_id=customer_id,
            timestamp=timestamp or datetime(2024, 1, 1, tzinfo=UTC),
            identity=MessageIdentity(name=name, kind=kind),
        )

    return _make


@pytest.fixture(autouse=True)
def clear_analysis_store():
    analysis_store.clear()
    yield
    analysis_store.clear()
