"""
Domain models for the message fatigue analysis.

These dataclasses describe every shape the analysis pipeline produces, from
one normalized CSV row up to the published AnalysisResult. They carry no
business logic so the pipeline, the list views and the API layer can share
them freely.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


class MessageKind(str, Enum):
    CAMPAIGN = "campaign"
    NEWSLETTER = "newsletter"
    TRANSACTIONAL = "transactional"
    TEMPLATE = "template"
    UNKNOWN = "unknown"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _RISK_RANK[self]


_RISK_RANK = {RiskLevel.LOW: 0, RiskLevel.MEDIUM: 1, RiskLevel.HIGH: 2}

UNKNOWN_MESSAGE_NAME = "Unknown Message"


@dataclass(frozen=True, slots=True)
class MessageIdentity:
    """The (kind, name) pair identifying a distinct message."""

    name: str
    kind: MessageKind

    @property
    def key(self) -> tuple[str, str]:
        return (self.kind.value, self.name)


@dataclass(frozen=True, slots=True)
class MessageEvent:
    """One accepted send event, produced from exactly one CSV row."""

    recipient_email: str
    customer_id: str
    timestamp: datetime
    identity: MessageIdentity


@dataclass(slots=True)
class UserGroup:
    """All events for one recipient email, in input order."""

    email: str
    customer_id: str
    events: list[MessageEvent] = field(default_factory=list)


@dataclass(slots=True)
class MessageGroup:
    """Send count and distinct recipients for one message identity."""

    identity: MessageIdentity
    message_count: int = 0
    recipients: set[str] = field(default_factory=set)


@dataclass(frozen=True, slots=True)
class DateRange:
    min: datetime
    max: datetime


@dataclass(frozen=True, slots=True)
class DailyCount:
    day: date
    count: int


@dataclass(slots=True)
class AggregationResult:
    """Output of the aggregator: groups keyed in first-seen order."""

    user_groups: dict[str, UserGroup]
    message_groups: dict[tuple[str, str], MessageGroup]
    date_range: DateRange
    daily_counts: list[DailyCount]
    event_count: int


@dataclass(frozen=True, slots=True)
class UserMetric:
    email: str
    customer_id: str
    total_messages: int
    daily_avg: float
    weekly_avg: float
    monthly_avg: float
    risk_level: RiskLevel


@dataclass(frozen=True, slots=True)
class MessageMetric:
    name: str
    kind: MessageKind
    message_count: int
    unique_recipients: int
    avg_frequency: float


@dataclass(frozen=True, slots=True)
class Summary:
    total_messages: int
    unique_users: int
    avg_per_day: float
    high_freq_users: int
    is_empty: bool = False


@dataclass(frozen=True, slots=True)
class FileInfo:
    """Upload metadata shown next to the analysis."""

    name: str
    size_bytes: int
    size_label: str
    total_records: int


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Immutable snapshot published after a successful ingestion."""

    users: tuple[UserMetric, ...]
    messages: tuple[MessageMetric, ...]
    summary: Summary
    date_range: DateRange
    daily_counts: tuple[DailyCount, ...]
    file_info: FileInfo
    generated_at: datetime
