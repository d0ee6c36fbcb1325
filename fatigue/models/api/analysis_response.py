# fatigue/models/api/analysis_response.py
"""
Analysis API response models.
Used by routes to serialize analysis snapshots and list view pages.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from fatigue.features.analysis.domain import (
    AnalysisResult,
    DateRange,
    FileInfo,
    MessageMetric,
    Summary,
    UserMetric,
)
from fatigue.features.analysis.views import PageInfo


class SummaryResponse(BaseModel):
    """Overall figures for the current analysis."""

    total_messages: int = Field(..., ge=0, description="Accepted send events")
    unique_users: int = Field(..., ge=0, description="Distinct recipient emails")
    avg_per_day: float = Field(..., ge=0, description="Mean of per-user daily averages")
    high_freq_users: int = Field(..., ge=0, description="Users classified as high risk")
    is_empty: bool = Field(False, description="True when no row survived normalization")

    @classmethod
    def from_domain(cls, summary: Summary) -> "SummaryResponse":
        return cls(
            total_messages=summary.total_messages,
            unique_users=summary.unique_users,
            avg_per_day=summary.avg_per_day,
            high_freq_users=summary.high_freq_users,
            is_empty=summary.is_empty,
        )


class DateRangeResponse(BaseModel):
    min: datetime
    max: datetime

    @classmethod
    def from_domain(cls, date_range: DateRange) -> "DateRangeResponse":
        return cls(min=date_range.min, max=date_range.max)


class FileInfoResponse(BaseModel):
    name: str
    size_bytes: int = Field(..., ge=0)
    size_label: str = Field(..., description="Human readable size, e.g. '1.5 KB'")
    total_records: int = Field(..., ge=0, description="Rows left after the id pre-filter")

    @classmethod
    def from_domain(cls, file_info: FileInfo) -> "FileInfoResponse":
        return cls(
            name=file_info.name,
            size_bytes=file_info.size_bytes,
            size_label=file_info.size_label,
            total_records=file_info.total_records,
        )


class AnalysisSummaryResponse(BaseModel):
    """Response for GET /analysis/summary"""

    summary: SummaryResponse
    date_range: DateRangeResponse
    file_info: FileInfoResponse
    generated_at: datetime

    @classmethod
    def from_domain(cls, result: AnalysisResult) -> "AnalysisSummaryResponse":
        return cls(
            summary=SummaryResponse.from_domain(result.summary),
            date_range=DateRangeResponse.from_domain(result.date_range),
            file_info=FileInfoResponse.from_domain(result.file_info),
            generated_at=result.generated_at,
        )


class UploadResponse(AnalysisSummaryResponse):
    """Response for POST /analysis/upload"""

    success: bool
    validation_message: str
    status_message: str


class UserMetricResponse(BaseModel):
    email: str
    customer_id: str
    total_messages: int
    daily_avg: float
    weekly_avg: float
    monthly_avg: float
    risk_level: Literal["low", "medium", "high"]

    @classmethod
    def from_domain(cls, user: UserMetric) -> "UserMetricResponse":
        return cls(
            email=user.email,
            customer_id=user.customer_id,
            total_messages=user.total_messages,
            daily_avg=user.daily_avg,
            weekly_avg=user.weekly_avg,
            monthly_avg=user.monthly_avg,
            risk_level=user.risk_level.value,
        )


class MessageMetricResponse(BaseModel):
    name: str
    kind: Literal["campaign", "newsletter", "transactional", "template", "unknown"]
    message_count: int
    unique_recipients: int
    avg_frequency: float

    @classmethod
    def from_domain(cls, message: MessageMetric) -> "MessageMetricResponse":
        return cls(
            name=message.name,
            kind=message.kind.value,
            message_count=message.message_count,
            unique_recipients=message.unique_recipients,
            avg_frequency=message.avg_frequency,
        )


class PageInfoResponse(BaseModel):
    total_items: int
    total_pages: int
    current_page: int
    page_size: int | Literal["all"]
    start_index: int = Field(..., description="1-based index of the first row, 0 when empty")
    end_index: int
    page_strip: list[int | None] = Field(
        default_factory=list, description="Page numbers to show, null marks an ellipsis"
    )

    @classmethod
    def from_domain(cls, page_info: PageInfo) -> "PageInfoResponse":
        return cls(
            total_items=page_info.total_items,
            total_pages=page_info.total_pages,
            current_page=page_info.current_page,
            page_size=page_info.page_size,
            start_index=page_info.start_index,
            end_index=page_info.end_index,
            page_strip=list(page_info.page_strip),
        )


class UsersListResponse(BaseModel):
    """Response for GET /analysis/users"""

    rows: list[UserMetricResponse]
    page_info: PageInfoResponse
    sort_column: str | None
    sort_direction: Literal["asc", "desc"]


class MessagesListResponse(BaseModel):
    """Response for GET /analysis/messages"""

    rows: list[MessageMetricResponse]
    page_info: PageInfoResponse
    sort_column: str | None
    sort_direction: Literal["asc", "desc"]


class ChartResponse(BaseModel):
    """Label/series pair for one dashboard chart."""

    labels: list[str]
    series: list[int]
