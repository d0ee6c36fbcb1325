"""
Domain package for the message fatigue analysis.
"""

from .models import (
    UNKNOWN_MESSAGE_NAME,
    AggregationResult,
    AnalysisResult,
    DailyCount,
    DateRange,
    FileInfo,
    MessageEvent,
    MessageGroup,
    MessageIdentity,
    MessageKind,
    MessageMetric,
    RiskLevel,
    Summary,
    UserGroup,
    UserMetric,
)

__all__ = [
    "UNKNOWN_MESSAGE_NAME",
    "AggregationResult",
    "AnalysisResult",
    "DailyCount",
    "DateRange",
    "FileInfo",
    "MessageEvent",
    "MessageGroup",
    "MessageIdentity",
    "MessageKind",
    "MessageMetric",
    "RiskLevel",
    "Summary",
    "UserGroup",
    "UserMetric",
]
