"""
Aggregation package for the fatigue analysis.

Groups normalized send events into per-recipient and per-message buckets.
"""

from .service import MessageAggregationService, message_aggregation_service

__all__ = ["MessageAggregationService", "message_aggregation_service"]
