"""
Analysis pipeline - raw upload bytes in, immutable AnalysisResult out.
"""

from __future__ import annotations

from datetime import UTC, datetime

from fatigue.features.analysis.domain import AnalysisResult, FileInfo
from fatigue.infrastructure.observability.logging import get_logger
from fatigue.utils.formatting import format_file_size

from .aggregation import MessageAggregationService, message_aggregation_service
from .ingestion import IngestionService, ingestion_service
from .metrics import FatigueMetricsService, fatigue_metrics_service

logger = get_logger(__name__)


class AnalysisPipeline:
    def __init__(
        self,
        ingestion: IngestionService = ingestion_service,
        aggregation: MessageAggregationService = message_aggregation_service,
        metrics: FatigueMetricsService = fatigue_metrics_service,
    ):
        self.ingestion = ingestion
        self.aggregation = aggregation
        self.metrics = metrics

    def run(self, filename: str, content: bytes, now: datetime | None = None) -> AnalysisResult:
        """
        Run every stage to completion.

        Raises IngestionError subclasses for file, parse and header problems;
        the caller publishes the result only when this returns.
        """
        generated_at = now or datetime.now(UTC)

        batch = self.ingestion.ingest(filename, content)
        aggregation = self.aggregation.aggregate(batch.events, now=generated_at)
        users, messages, summary = self.metrics.compute(aggregation)

        result = AnalysisResult(
            users=tuple(users),
            messages=tuple(messages),
            summary=summary,
            date_range=aggregation.date_range,
            daily_counts=tuple(aggregation.daily_counts),
            file_info=FileInfo(
                name=filename,
                size_bytes=len(content),
                size_label=format_file_size(len(content)),
                total_records=batch.total_records,
            ),
            generated_at=generated_at,
        )

        logger.info(
            "Analysis completed",
            filename=filename,
            total_records=batch.total_records,
            rejected_rows=batch.rejected_rows,
            total_messages=summary.total_messages,
            unique_users=summary.unique_users,
        )
        return result


analysis_pipeline = AnalysisPipeline()
