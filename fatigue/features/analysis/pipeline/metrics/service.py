"""
Fatigue metrics service - derives send rates, risk levels and summary figures.
"""

from __future__ import annotations

from fatigue.features.analysis.domain import (
    AggregationResult,
    MessageGroup,
    MessageMetric,
    RiskLevel,
    Summary,
    UserGroup,
    UserMetric,
)
from fatigue.infrastructure.observability.logging import get_logger
from fatigue.utils.formatting import round2

logger = get_logger(__name__)


class FatigueMetricsService:
    HIGH_RISK_DAILY_AVG = 3.0
    MEDIUM_RISK_DAILY_AVG = 1.0
    SECONDS_PER_DAY = 24 * 60 * 60
    DAYS_PER_WEEK = 7
    DAYS_PER_MONTH = 30

    def compute(
        self, aggregation: AggregationResult
    ) -> tuple[list[UserMetric], list[MessageMetric], Summary]:
        users = [self._user_metric(group) for group in aggregation.user_groups.values()]
        messages = [self._message_metric(group) for group in aggregation.message_groups.values()]
        summary = self._summary(users, aggregation.event_count)

        logger.info(
            "Fatigue metrics computed",
            users=len(users),
            messages=len(messages),
            high_risk_users=summary.high_freq_users,
            avg_per_day=summary.avg_per_day,
        )
        return users, messages, summary

    def classify_risk(self, daily_avg: float) -> RiskLevel:
        """Classify on the unrounded daily average; both bounds are exclusive."""
        if daily_avg > self.HIGH_RISK_DAILY_AVG:
            return RiskLevel.HIGH
        if daily_avg > self.MEDIUM_RISK_DAILY_AVG:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW

    def days_between(self, group: UserGroup) -> float:
        timestamps = [event.timestamp for event in group.events]
        if not timestamps:
            return 1.0
        span = (max(timestamps) - min(timestamps)).total_seconds() / self.SECONDS_PER_DAY
        return max(1.0, span)

    def _user_metric(self, group: UserGroup) -> UserMetric:
        total = len(group.events)
        daily_avg = total / self.days_between(group)

        return UserMetric(
            email=group.email,
            customer_id=group.customer_id,
            total_messages=total,
            daily_avg=round2(daily_avg),
            weekly_avg=round2(daily_avg * self.DAYS_PER_WEEK),
            monthly_avg=round2(daily_avg * self.DAYS_PER_MONTH),
            risk_level=self.classify_risk(daily_avg),
        )

    def _message_metric(self, group: MessageGroup) -> MessageMetric:
        unique_recipients = len(group.recipients)
        if unique_recipients > 0:
            avg_frequency = round2(group.message_count / unique_recipients)
        else:
            logger.warning(
                "Message group without recipients",
                name=group.identity.name,
                kind=group.identity.kind.value,
            )
            avg_frequency = 0.0

        return MessageMetric(
            name=group.identity.name,
            kind=group.identity.kind,
            message_count=group.message_count,
            unique_recipients=unique_recipients,
            avg_frequency=avg_frequency,
        )

    def _summary(self, users: list[UserMetric], total_messages: int) -> Summary:
        if not users:
            return Summary(
                total_messages=total_messages,
                unique_users=0,
                avg_per_day=0.0,
                high_freq_users=0,
                is_empty=True,
            )

        # Population mean of the reported (rounded) per-user daily averages
        mean_daily = sum(user.daily_avg for user in users) / len(users)
        return Summary(
            total_messages=total_messages,
            unique_users=len(users),
            avg_per_day=round2(mean_daily),
            high_freq_users=sum(1 for user in users if user.risk_level is RiskLevel.HIGH),
        )


fatigue_metrics_service = FatigueMetricsService()
