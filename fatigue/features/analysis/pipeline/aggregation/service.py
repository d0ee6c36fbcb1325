"""
Message aggregation service.

Groups normalized events by recipient and by message identity in a single
pass, tracking the overall date range and per-day send counts on the way.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from datetime import UTC, datetime

from fatigue.features.analysis.domain import (
    AggregationResult,
    DailyCount,
    DateRange,
    MessageEvent,
    MessageGroup,
    MessageIdentity,
    UserGroup,
)
from fatigue.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class MessageAggregationService:
    def aggregate(
        self, events: Iterable[MessageEvent], now: datetime | None = None
    ) -> AggregationResult:
        """
        Build user and message groups from events.

        With no events the date range collapses to ``now`` (the ingestion
        time) on both bounds.
        """
        users: dict[str, UserGroup] = {}
        messages: dict[tuple[str, str], MessageGroup] = {}
        per_day: Counter = Counter()
        min_ts: datetime | None = None
        max_ts: datetime | None = None
        event_count = 0

        def ensure_user(event: MessageEvent) -> UserGroup:
            if event.recipient_email not in users:
                users[event.recipient_email] = UserGroup(
                    email=event.recipient_email, customer_id=event.customer_id
                )
            return users[event.recipient_email]

        def ensure_message(identity: MessageIdentity) -> MessageGroup:
            if identity.key not in messages:
                messages[identity.key] = MessageGroup(identity=identity)
            return messages[identity.key]

        for event in events:
            event_count += 1

            if min_ts is None or event.timestamp < min_ts:
                min_ts = event.timestamp
            if max_ts is None or event.timestamp > max_ts:
                max_ts = event.timestamp

            ensure_user(event).events.append(event)

            group = ensure_message(event.identity)
            group.message_count += 1
            group.recipients.add(event.recipient_email)

            per_day[event.timestamp.astimezone(UTC).date()] += 1

        if min_ts is None or max_ts is None:
            anchor = now or datetime.now(UTC)
            date_range = DateRange(min=anchor, max=anchor)
        else:
            date_range = DateRange(min=min_ts, max=max_ts)

        daily_counts = [DailyCount(day=day, count=per_day[day]) for day in sorted(per_day)]

        logger.info(
            "Events aggregated",
            events=event_count,
            users=len(users),
            messages=len(messages),
            days=len(daily_counts),
        )

        return AggregationResult(
            user_groups=users,
            message_groups=messages,
            date_range=date_range,
            daily_counts=daily_counts,
            event_count=event_count,
        )


message_aggregation_service = MessageAggregationService()
