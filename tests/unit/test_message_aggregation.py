from datetime import UTC, date, datetime, timedelta

from fatigue.features.analysis.domain import MessageKind
from fatigue.features.analysis.pipeline.aggregation import MessageAggregationService


def test_events_are_grouped_by_email_in_first_seen_order(make_event):
    start = datetime(2024, 1, 1, tzinfo=UTC)
    events = [
        make_event(email="b@x.com", customer_id="c2", timestamp=start),
        make_event(email="a@x.com", customer_id="c1", timestamp=start + timedelta(hours=1)),
        make_event(email="b@x.com", customer_id="other", timestamp=start + timedelta(hours=2)),
    ]

    result = MessageAggregationService().aggregate(events)

    assert list(result.user_groups) == ["b@x.com", "a@x.com"]
    assert len(result.user_groups["b@x.com"].events) == 2
    # customer id comes from the first event seen for the email
    assert result.user_groups["b@x.com"].customer_id == "c2"
    assert result.event_count == 3


def test_email_grouping_is_case_sensitive(make_event):
    result = MessageAggregationService().aggregate(
        [make_event(email="a@x.com"), make_event(email="A@x.com")]
    )

    assert len(result.user_groups) == 2


def test_message_groups_are_keyed_by_kind_and_name(make_event):
    events = [
        make_event(email="a@x.com", name="Launch", kind=MessageKind.CAMPAIGN),
        make_event(email="b@x.com", name="Launch", kind=MessageKind.CAMPAIGN),
        make_event(email="a@x.com", name="Launch", kind=MessageKind.CAMPAIGN),
        make_event(email="a@x.com", name="Launch", kind=MessageKind.NEWSLETTER),
    ]

    result = MessageAggregationService().aggregate(events)

    campaign = result.message_groups[("campaign", "Launch")]
    newsletter = result.message_groups[("newsletter", "Launch")]
    assert campaign.message_count == 3
    assert campaign.recipients == {"a@x.com", "b@x.com"}
    assert newsletter.message_count == 1


def test_date_range_and_daily_counts(make_event):
    events = [
        make_event(timestamp=datetime(2024, 1, 3, 23, 0, tzinfo=UTC)),
        make_event(timestamp=datetime(2024, 1, 1, 6, 0, tzinfo=UTC)),
        make_event(timestamp=datetime(2024, 1, 3, 1, 0, tzinfo=UTC)),
    ]

    result = MessageAggregationService().aggregate(events)

    assert result.date_range.min == datetime(2024, 1, 1, 6, 0, tzinfo=UTC)
    assert result.date_range.max == datetime(2024, 1, 3, 23, 0, tzinfo=UTC)
    assert [(entry.day, entry.count) for entry in result.daily_counts] == [
        (date(2024, 1, 1), 1),
        (date(2024, 1, 3), 2),
    ]


def test_empty_input_collapses_date_range_to_now():
    now = datetime(2024, 5, 1, 12, tzinfo=UTC)

    result = MessageAggregationService().aggregate([], now=now)

    assert result.user_groups == {}
    assert result.message_groups == {}
    assert result.date_range.min == now
    assert result.date_range.max == now
    assert result.daily_counts == []
    assert result.event_count == 0
