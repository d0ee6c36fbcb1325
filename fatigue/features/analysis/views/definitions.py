"""
The two list views served by the API: recipients and message identities.
"""

from fatigue.config import settings
from fatigue.features.analysis.domain import MessageMetric, UserMetric

from .list_view import ListView, SortDirection, ViewState, text_key

USER_SORT_KEYS = {
    "email": text_key(lambda user: user.email),
    "total_messages": lambda user: user.total_messages,
    "daily_avg": lambda user: user.daily_avg,
    "weekly_avg": lambda user: user.weekly_avg,
    "monthly_avg": lambda user: user.monthly_avg,
    "risk_level": lambda user: user.risk_level.rank,
}

MESSAGE_SORT_KEYS = {
    "name": text_key(lambda message: message.name),
    "kind": text_key(lambda message: message.kind.value),
    "message_count": lambda message: message.message_count,
    "unique_recipients": lambda message: message.unique_recipients,
    "avg_frequency": lambda message: message.avg_frequency,
}

user_list_view: ListView[UserMetric] = ListView(
    name="users",
    text=lambda user: user.email,
    category=lambda user: user.risk_level.value,
    sort_keys=USER_SORT_KEYS,
    default_state=ViewState(page_size=settings.DEFAULT_PAGE_SIZE),
)

# Busiest messages first
message_list_view: ListView[MessageMetric] = ListView(
    name="messages",
    text=lambda message: message.name,
    category=lambda message: message.kind.value,
    sort_keys=MESSAGE_SORT_KEYS,
    default_state=ViewState(
        sort_column="message_count",
        sort_direction=SortDirection.DESC,
        page_size=settings.DEFAULT_PAGE_SIZE,
    ),
)
