"""
List view package.

A generic filter/sort/paginate engine plus its user and message instances.
"""

from .definitions import message_list_view, user_list_view
from .list_view import (
    ALL,
    ListPage,
    ListView,
    ListViewError,
    PageInfo,
    SortDirection,
    ViewState,
    page_strip,
    text_key,
)

__all__ = [
    "ALL",
    "ListPage",
    "ListView",
    "ListViewError",
    "PageInfo",
    "SortDirection",
    "ViewState",
    "message_list_view",
    "page_strip",
    "text_key",
    "user_list_view",
]
