"""
Generic list view engine.

A ListView is configured once per collection type with a searchable-text
projection, a categorical projection and a table of sort keys. Everything
else is a pure function of (collection, ViewState):

    filter -> stable sort -> page slice

ViewState is immutable. Its transition helpers encode the paging rules:
filter and page-size changes go back to page 1, sort changes keep the page.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Generic, Literal, TypeVar

T = TypeVar("T")

ALL = "all"
PAGE_STRIP_WINDOW = 5

PageSize = int | Literal["all"]


class ListViewError(ValueError):
    """Raised for view states the engine cannot apply."""

    pass


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def toggled(self) -> SortDirection:
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


@dataclass(frozen=True, slots=True)
class ViewState:
    filter_text: str = ""
    category_filter: str = ALL
    sort_column: str | None = None
    sort_direction: SortDirection = SortDirection.ASC
    page_size: PageSize = 10
    current_page: int = 1

    def with_filter_text(self, filter_text: str) -> ViewState:
        return replace(self, filter_text=filter_text, current_page=1)

    def with_category(self, category_filter: str) -> ViewState:
        return replace(self, category_filter=category_filter, current_page=1)

    def with_page_size(self, page_size: PageSize) -> ViewState:
        return replace(self, page_size=page_size, current_page=1)

    def with_sort(self, column: str) -> ViewState:
        """Same column flips direction, a new column starts ascending."""
        if column == self.sort_column:
            return replace(self, sort_direction=self.sort_direction.toggled())
        return replace(self, sort_column=column, sort_direction=SortDirection.ASC)


@dataclass(frozen=True, slots=True)
class PageInfo:
    total_items: int
    total_pages: int
    current_page: int
    page_size: PageSize
    start_index: int
    end_index: int
    page_strip: list[int | None] = field(default_factory=list)


@dataclass(frozen=True)
class ListPage(Generic[T]):
    rows: list[T]
    page_info: PageInfo


def text_key(projection: Callable[[Any], str]) -> Callable[[Any], str]:
    """Sort key comparing a text projection case-insensitively."""
    return lambda item: projection(item).lower()


def page_strip(current_page: int, total_pages: int) -> list[int | None]:
    """
    Page numbers to display, None marking an ellipsis.

    Up to five numbers around the current page; the first and last pages are
    forced in (with an ellipsis when there is a gap) when the window does not
    reach them.
    """
    if total_pages <= 0:
        return []
    if total_pages <= PAGE_STRIP_WINDOW:
        return list(range(1, total_pages + 1))

    if current_page <= 3:
        start, end = 1, PAGE_STRIP_WINDOW
    elif current_page >= total_pages - 2:
        start, end = total_pages - PAGE_STRIP_WINDOW + 1, total_pages
    else:
        start, end = current_page - 2, current_page + 2

    strip: list[int | None] = []
    if start > 1:
        strip.append(1)
        if start > 2:
            strip.append(None)
    strip.extend(range(start, end + 1))
    if end < total_pages:
        if end < total_pages - 1:
            strip.append(None)
        strip.append(total_pages)
    return strip


class ListView(Generic[T]):
    def __init__(
        self,
        name: str,
        text: Callable[[T], str],
        category: Callable[[T], str],
        sort_keys: Mapping[str, Callable[[T], Any]],
        default_state: ViewState | None = None,
    ):
        self.name = name
        self.text = text
        self.category = category
        self.sort_keys = dict(sort_keys)
        self._default_state = default_state or ViewState()

    @property
    def sort_columns(self) -> list[str]:
        return list(self.sort_keys)

    def default_state(self) -> ViewState:
        return self._default_state

    def validate(self, state: ViewState) -> None:
        if state.sort_column is not None and state.sort_column not in self.sort_keys:
            raise ListViewError(
                f"Unknown sort column '{state.sort_column}' for {self.name}. "
                f"Expected one of: {', '.join(self.sort_keys)}"
            )
        if state.page_size != ALL and (
            not isinstance(state.page_size, int) or state.page_size < 1
        ):
            raise ListViewError(f"Invalid page size: {state.page_size!r}")
        if state.current_page < 1:
            raise ListViewError(f"Invalid page: {state.current_page}")

    def filter(self, collection: Sequence[T], state: ViewState) -> list[T]:
        needle = state.filter_text.lower()
        return [
            item
            for item in collection
            if needle in self.text(item).lower()
            and (state.category_filter == ALL or self.category(item) == state.category_filter)
        ]

    def sort(self, items: Sequence[T], state: ViewState) -> list[T]:
        if state.sort_column is None:
            return list(items)
        # sorted() is stable in both directions, ties keep their input order
        return sorted(
            items,
            key=self.sort_keys[state.sort_column],
            reverse=state.sort_direction is SortDirection.DESC,
        )

    def total_pages(self, total_items: int, page_size: PageSize) -> int:
        if page_size == ALL:
            return 1
        return math.ceil(total_items / page_size)

    def paginate(self, items: Sequence[T], state: ViewState) -> ListPage[T]:
        total_items = len(items)
        total_pages = self.total_pages(total_items, state.page_size)

        if state.page_size == ALL:
            start, end = 0, total_items
        else:
            start = (state.current_page - 1) * state.page_size
            end = min(state.current_page * state.page_size, total_items)

        rows = list(items[start:end]) if start < end else []
        return ListPage(
            rows=rows,
            page_info=PageInfo(
                total_items=total_items,
                total_pages=total_pages,
                current_page=state.current_page,
                page_size=state.page_size,
                start_index=start + 1 if rows else 0,
                end_index=start + len(rows) if rows else 0,
                page_strip=page_strip(state.current_page, total_pages),
            ),
        )

    def apply(self, collection: Sequence[T], state: ViewState) -> ListPage[T]:
        self.validate(state)
        return self.paginate(self.sort(self.filter(collection, state), state), state)

    def navigate(self, collection: Sequence[T], state: ViewState, page: int) -> ViewState:
        """Move to ``page``; requests outside [1, total_pages] leave the state as is."""
        total_items = len(self.filter(collection, state))
        total_pages = self.total_pages(total_items, state.page_size)
        if page < 1 or page > total_pages:
            return state
        return replace(state, current_page=page)
