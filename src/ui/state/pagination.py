"""Pagination of result table rows.

The table shows ``items_per_page`` rows at a time. The pager lists at most
``MAX_VISIBLE_PAGES`` page numbers: every page when there are few, otherwise a
window of consecutive pages around the current one that slides (rather than
shrinks) at either end.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import List, Sequence, Tuple, Union

from config.settings import Settings
from data.table import Row, Table

ELLIPSIS = "..."

PageNumber = Union[int, str]


def total_pages(row_count: int, items_per_page: int) -> int:
    return max(1, math.ceil(row_count / items_per_page))


def clamp_page(page: int, pages: int) -> int:
    return min(max(1, page), max(1, pages))


def page_numbers(current_page: int, pages: int, max_visible: int = Settings.MAX_VISIBLE_PAGES) -> List[int]:
    """Sliding window of exactly min(max_visible, pages) page numbers around current_page."""
    if pages <= max_visible:
        return list(range(1, pages + 1))
    current_page = clamp_page(current_page, pages)
    start = current_page - max_visible // 2
    start = max(1, min(start, pages - max_visible + 1))
    return list(range(start, start + max_visible))


def compact_page_numbers(current_page: int, pages: int, max_visible: int = Settings.MAX_VISIBLE_PAGES) -> List[PageNumber]:
    """Alternative pager layout anchored on the first and last page, with ELLIPSIS gaps.

    The table pager uses page_numbers; this layout is offered for callers that
    want the compact form:
    1 2 3 4 ... N near the start, 1 ... N-3 N-2 N-1 N near the end and
    1 ... c-1 c c+1 ... N in between.
    """
    if pages <= max_visible:
        return list(range(1, pages + 1))
    current_page = clamp_page(current_page, pages)
    if current_page <= 3:
        return [1, 2, 3, 4, ELLIPSIS, pages]
    if current_page >= pages - 2:
        return [1, ELLIPSIS, pages - 3, pages - 2, pages - 1, pages]
    return [1, ELLIPSIS, current_page - 1, current_page, current_page + 1, ELLIPSIS, pages]


@dataclass(frozen=True)
class PageView:
    """The slice of rows on screen plus what the pager needs to draw itself."""

    rows: List[Row]
    page_numbers: List[int]
    total_pages: int
    current_page: int
    start_index: int
    end_index: int
    row_count: int

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def show_pager(self) -> bool:
        return self.total_pages > 1

    @property
    def showing_range(self) -> Tuple[int, int]:
        """1-based inclusive row range on screen, (0, 0) for an empty table."""
        if self.row_count == 0:
            return (0, 0)
        return (self.start_index + 1, self.end_index)


@dataclass(frozen=True)
class PaginationState:
    current_page: int = 1
    items_per_page: int = field(default=Settings.ITEMS_PER_PAGE)

    def __post_init__(self):
        if self.items_per_page <= 0:
            raise ValueError(f"items_per_page must be positive, got {self.items_per_page}")

    @classmethod
    def initial(cls, items_per_page: int = Settings.ITEMS_PER_PAGE) -> "PaginationState":
        return cls(current_page=1, items_per_page=items_per_page)

    def total_pages(self, row_count: int) -> int:
        return total_pages(row_count, self.items_per_page)

    def set_page(self, page: int, row_count: int) -> "PaginationState":
        """Move to a page, clamped into [1, total_pages]."""
        return replace(self, current_page=clamp_page(page, self.total_pages(row_count)))

    def next_page(self, row_count: int) -> "PaginationState":
        return self.set_page(self.current_page + 1, row_count)

    def previous_page(self, row_count: int) -> "PaginationState":
        return self.set_page(self.current_page - 1, row_count)


def page_view(table: Union[Table, Sequence[Row]], state: PaginationState) -> PageView:
    """Rows of the current page and the page-number list for the pager."""
    rows = table.rows if isinstance(table, Table) else list(table)
    row_count = len(rows)
    pages = state.total_pages(row_count)
    current = clamp_page(state.current_page, pages)
    start = min((current - 1) * state.items_per_page, row_count)
    end = min(current * state.items_per_page, row_count)
    return PageView(
        rows=rows[start:end],
        page_numbers=page_numbers(current, pages),
        total_pages=pages,
        current_page=current,
        start_index=start,
        end_index=end,
        row_count=row_count,
    )
