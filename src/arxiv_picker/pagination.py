"""Client-side pagination over an in-memory result set."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from arxiv_picker.models import PAGE_SIZE, PaperRecord
from arxiv_picker.selection import is_page_fully_selected


def total_pages(count: int, page_size: int = PAGE_SIZE) -> int:
    """Number of pages needed for ``count`` records (0 when empty)."""
    if count <= 0:
        return 0
    return math.ceil(count / page_size)


def clamp_page(page: int, count: int, page_size: int = PAGE_SIZE) -> int:
    """Clamp a 1-based page number into [1, max(1, total_pages)]."""
    return max(1, min(page, max(1, total_pages(count, page_size))))


def page_bounds(page: int, count: int, page_size: int = PAGE_SIZE) -> tuple[int, int]:
    """Return the half-open (start, end) slice indices for a page."""
    start = (page - 1) * page_size
    end = min(page * page_size, count)
    return start, max(start, end)


def page_slice(
    papers: Sequence[PaperRecord], page: int, page_size: int = PAGE_SIZE
) -> list[PaperRecord]:
    start, end = page_bounds(page, len(papers), page_size)
    return list(papers[start:end])


def step_page(page: int, direction: int, count: int, page_size: int = PAGE_SIZE) -> int:
    """Move one page back (direction < 0) or forward, never wrapping."""
    step = -1 if direction < 0 else 1
    return clamp_page(page + step, count, page_size)


@dataclass(slots=True)
class PageView:
    """Everything the list view needs to render one page."""

    records: list[PaperRecord]
    page: int
    total_pages: int
    has_previous: bool
    has_next: bool
    all_selected: bool

    @property
    def label(self) -> str:
        return f"Page {self.page} of {max(1, self.total_pages)}"

    @property
    def ids(self) -> list[str]:
        return [record.id for record in self.records]


def build_page_view(
    papers: Sequence[PaperRecord],
    page: int,
    selected_ids: set[str],
    page_size: int = PAGE_SIZE,
) -> PageView:
    """Slice the result set for ``page`` and derive navigation state.

    The page number is clamped first, so an out-of-range request renders
    the nearest valid page instead of an empty one.
    """
    count = len(papers)
    page = clamp_page(page, count, page_size)
    pages = total_pages(count, page_size)
    records = page_slice(papers, page, page_size)
    return PageView(
        records=records,
        page=page,
        total_pages=pages,
        has_previous=page > 1,
        has_next=page < pages,
        all_selected=is_page_fully_selected(selected_ids, [r.id for r in records]),
    )


__all__ = [
    "PageView",
    "build_page_view",
    "clamp_page",
    "page_bounds",
    "page_slice",
    "step_page",
    "total_pages",
]
