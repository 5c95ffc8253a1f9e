# =============================================================================
# recordset/paginator.py - Page Window
# =============================================================================
# Slices a filtered collection into fixed-size pages.
#
# - total pages is never below 1, even for an empty collection
# - pages past the end yield an empty slice instead of raising
# - page changes outside [1, total_pages] are rejected by can_change_page
# =============================================================================

from __future__ import annotations

import math
from typing import Sequence

from recordset.types import PageView, Record


def total_pages(count: int, page_size: int) -> int:
    """
    max(1, ceil(count / page_size)).

    Raises:
        ValueError: If page_size < 1
    """
    if page_size < 1:
        raise ValueError(f"page_size must be at least 1, got {page_size}")
    return max(1, math.ceil(count / page_size))


def page_slice(records: Sequence[Record], page: int, page_size: int) -> list[Record]:
    """Items of a 1-based page; empty for pages < 1 or past the end."""
    if page < 1:
        return []
    start = (page - 1) * page_size
    return list(records[start:start + page_size])


def paginate(records: Sequence[Record], page: int, page_size: int) -> PageView:
    """
    Build the PageView for one page of an already-filtered collection.

    Example:
        view = paginate(filtered, page=2, page_size=10)
        view.items        # records 11-20
        view.total_pages  # ceil(len(filtered) / 10), at least 1
    """
    return PageView(
        items=page_slice(records, page, page_size),
        page=page,
        page_size=page_size,
        total_pages=total_pages(len(records), page_size),
        total_count=len(records),
    )


def can_change_page(target: int, pages: int) -> bool:
    """A page change is accepted only inside [1, pages]."""
    return 1 <= target <= max(1, pages)


def clamp_page(page: int, pages: int) -> int:
    """
    Page to show after the collection shrank.

    A page that no longer exists falls back to 1.
    """
    if can_change_page(page, pages):
        return page
    return 1
