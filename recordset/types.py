# =============================================================================
# recordset/types.py - Core Types
# =============================================================================
# Defines the values that flow through the list engine:
# - Record: one row as returned by the data store
# - DateRange / Query: immutable filter description
# - PageView: one page of a filtered collection plus navigation metadata
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Mapping

Record = dict[str, Any]


# =============================================================================
# Query
# =============================================================================

@dataclass(frozen=True)
class DateRange:
    """
    Inclusive calendar-date bounds on a record's date field.

    Either bound may be None. The end bound covers the whole end day.
    """
    start: date | None = None
    end: date | None = None

    @property
    def is_empty(self) -> bool:
        return self.start is None and self.end is None

    def to_dict(self) -> dict:
        return {
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
        }


def _clean_filters(filters: Mapping[str, Any] | None) -> tuple[tuple[str, str], ...]:
    if not filters:
        return ()
    return tuple(sorted(
        (name, str(value))
        for name, value in filters.items()
        if value is not None and str(value) != ""
    ))


def _month_set(months: Any) -> frozenset[str]:
    # A single label is one month, not a sequence of characters
    if isinstance(months, str):
        months = (months,)
    return frozenset(label for label in months or () if label)


@dataclass(frozen=True)
class Query:
    """
    Everything a list screen filters on.

    Immutable: every change produces a new Query, which is what lets the
    view state detect "query changed" and reset the page.

    Attributes:
        search: Free-text term matched against the kind's searchable fields
        filters: (field, value) pairs, substring-matched case-insensitively
        date_range: Optional bounds on the kind's date field
        months: Accepted "YY년MM월" labels (OR across the set)
        tab: Active status tab, for kinds that have tabs

    Example:
        query = Query.build(
            search="김",
            filters={"gender": "여"},
            date_from=date(2025, 7, 1),
            tab="pending",
        )
    """
    search: str = ""
    filters: tuple[tuple[str, str], ...] = ()
    date_range: DateRange | None = None
    months: frozenset[str] = field(default_factory=frozenset)
    tab: str | None = None

    @classmethod
    def build(
        cls,
        search: str | None = "",
        filters: Mapping[str, Any] | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        months: Any = None,
        tab: str | None = None,
    ) -> "Query":
        date_range = DateRange(date_from, date_to)
        return cls(
            search=search or "",
            filters=_clean_filters(filters),
            date_range=None if date_range.is_empty else date_range,
            months=_month_set(months),
            tab=tab or None,
        )

    @property
    def filter_map(self) -> dict[str, str]:
        return dict(self.filters)

    @property
    def is_active(self) -> bool:
        """True when anything other than the tab narrows the result."""
        return bool(
            self.search.strip()
            or self.filters
            or (self.date_range and not self.date_range.is_empty)
            or self.months
        )

    def with_search(self, search: str) -> "Query":
        return replace(self, search=search or "")

    def with_filter(self, name: str, value: Any) -> "Query":
        updated = self.filter_map
        updated[name] = value
        return replace(self, filters=_clean_filters(updated))

    def with_filters(self, filters: Mapping[str, Any]) -> "Query":
        return replace(self, filters=_clean_filters(filters))

    def with_date_range(self, start: date | None, end: date | None) -> "Query":
        date_range = DateRange(start, end)
        return replace(self, date_range=None if date_range.is_empty else date_range)

    def with_months(self, months: Any) -> "Query":
        return replace(self, months=_month_set(months))

    def toggle_month(self, label: str) -> "Query":
        """Checkbox behaviour of the month filter: add if absent, remove if present."""
        return replace(self, months=self.months ^ {label})

    def with_tab(self, tab: str | None) -> "Query":
        return replace(self, tab=tab or None)

    def cleared(self) -> "Query":
        """Reset every filter but keep the active tab."""
        return Query(tab=self.tab)

    def to_dict(self) -> dict:
        return {
            "search": self.search,
            "filters": self.filter_map,
            "date_range": self.date_range.to_dict() if self.date_range else None,
            "months": sorted(self.months),
            "tab": self.tab,
        }


# =============================================================================
# Page View
# =============================================================================

@dataclass
class PageView:
    """
    One page of a filtered collection.

    total_count is the size of the filtered collection, not the raw one.
    """
    items: list[Record]
    page: int
    page_size: int
    total_pages: int
    total_count: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def first_index(self) -> int:
        """1-based position of the first item on this page ("총 25명 중 11-20")."""
        if not self.items:
            return 0
        return (self.page - 1) * self.page_size + 1

    @property
    def last_index(self) -> int:
        if not self.items:
            return 0
        return self.first_index + len(self.items) - 1

    def to_dict(self) -> dict:
        return {
            "items": self.items,
            "page": self.page,
            "page_size": self.page_size,
            "total_pages": self.total_pages,
            "total_count": self.total_count,
        }
