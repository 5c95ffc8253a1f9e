# =============================================================================
# recordset/engine.py - Query Engine
# =============================================================================
# Applies a Query to an in-memory collection of records.
#
# A record is kept when ALL predicates hold:
# - tab:         the kind's tab predicate for query.tab
# - search:      any searchable field contains the trimmed term
# - filters:     every non-empty per-field filter is a substring of the field
# - date range:  date field within [start 00:00, end 23:59:59.999]
# - months:      date field's "YY년MM월" label is one of the accepted labels
#
# Filtering is pure and order-preserving: the input order (created_at
# descending, as fetched) is never changed. Malformed stored values exclude
# the record; nothing here raises on bad data.
# =============================================================================

from __future__ import annotations

from datetime import datetime, time
from typing import Iterable, Mapping, Sequence

from lib.formatting import month_label, parse_datetime
from recordset.registry import RecordKind
from recordset.types import DateRange, Query, Record

END_OF_DAY = time(23, 59, 59, 999000)


# =============================================================================
# Predicates
# =============================================================================

def matches_tab(record: Record, kind: RecordKind, tab: str | None) -> bool:
    """
    Tab predicate. Kinds without tabs, or a query without a tab, match all.

    An unknown tab name matches nothing; the API layer rejects it earlier.
    """
    if tab is None or not kind.has_tabs:
        return True
    predicate = kind.tabs.get(tab)
    if predicate is None:
        return False
    return predicate(record)


def matches_search(record: Record, fields: Iterable[str], term: str | None) -> bool:
    """
    Case-insensitive substring match of the term against any field.

    Empty or whitespace-only terms match everything; null fields are skipped.
    """
    needle = (term or "").strip().lower()
    if not needle:
        return True

    for name in fields:
        value = record.get(name)
        if value is None:
            continue
        if needle in str(value).lower():
            return True
    return False


def matches_filters(record: Record, filters: Mapping[str, str]) -> bool:
    """
    Every non-empty filter value must be a substring of the field value.

    A missing or null field fails only when a filter was given for it.
    """
    for name, expected in filters.items():
        if not expected:
            continue
        value = record.get(name)
        if value is None:
            return False
        if str(expected).lower() not in str(value).lower():
            return False
    return True


def matches_date_range(
    record: Record,
    field_name: str | None,
    date_range: DateRange | None,
) -> bool:
    """
    Inclusive date-range check on one field.

    The end bound covers the whole end day (through 23:59:59.999).
    Records whose date cannot be parsed are excluded while a bound is active.
    """
    if date_range is None or date_range.is_empty or field_name is None:
        return True

    stamp = parse_datetime(record.get(field_name))
    if stamp is None:
        return False

    if date_range.start is not None and stamp < datetime.combine(date_range.start, time.min):
        return False
    if date_range.end is not None and stamp > datetime.combine(date_range.end, END_OF_DAY):
        return False
    return True


def matches_months(
    record: Record,
    field_name: str | None,
    months: Iterable[str],
) -> bool:
    """
    Month-bucket check: the field's "YY년MM월" label is in the accepted set.

    An empty set matches everything; absent or unparseable dates never match.
    """
    accepted = set(months)
    if not accepted:
        return True
    if field_name is None:
        return False

    label = month_label(record.get(field_name))
    return label is not None and label in accepted


def matches_query(record: Record, query: Query, kind: RecordKind) -> bool:
    """True when a single record satisfies every predicate of the query."""
    return (
        matches_tab(record, kind, query.tab)
        and matches_search(record, kind.searchable_fields, query.search)
        and matches_filters(record, query.filter_map)
        and matches_date_range(record, kind.date_field, query.date_range)
        and matches_months(record, kind.bucket_field, query.months)
    )


# =============================================================================
# Collection Operations
# =============================================================================

def filter_records(
    records: Sequence[Record],
    query: Query,
    kind: RecordKind,
) -> list[Record]:
    """
    Return the records matching the query, in their original order.

    Example:
        pending = filter_records(rows, Query(tab="pending"), get_kind("students"))
    """
    return [record for record in records if matches_query(record, query, kind)]


def tab_counts(
    records: Sequence[Record],
    kind: RecordKind,
    query: Query | None = None,
) -> dict[str, int]:
    """
    Number of records per tab (tab badges).

    Each tab is counted independently, so overlapping records count in every
    tab whose predicate they satisfy. When a query is given, its non-tab
    predicates apply first.
    """
    if not kind.has_tabs:
        return {}

    base = records
    if query is not None:
        base = filter_records(records, query.with_tab(None), kind)

    return {
        name: sum(1 for record in base if predicate(record))
        for name, predicate in kind.tabs.items()
    }
