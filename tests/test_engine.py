# =============================================================================
# tests/test_engine.py - Query Engine Tests
# =============================================================================
# Tests for recordset.engine: tab, search, per-field, date-range and
# month-bucket predicates, and their combination.
#
# Run with: pytest tests/test_engine.py -v
# =============================================================================

from datetime import date

import pytest

from recordset import Query, filter_records, get_kind, tab_counts
from recordset.engine import (
    matches_date_range,
    matches_filters,
    matches_months,
    matches_search,
)
from recordset.types import DateRange


def ids(rows):
    return [row["id"] for row in rows]


@pytest.fixture
def students():
    return get_kind("students")


# =============================================================================
# Tabs
# =============================================================================

class TestStudentTabs:
    """Tests for the pending / completed / refunded tab predicates."""

    def test_each_tab(self, student_rows, students):
        assert ids(filter_records(student_rows, Query(tab="pending"), students)) == ["s5", "s4"]
        assert ids(filter_records(student_rows, Query(tab="completed"), students)) == ["s3", "s1"]
        assert ids(filter_records(student_rows, Query(tab="refunded"), students)) == ["s2", "s1"]

    def test_every_record_is_in_some_tab(self, student_rows, students):
        covered = set()
        for tab in students.tabs:
            covered.update(ids(filter_records(student_rows, Query(tab=tab), students)))
        assert covered == {row["id"] for row in student_rows}

    def test_completed_and_refunded_record_overlaps(self, student_rows, students):
        """
        A record that is both completed and refunded is outside pending but
        satisfies both the completed and the refunded predicate on its own.
        """
        overlap = [row for row in student_rows if row["id"] == "s1"]

        assert filter_records(overlap, Query(tab="pending"), students) == []
        assert ids(filter_records(overlap, Query(tab="completed"), students)) == ["s1"]
        assert ids(filter_records(overlap, Query(tab="refunded"), students)) == ["s1"]

    def test_tab_counts_count_overlap_twice(self, student_rows, students):
        counts = tab_counts(student_rows, students)
        assert counts == {"pending": 2, "completed": 2, "refunded": 2}
        assert sum(counts.values()) == len(student_rows) + 1

    def test_tab_counts_apply_other_predicates(self, student_rows, students):
        counts = tab_counts(student_rows, students, Query(search="김", tab="refunded"))
        assert counts == {"pending": 1, "completed": 1, "refunded": 1}

    def test_unknown_tab_matches_nothing(self, student_rows, students):
        assert filter_records(student_rows, Query(tab="archived"), students) == []

    def test_kind_without_tabs_ignores_tab(self, contract_rows):
        kind = get_kind("contract_centers")
        assert tab_counts(contract_rows, kind) == {}
        assert len(filter_records(contract_rows, Query(tab="pending"), kind)) == 3


# =============================================================================
# Free Text
# =============================================================================

class TestSearch:
    """Tests for the free-text predicate."""

    @pytest.mark.parametrize("term", ["", "   ", None])
    def test_empty_term_matches_everything(self, student_rows, students, term):
        assert filter_records(student_rows, Query.build(search=term), students) == student_rows

    def test_case_insensitive_trimmed(self):
        record = {"name": "Seoul Center"}
        assert matches_search(record, ["name"], "  seoul ")
        assert not matches_search(record, ["name"], "busan")

    def test_matches_any_field(self, student_rows, students):
        rows = filter_records(student_rows, Query(search="강남"), students)
        assert ids(rows) == ids(student_rows)

    def test_null_fields_are_skipped(self):
        record = {"name": None, "memo": "hello"}
        assert matches_search(record, ["name", "memo"], "hell")
        assert not matches_search({"name": None}, ["name"], "x")


# =============================================================================
# Per-Field Filters
# =============================================================================

class TestFilters:
    """Tests for the per-field substring filters."""

    def test_substring_case_insensitive(self):
        record = {"payment_method": "카드결제", "classification": "Type-A"}
        assert matches_filters(record, {"payment_method": "카드", "classification": "type"})
        assert not matches_filters(record, {"payment_method": "계좌"})

    def test_empty_filter_value_is_ignored(self):
        assert matches_filters({"manager": None}, {"manager": ""})

    def test_null_field_fails_only_when_filtered(self):
        assert not matches_filters({"manager": None}, {"manager": "kim"})
        assert not matches_filters({}, {"manager": "kim"})

    def test_non_string_values_are_stringified(self):
        assert matches_filters({"is_processed": True}, {"is_processed": "true"})

    def test_all_filters_must_hold(self, contract_rows):
        kind = get_kind("contract_centers")
        query = Query.build(filters={"classification": "A", "payment_method": "카드"})
        assert ids(filter_records(contract_rows, query, kind)) == ["c3"]


# =============================================================================
# Dates
# =============================================================================

class TestDateRange:
    """Tests for the inclusive date-range predicate."""

    def test_end_day_is_inclusive(self):
        range_ = DateRange(None, date(2025, 7, 1))
        assert matches_date_range({"d": "2025-07-01T23:59:59"}, "d", range_)
        assert matches_date_range({"d": "2025-07-01T23:59:59.999"}, "d", range_)
        assert not matches_date_range({"d": "2025-07-02T00:00:00"}, "d", range_)

    def test_start_bound(self):
        range_ = DateRange(date(2025, 7, 1), None)
        assert matches_date_range({"d": "2025-07-01"}, "d", range_)
        assert not matches_date_range({"d": "2025-06-30T23:59:59"}, "d", range_)

    def test_utc_timestamps_use_korean_days(self, student_rows, students):
        # 2025-06-30T14:59:59Z is 23:59:59 on June 30th in Korea
        query = Query.build(date_from=date(2025, 7, 1), date_to=date(2025, 7, 1))
        assert ids(filter_records(student_rows, query, students)) == ["s4"]

    @pytest.mark.parametrize("value", [None, "", "미정", "2025-13-45"])
    def test_unparseable_dates_are_excluded(self, value):
        range_ = DateRange(date(2025, 1, 1), None)
        assert not matches_date_range({"d": value}, "d", range_)

    def test_no_bounds_matches_everything(self):
        assert matches_date_range({"d": "garbage"}, "d", None)
        assert matches_date_range({"d": "garbage"}, "d", DateRange())


class TestMonths:
    """Tests for the month-bucket predicate."""

    def test_month_label_matches_only_its_bucket(self):
        record = {"payment_date": "2025-07-01"}
        assert matches_months(record, "payment_date", {"25년07월"})
        assert not matches_months(record, "payment_date", {"25년06월"})
        assert not matches_months(record, "payment_date", {"24년07월"})

    def test_or_across_labels(self, contract_rows):
        kind = get_kind("contract_centers")
        query = Query.build(months=["25년06월", "25년07월"])
        assert ids(filter_records(contract_rows, query, kind)) == ["c3", "c2"]

    def test_korean_stored_dates(self, contract_rows):
        kind = get_kind("contract_centers")
        assert ids(filter_records(contract_rows, Query.build(months=["25년06월"]), kind)) == ["c2"]

    def test_empty_set_matches_everything(self):
        assert matches_months({"payment_date": "미정"}, "payment_date", set())

    def test_absent_date_never_matches(self):
        assert not matches_months({}, "payment_date", {"25년07월"})
        assert not matches_months({"payment_date": "미정"}, "payment_date", {"25년07월"})

    def test_single_label_string(self, contract_rows):
        kind = get_kind("contract_centers")
        query = Query.build(months="25년07월")
        assert query.months == frozenset({"25년07월"})
        assert ids(filter_records(contract_rows, query, kind)) == ["c3"]
        assert Query().with_months("25년06월").months == frozenset({"25년06월"})


# =============================================================================
# Query
# =============================================================================

class TestQuery:
    """Tests for the immutable Query helpers."""

    def test_is_active_ignores_tab(self):
        assert not Query(tab="pending").is_active
        assert not Query.build(search="   ").is_active
        assert Query.build(search="김").is_active
        assert Query.build(filters={"gender": "여"}).is_active
        assert Query().with_date_range(date(2025, 7, 1), None).is_active
        assert Query.build(months=["25년07월"]).is_active

    def test_toggle_month(self):
        query = Query().toggle_month("25년07월").toggle_month("25년06월")
        assert query.months == frozenset({"25년06월", "25년07월"})
        assert query.toggle_month("25년07월").months == frozenset({"25년06월"})

    def test_cleared_keeps_tab(self):
        query = Query.build(search="김", filters={"gender": "여"}, months=["25년07월"], tab="refunded")
        cleared = query.cleared()
        assert cleared == Query(tab="refunded")
        assert not cleared.is_active


# =============================================================================
# Combination
# =============================================================================

class TestFilterRecords:
    """Tests for the combined filter."""

    def test_filtering_is_idempotent(self, student_rows, students):
        query = Query.build(search="김", tab="pending", date_from=date(2025, 7, 1))
        once = filter_records(student_rows, query, students)
        assert filter_records(once, query, students) == once

    def test_preserves_input_order(self, student_rows, students):
        reversed_rows = list(reversed(student_rows))
        rows = filter_records(reversed_rows, Query(search="김"), students)
        assert ids(rows) == ["s1", "s5"]

    def test_does_not_mutate_input(self, student_rows, students):
        before = [dict(row) for row in student_rows]
        filter_records(student_rows, Query(search="김", tab="pending"), students)
        assert student_rows == before

    def test_all_predicates_combined(self, student_rows, students):
        query = Query.build(
            search="김",
            filters={"gender": "여"},
            date_from=date(2025, 7, 1),
            months=["25년07월"],
            tab="pending",
        )
        assert ids(filter_records(student_rows, query, students)) == ["s5"]
