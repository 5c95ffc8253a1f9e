# =============================================================================
# tests/test_view_state.py - List Screen State Tests
# =============================================================================
# Tests for ListViewState: page reset on query change, selection rules and
# reconciliation after writes.
#
# Run with: pytest tests/test_view_state.py -v
# =============================================================================

import pytest

from recordset import ListViewState, Query
from recordset.registry import UnknownKindError


@pytest.fixture
def state(numbered_students):
    return ListViewState("students", numbered_students, page_size=6)


class TestQueryAndPage:
    """Tests for set_query() and set_page()."""

    def test_defaults_to_pending_tab(self, state):
        assert state.query.tab == "pending"
        assert state.page == 1

    def test_unknown_kind(self):
        with pytest.raises(UnknownKindError):
            ListViewState("nope")

    def test_set_page_in_range(self, state):
        assert state.set_page(2)
        assert state.page == 2
        assert [r["id"] for r in state.get_page_view().items] == ["s6", "s5", "s4", "s3", "s2", "s1"]

    @pytest.mark.parametrize("target", [0, 3, -1])
    def test_set_page_out_of_range_is_noop(self, state, target):
        state.set_page(2)
        assert not state.set_page(target)
        assert state.page == 2

    def test_query_change_resets_page(self, state):
        state.set_page(2)
        state.set_query(state.query.with_search("학생1"))
        assert state.page == 1

    def test_query_change_resets_page_even_when_result_is_same(self, state):
        state.set_page(2)
        state.set_query(state.query.with_search("학생"))
        assert state.page == 1
        assert state.total_pages == 2

    def test_page_view_counts_filtered_records(self, state):
        state.set_query(Query(search="서울", tab="pending"))
        view = state.get_page_view()
        assert view.total_count == 4
        assert view.total_pages == 1


class TestSelection:
    """Tests for selection operations."""

    def test_toggle_select(self, state):
        assert state.toggle_select("s3")
        assert state.selected == {"s3"}
        assert not state.toggle_select("s3")
        assert state.selected == set()

    def test_toggle_unknown_id_is_ignored(self, state):
        assert not state.toggle_select("missing")
        assert state.selected == set()

    def test_select_all_is_scoped_to_current_page(self, state):
        state.toggle_select_all_on_page()
        assert state.selected_ids() == ["s12", "s11", "s10", "s9", "s8", "s7"]
        assert state.all_on_page_selected

        state.set_page(2)
        assert not state.all_on_page_selected

    def test_select_all_unions_when_partially_selected(self, state):
        state.toggle_select("s10")
        state.toggle_select_all_on_page()
        assert len(state.selected) == 6

    def test_select_all_removes_only_current_page(self, state):
        state.toggle_select_all_on_page()
        state.set_page(2)
        state.toggle_select("s1")
        state.set_page(1)

        state.toggle_select_all_on_page()
        assert state.selected == {"s1"}

    def test_query_change_purges_hidden_selection(self, state):
        """12 records, page size 6: select page 1, then shrink to 4 records."""
        state.toggle_select_all_on_page()
        state.set_query(Query(search="서울", tab="pending"))

        assert state.get_page_view().total_count == 4
        assert state.selected_ids() == ["s12", "s9"]

    def test_clear_selection(self, state):
        state.toggle_select_all_on_page()
        state.clear_selection()
        assert state.selected == set()

    def test_selected_records_in_record_order(self, state):
        state.toggle_select("s3")
        state.toggle_select("s10")
        assert [record["id"] for record in state.selected_records()] == ["s10", "s3"]


class TestReconciliation:
    """Tests for applying accepted writes to local state."""

    def test_apply_insert_prepends(self, state):
        state.apply_insert({"id": "s13", "student_name": "새학생", "payment_status": "pending"})
        assert state.records[0]["id"] == "s13"
        assert state.get_page_view().items[0]["id"] == "s13"

    def test_apply_update_merges(self, state):
        assert state.apply_update("s12", {"practice_manager": "홍길동"})
        assert state.records[0]["practice_manager"] == "홍길동"
        assert state.records[0]["student_name"] == "학생12"

    def test_apply_update_unknown_row(self, state):
        assert not state.apply_update("missing", {"x": 1})

    def test_apply_bulk_update_moves_rows_out_of_tab(self, state):
        state.set_page(2)
        patched = state.apply_bulk_update(
            ["s1", "s2", "s3", "s4", "s5", "s6", "s7"],
            {"practice_completion_status": "completed"},
        )
        assert patched == 7
        assert state.total_pages == 1
        assert state.page == 1

    def test_apply_delete_purges_selection_and_clamps(self, state):
        state.set_page(2)
        state.toggle_select("s1")
        state.toggle_select("s12")

        removed = state.apply_delete(["s1", "s2", "s3", "s4", "s5", "s6"])

        assert removed == 6
        assert state.selected == {"s12"}
        assert state.page == 1
        assert state.total_pages == 1

    def test_replace_records_keeps_surviving_selection(self, state, numbered_students):
        state.toggle_select("s12")
        state.toggle_select("s11")
        state.replace_records(numbered_students[1:])
        assert state.selected == {"s11"}

    def test_snapshot(self, state):
        state.toggle_select("s9")
        snap = state.snapshot()
        assert snap["kind"] == "students"
        assert snap["page"] == 1
        assert snap["selected"] == ["s9"]
        assert snap["record_count"] == 12
        assert snap["query"]["tab"] == "pending"
