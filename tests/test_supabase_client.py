# =============================================================================
# tests/test_supabase_client.py - Supabase Wrapper Tests
# =============================================================================
# The supabase client itself is replaced by a MagicMock query builder that
# returns itself from every chained call.
#
# Run with: pytest tests/test_supabase_client.py -v
# =============================================================================

from unittest.mock import MagicMock, call, patch

import pytest

from lib.supabase_client import SupabaseClient, SupabaseClientError


def make_client(*batches):
    """Client whose query builder returns the given batches, one per execute()."""
    query = MagicMock()
    query.select.return_value = query
    query.order.return_value = query
    query.range.return_value = query
    query.execute.side_effect = [MagicMock(data=batch) for batch in batches]

    client = MagicMock()
    client.table.return_value = query
    return client, query


class TestFetchAll:
    """Tests for SupabaseClient.fetch_all()."""

    def test_reads_in_batches_until_short_batch(self):
        rows = [{"id": f"r{n}"} for n in range(5)]
        client, query = make_client(rows[:2], rows[2:4], rows[4:])

        with patch.object(SupabaseClient, "get_client", return_value=client), \
                patch.object(SupabaseClient, "FETCH_PAGE_SIZE", 2):
            result = SupabaseClient.fetch_all("student_applications")

        assert result == rows
        assert query.range.call_args_list == [call(0, 1), call(2, 3), call(4, 5)]

    def test_exact_multiple_needs_one_empty_batch(self):
        client, query = make_client([{"id": "a"}, {"id": "b"}], [])

        with patch.object(SupabaseClient, "get_client", return_value=client), \
                patch.object(SupabaseClient, "FETCH_PAGE_SIZE", 2):
            result = SupabaseClient.fetch_all("consultations")

        assert [row["id"] for row in result] == ["a", "b"]
        assert query.execute.call_count == 2

    def test_id_breaks_ties(self):
        client, query = make_client([])

        with patch.object(SupabaseClient, "get_client", return_value=client):
            assert SupabaseClient.fetch_all("consultations") == []

        assert query.order.call_args_list == [
            call("created_at", desc=True),
            call("id", desc=True),
        ]

    def test_failure_is_wrapped(self):
        client, query = make_client()
        query.execute.side_effect = RuntimeError("connection reset")

        with patch.object(SupabaseClient, "get_client", return_value=client):
            with pytest.raises(SupabaseClientError) as exc_info:
                SupabaseClient.fetch_all("consultations")

        assert exc_info.value.code == "FETCH_FAILED"
        assert exc_info.value.details == {"table": "consultations"}
