# =============================================================================
# recordset/view_state.py - List Screen State
# =============================================================================
# One ListViewState per admin list screen. It owns the loaded records, the
# active Query, the current page and the selection set, and changes them only
# through the operations below:
#
#   set_query                 page -> 1, selection purged to the filtered set
#   set_page                  no-op outside [1, total_pages]
#   toggle_select             add/remove one id
#   toggle_select_all_on_page union with / difference from the current page
#   get_page_view             items + total_pages + total_count
#
# Reconciliation after remote writes:
#   apply_insert / apply_update / apply_bulk_update / apply_delete mirror an
#   accepted write locally; replace_records installs a full refetch.
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence

from lib.utils import normalize_id, normalize_ids
from recordset.engine import filter_records, tab_counts
from recordset.paginator import can_change_page, clamp_page, paginate, total_pages
from recordset.registry import RecordKind, get_kind
from recordset.types import PageView, Query, Record

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10


class ListViewState:
    """
    Explicit, serializable state of one list screen.

    Example:
        state = ListViewState("students", rows)
        state.set_query(Query(search="김", tab="pending"))
        state.toggle_select_all_on_page()
        view = state.get_page_view()
    """

    def __init__(
        self,
        kind: RecordKind | str,
        records: Sequence[Record] = (),
        page_size: int = DEFAULT_PAGE_SIZE,
        query: Query | None = None,
    ):
        if page_size < 1:
            raise ValueError(f"page_size must be at least 1, got {page_size}")

        self.kind = get_kind(kind) if isinstance(kind, str) else kind
        self.records: list[Record] = list(records)
        self.page_size = page_size
        self.query = query or Query(tab=self.kind.default_tab)
        self.page = 1
        self.selected: set[str] = set()

    # -------------------------------------------------------------------------
    # Derived views
    # -------------------------------------------------------------------------

    @property
    def filtered(self) -> list[Record]:
        return filter_records(self.records, self.query, self.kind)

    @property
    def total_pages(self) -> int:
        return total_pages(len(self.filtered), self.page_size)

    def record_ids(self) -> list[str]:
        return [normalize_id(record["id"]) for record in self.records if "id" in record]

    def get_page_view(self) -> PageView:
        """Current page of the filtered collection."""
        return paginate(self.filtered, self.page, self.page_size)

    def tab_counts(self) -> dict[str, int]:
        """Badge counts per tab under the current non-tab filters."""
        return tab_counts(self.records, self.kind, self.query)

    def current_page_ids(self) -> list[str]:
        return [normalize_id(record["id"]) for record in self.get_page_view().items]

    @property
    def all_on_page_selected(self) -> bool:
        ids = self.current_page_ids()
        return bool(ids) and all(record_id in self.selected for record_id in ids)

    def selected_ids(self) -> list[str]:
        """Selected IDs in record order."""
        return [record_id for record_id in self.record_ids() if record_id in self.selected]

    def selected_records(self) -> list[Record]:
        return [
            record for record in self.records
            if normalize_id(record.get("id", "")) in self.selected
        ]

    # -------------------------------------------------------------------------
    # View binding operations
    # -------------------------------------------------------------------------

    def set_query(self, query: Query) -> None:
        """
        Install a new query.

        The page resets to 1 unconditionally, before anything is recomputed,
        and selected IDs that drop out of the filtered set are released.
        """
        self.page = 1
        self.query = query
        visible = {normalize_id(record["id"]) for record in self.filtered}
        self.selected &= visible

    def set_page(self, page: int) -> bool:
        """
        Move to another page.

        Returns:
            False (and changes nothing) when the page is out of range
        """
        if not can_change_page(page, self.total_pages):
            logger.debug(f"Rejected page change to {page} (total {self.total_pages})")
            return False
        self.page = page
        return True

    def toggle_select(self, record_id: Any) -> bool:
        """
        Flip one record's checkbox.

        IDs that are not in the loaded collection are ignored.

        Returns:
            Whether the record is selected afterwards
        """
        id_str = normalize_id(record_id)
        if id_str not in set(self.record_ids()):
            return False

        if id_str in self.selected:
            self.selected.discard(id_str)
            return False
        self.selected.add(id_str)
        return True

    def toggle_select_all_on_page(self) -> None:
        """
        Header checkbox: scoped to the rows visible on the current page.

        If every row on the page is already selected, exactly those rows are
        removed; otherwise they are all added. Selections on other pages are
        untouched either way.
        """
        page_ids = self.current_page_ids()
        if not page_ids:
            return

        if all(record_id in self.selected for record_id in page_ids):
            self.selected.difference_update(page_ids)
        else:
            self.selected.update(page_ids)

    def clear_selection(self) -> None:
        self.selected.clear()

    # -------------------------------------------------------------------------
    # Reconciliation
    # -------------------------------------------------------------------------

    def apply_insert(self, record: Record) -> None:
        """Merge a freshly inserted row; newest rows sort first."""
        self.records.insert(0, record)

    def apply_update(self, record_id: Any, patch: dict[str, Any]) -> bool:
        """
        Mirror an accepted update of one row.

        Returns:
            False if the row is not loaded (caller should refetch)
        """
        id_str = normalize_id(record_id)
        for index, record in enumerate(self.records):
            if normalize_id(record.get("id", "")) == id_str:
                self.records[index] = {**record, **patch}
                return True
        return False

    def apply_bulk_update(self, record_ids: Iterable[Any], patch: dict[str, Any]) -> int:
        """Mirror the same accepted patch on several rows; returns rows patched."""
        ids = set(normalize_ids(record_ids))
        patched = 0
        for index, record in enumerate(self.records):
            if normalize_id(record.get("id", "")) in ids:
                self.records[index] = {**record, **patch}
                patched += 1
        self._clamp_page()
        return patched

    def apply_delete(self, record_ids: Iterable[Any]) -> int:
        """
        Optimistic removal after a successful delete call.

        Deleted IDs leave the selection set and the page is clamped.

        Returns:
            Number of rows removed
        """
        ids = set(normalize_ids(record_ids))
        before = len(self.records)
        self.records = [
            record for record in self.records
            if normalize_id(record.get("id", "")) not in ids
        ]
        self.selected -= ids
        self._clamp_page()
        return before - len(self.records)

    def replace_records(self, records: Sequence[Record]) -> None:
        """
        Install a full refetch (the recovery path after a failed write).

        Selection is purged to IDs still present; page is clamped.
        """
        self.records = list(records)
        self.selected &= set(self.record_ids())
        self._clamp_page()

    def _clamp_page(self) -> None:
        self.page = clamp_page(self.page, self.total_pages)

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def snapshot(self) -> dict[str, Any]:
        """Serializable state, without the records themselves."""
        return {
            "kind": self.kind.name,
            "query": self.query.to_dict(),
            "page": self.page,
            "page_size": self.page_size,
            "selected": self.selected_ids(),
            "record_count": len(self.records),
        }
