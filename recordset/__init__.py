# =============================================================================
# recordset/ - Client-Side List Engine
# =============================================================================
# Filtering, tab partitioning and pagination for the admin list screens.
#
# Data flows one way:
#   rows (newest first) -> filter_records -> paginate -> PageView
#
# ListViewState wraps the flow with the per-screen query/page/selection state.
# Nothing in this package performs I/O.
#
# Usage:
#   from recordset import ListViewState, Query
#   state = ListViewState("students", rows)
#   state.set_query(Query.build(search="김", tab="pending"))
#   page = state.get_page_view()
# =============================================================================

from recordset.types import DateRange, PageView, Query, Record
from recordset.registry import (
    KIND_REGISTRY,
    RecordKind,
    UnknownKindError,
    get_kind,
    list_kinds,
    register_kind,
)
from recordset.engine import (
    filter_records,
    matches_date_range,
    matches_filters,
    matches_months,
    matches_search,
    matches_tab,
    tab_counts,
)
from recordset.paginator import can_change_page, clamp_page, paginate, total_pages
from recordset.view_state import ListViewState

# Import kinds to trigger registration
from recordset import kinds  # noqa: F401

__all__ = [
    # Types
    "DateRange",
    "PageView",
    "Query",
    "Record",
    # Registry
    "KIND_REGISTRY",
    "RecordKind",
    "UnknownKindError",
    "get_kind",
    "list_kinds",
    "register_kind",
    # Engine
    "filter_records",
    "matches_date_range",
    "matches_filters",
    "matches_months",
    "matches_search",
    "matches_tab",
    "tab_counts",
    # Paginator
    "can_change_page",
    "clamp_page",
    "paginate",
    "total_pages",
    # State
    "ListViewState",
]
