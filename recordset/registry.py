# =============================================================================
# recordset/registry.py - Record Kind Registry
# =============================================================================
# Each admin list screen works on one "record kind". A kind declares which
# fields the free-text search covers, which fields accept per-field filters,
# which field the date range and month bucket apply to, and its status tabs.
#
# Kinds are registered once at import time (see recordset/kinds.py) and looked
# up by name from the API layer.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from recordset.types import Record

TabPredicate = Callable[[Record], bool]


class UnknownKindError(KeyError):
    """Raised when a kind name is not registered."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown record kind: {self.name}"


@dataclass
class RecordKind:
    """
    Declaration of one record kind.

    Attributes:
        name: Registry key and URL segment ("students")
        table: Supabase table name
        label: Korean display name used in audit descriptions
        searchable_fields: Fields the free-text term is matched against
        filterable_fields: Fields accepted in Query.filters
        date_field: Field the date range applies to (None = no date filter)
        month_field: Field the month bucket applies to (defaults to date_field)
        tabs: Ordered tab name -> predicate (empty = kind has no tabs)
        default_tab: Tab used when the client does not pick one
        title_field: Field that names a record in audit descriptions
        min_role_level: Most junior role level allowed to read the kind
            (None = any admin)
    """
    name: str
    table: str
    label: str
    searchable_fields: tuple[str, ...]
    filterable_fields: tuple[str, ...] = ()
    date_field: str | None = "created_at"
    month_field: str | None = None
    tabs: dict[str, TabPredicate] = field(default_factory=dict)
    default_tab: str | None = None
    title_field: str | None = None
    order_by: str = "created_at"
    min_role_level: int | None = None

    @property
    def bucket_field(self) -> str | None:
        return self.month_field or self.date_field

    @property
    def has_tabs(self) -> bool:
        return bool(self.tabs)

    def title_of(self, record: Record) -> str:
        """Human name of a record for log lines, falling back to its ID."""
        if self.title_field and record.get(self.title_field):
            return str(record[self.title_field])
        return f"ID {record.get('id')}"


# Global registry: name -> RecordKind
KIND_REGISTRY: dict[str, RecordKind] = {}


def register_kind(kind: RecordKind) -> RecordKind:
    """
    Register a record kind under its name.

    Raises:
        ValueError: If the name is already registered or the tab default is
            not one of the kind's tabs
    """
    if kind.name in KIND_REGISTRY:
        raise ValueError(f"Record kind '{kind.name}' is already registered")
    if kind.default_tab is not None and kind.default_tab not in kind.tabs:
        raise ValueError(f"Default tab '{kind.default_tab}' is not a tab of '{kind.name}'")

    KIND_REGISTRY[kind.name] = kind
    return kind


def get_kind(name: str) -> RecordKind:
    """
    Get a registered kind by name.

    Raises:
        UnknownKindError: If no kind has that name
    """
    try:
        return KIND_REGISTRY[name]
    except KeyError:
        raise UnknownKindError(name) from None


def list_kinds() -> list[str]:
    """List all registered kind names."""
    return list(KIND_REGISTRY.keys())
