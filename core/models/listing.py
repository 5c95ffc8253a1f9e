# =============================================================================
# core/models/listing.py - List Endpoint Schemas
# =============================================================================
# Response shape shared by every GET /admin/{kind} endpoint: one page of the
# filtered records plus the numbers the screen header needs.
# =============================================================================

from typing import Any

from pydantic import BaseModel, Field


class RecordList(BaseModel):
    """
    One page of a filtered record list.

    Example:
        {
            "kind": "students",
            "tab": "pending",
            "items": [...],
            "page": 1,
            "page_size": 10,
            "total_pages": 3,
            "total_count": 27,
            "first_index": 1,
            "last_index": 10,
            "tab_counts": {"pending": 20, "completed": 5, "refunded": 2}
        }
    """

    kind: str = Field(..., description="Record kind name")

    items: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Records on this page, newest first"
    )

    page: int = Field(default=1, ge=1, description="Current page number")

    page_size: int = Field(default=10, ge=1, description="Records per page")

    # Never below 1, even for an empty result
    total_pages: int = Field(default=1, ge=1, description="Number of pages")

    total_count: int = Field(default=0, ge=0, description="Records matching the query")

    first_index: int = Field(default=0, ge=0, description="1-based index of the first item shown")

    last_index: int = Field(default=0, ge=0, description="1-based index of the last item shown")

    tab: str | None = Field(default=None, description="Tab the items were taken from")

    tab_counts: dict[str, int] = Field(
        default_factory=dict,
        description="Matching records per tab (empty for kinds without tabs)"
    )


class DeleteRequest(BaseModel):
    ids: list[str] = Field(..., min_length=1, description="Record IDs to delete")


class BulkResult(BaseModel):
    """Outcome of a bulk write."""

    succeeded: list[str] = Field(default_factory=list)
    count: int = Field(default=0, ge=0)
