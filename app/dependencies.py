# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from dataclasses import dataclass
from datetime import date
from typing import Annotated

from fastapi import Depends, Query as QueryParam, Request

from app.config import settings
from app.exceptions import InvalidQueryError
from core.services.record_service import RecordService
from recordset import Query, RecordKind

# Per-field filters arrive as f.<field>=value
FILTER_PREFIX = "f."


def get_record_kind(kind: str) -> RecordKind:
    """
    Resolve the {kind} path parameter.

    Raises:
        UnknownRecordKindError: 404 for unregistered kinds
    """
    return RecordService.resolve_kind(kind)


def get_list_query(
    request: Request,
    q: str = QueryParam(default="", description="Free-text search"),
    tab: str | None = QueryParam(default=None, description="Status tab"),
    date_from: date | None = QueryParam(default=None, description="Start date (inclusive)"),
    date_to: date | None = QueryParam(default=None, description="End date (inclusive, whole day)"),
    months: list[str] = QueryParam(default=[], description='Month buckets, e.g. "25년07월"'),
) -> Query:
    """
    Build a Query from list endpoint parameters.

    Example:
        GET /api/v1/admin/students?q=김&tab=pending&f.gender=여&months=25년07월
    """
    if date_from and date_to and date_from > date_to:
        raise InvalidQueryError(
            "date_from must not be after date_to",
            details={"date_from": date_from.isoformat(), "date_to": date_to.isoformat()},
        )

    filters = {
        name[len(FILTER_PREFIX):]: value
        for name, value in request.query_params.items()
        if name.startswith(FILTER_PREFIX)
    }
    return Query.build(
        search=q,
        filters=filters,
        date_from=date_from,
        date_to=date_to,
        months=months,
        tab=tab,
    )


@dataclass(frozen=True)
class PageParams:
    page: int
    page_size: int


def get_page_params(
    page: int = QueryParam(default=1, ge=1, description="1-based page number"),
    page_size: int | None = QueryParam(default=None, ge=1, description="Records per page"),
) -> PageParams:
    """
    Page and page size, with the size capped at MAX_PAGE_SIZE.

    Out-of-range pages are passed through; they return an empty page.
    """
    size = min(page_size or settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)
    return PageParams(page=page, page_size=size)


# Type aliases for dependency injection
KindDep = Annotated[RecordKind, Depends(get_record_kind)]
ListQueryDep = Annotated[Query, Depends(get_list_query)]
PageDep = Annotated[PageParams, Depends(get_page_params)]
