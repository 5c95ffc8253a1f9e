# =============================================================================
# app/routers/records.py - Generic Admin List & CRUD Endpoints
# =============================================================================
# One set of endpoints for every registered record kind:
#   GET    /admin/{kind}              filtered, paginated list + tab counts
#   GET    /admin/{kind}/export       filtered list as CSV
#   GET    /admin/{kind}/{id}         one record
#   GET    /admin/{kind}/{id}/history activity log entries for the record
#   POST   /admin/{kind}              create
#   PATCH  /admin/{kind}/{id}         partial update
#   POST   /admin/{kind}/delete       delete selected IDs
#
# Kind-specific routers (students, consultations, ...) are mounted before
# this one so their fixed paths win over {id}.
# =============================================================================

import io
import logging
from datetime import datetime
from typing import Annotated, Any

import pandas as pd
from fastapi import APIRouter, Body, Depends, Path
from fastapi.responses import StreamingResponse

from app.auth import get_audit_context, get_current_admin, require_permission
from app.exceptions import PermissionDeniedError
from app.dependencies import KindDep, ListQueryDep, PageDep
from core.models.admin import AdminUser
from core.models.listing import DeleteRequest, RecordList
from core.services.activity_log_service import ActivityLogService, AuditContext
from core.services.record_service import RecordService
from lib.formatting import KST
from recordset import RecordKind

logger = logging.getLogger(__name__)

router = APIRouter()


def check_kind_access(kind: RecordKind, admin: AdminUser) -> None:
    """
    Raises:
        PermissionDeniedError: If the kind is restricted above the admin's role
    """
    if kind.min_role_level is not None and not admin.has_role_level(kind.min_role_level):
        raise PermissionDeniedError(f"role_level <= {kind.min_role_level}")


@router.get("/{kind}", response_model=RecordList)
async def list_records(
    kind: KindDep,
    query: ListQueryDep,
    paging: PageDep,
    admin: AdminUser = Depends(get_current_admin),
):
    """
    List records of a kind.

    Query parameters:
    - q: free-text search over the kind's searchable fields
    - tab: status tab (kinds with tabs only; defaults to the first screen tab, e.g. pending)
    - date_from / date_to: inclusive date range on the kind's date field
    - months: repeatable month bucket, e.g. months=25년07월
    - f.<field>: substring filter on a filterable field

    Records stay newest first. Pages past the end are empty.
    """
    check_kind_access(kind, admin)
    return RecordService.query_page(kind, query, paging.page, paging.page_size)


@router.get("/{kind}/export")
async def export_records(
    kind: KindDep,
    query: ListQueryDep,
    admin: AdminUser = Depends(require_permission("can_export_data")),
):
    """
    Download every record matching the query as CSV.

    The file is UTF-8 with BOM so spreadsheet apps read Korean text correctly.
    """
    check_kind_access(kind, admin)
    rows = RecordService.filter_all(kind, query)

    csv_buffer = io.StringIO()
    pd.DataFrame(rows).to_csv(csv_buffer, index=False)

    filename = f"{kind.name}_{datetime.now(KST):%Y%m%d}.csv"
    logger.info(f"Admin {admin.username} exported {len(rows)} {kind.name} records")

    return StreamingResponse(
        iter(["\ufeff" + csv_buffer.getvalue()]),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f"attachment; filename={filename}",
        }
    )


@router.post("/{kind}/delete")
async def delete_records(
    kind: KindDep,
    request: DeleteRequest,
    admin: AdminUser = Depends(require_permission("can_delete_data")),
    audit: AuditContext = Depends(get_audit_context),
):
    """Delete the selected records. Every deletion is written to the activity log."""
    check_kind_access(kind, admin)
    deleted = RecordService.delete_records(kind, request.ids, audit)
    return {
        "deleted": deleted,
        "count": len(deleted),
        "message": f"{len(deleted)}개의 {kind.label} 데이터가 삭제되었습니다.",
    }


@router.get("/{kind}/{record_id}")
async def get_record(
    kind: KindDep,
    record_id: Annotated[str, Path(description="Record ID")],
    admin: AdminUser = Depends(get_current_admin),
):
    check_kind_access(kind, admin)
    return RecordService.get_record(kind, record_id)


@router.get("/{kind}/{record_id}/history")
async def get_record_history(
    kind: KindDep,
    record_id: Annotated[str, Path(description="Record ID")],
    admin: AdminUser = Depends(get_current_admin),
):
    """
    Activity log entries for one record, newest first, with field diffs.
    """
    check_kind_access(kind, admin)
    history = []
    for entry in ActivityLogService.record_history(kind.table, record_id):
        changes = ActivityLogService.changed_fields(entry.get("old_values"), entry.get("new_values"))
        history.append({**entry, "changes": [change.model_dump() for change in changes]})
    return {"record_id": record_id, "entries": history}


@router.post("/{kind}", status_code=201)
async def create_record(
    kind: KindDep,
    payload: Annotated[dict[str, Any], Body(description="Record fields")],
    admin: AdminUser = Depends(require_permission("can_add_data")),
    audit: AuditContext = Depends(get_audit_context),
):
    """Create a record. Fields are validated against the kind's schema first."""
    check_kind_access(kind, admin)
    return RecordService.create_record(kind, payload, audit)


@router.patch("/{kind}/{record_id}")
async def update_record(
    kind: KindDep,
    record_id: Annotated[str, Path(description="Record ID")],
    payload: Annotated[dict[str, Any], Body(description="Fields to change")],
    admin: AdminUser = Depends(require_permission("can_edit_data")),
    audit: AuditContext = Depends(get_audit_context),
):
    """Update only the fields sent."""
    check_kind_access(kind, admin)
    return RecordService.update_record(kind, record_id, payload, audit)
