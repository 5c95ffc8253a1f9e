# =============================================================================
# app/routers/consultations.py - Consultation Memo Endpoints
# =============================================================================
# Memo create/edit (content is encoded before storage), processed marking,
# consultant list, decoded content and attachments. Listing and deleting
# go through the generic /admin/{kind} endpoints.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Path, UploadFile

from app.auth import get_audit_context, get_current_admin, require_permission
from core.models.admin import AdminUser
from core.models.consultation import (
    Attachment,
    Consultant,
    ConsultationContent,
    ConsultationCreate,
    ConsultationIds,
    ConsultationUpdate,
)
from core.models.listing import BulkResult
from core.services.activity_log_service import AuditContext
from core.services.consultation_service import ConsultationService

logger = logging.getLogger(__name__)

router = APIRouter()

RecordId = Annotated[str, Path(description="Consultation ID")]


@router.post("", status_code=201)
async def create_consultation(
    request: ConsultationCreate,
    admin: AdminUser = Depends(require_permission("can_add_data")),
    audit: AuditContext = Depends(get_audit_context),
):
    """Create a memo. It starts unprocessed, dated now."""
    return ConsultationService.create(request, audit)


@router.get("/consultants", response_model=list[Consultant])
async def list_consultants(admin: AdminUser = Depends(get_current_admin)):
    """Consultant names with memo counts (for the consultant filter)."""
    return ConsultationService.list_consultants()


@router.post("/bulk/processed", response_model=BulkResult)
async def bulk_mark_processed(
    request: ConsultationIds,
    admin: AdminUser = Depends(require_permission("can_edit_data")),
    audit: AuditContext = Depends(get_audit_context),
):
    rows = ConsultationService.bulk_mark_processed(request.ids, audit)
    return BulkResult(succeeded=[str(row["id"]) for row in rows], count=len(rows))


@router.post("/bulk/unprocessed", response_model=BulkResult)
async def bulk_mark_unprocessed(
    request: ConsultationIds,
    admin: AdminUser = Depends(require_permission("can_edit_data")),
    audit: AuditContext = Depends(get_audit_context),
):
    rows = ConsultationService.bulk_mark_unprocessed(request.ids, audit)
    return BulkResult(succeeded=[str(row["id"]) for row in rows], count=len(rows))


@router.patch("/{record_id}")
async def update_consultation(
    record_id: RecordId,
    request: ConsultationUpdate,
    admin: AdminUser = Depends(require_permission("can_edit_data")),
    audit: AuditContext = Depends(get_audit_context),
):
    return ConsultationService.update(record_id, request, audit)


@router.get("/{record_id}/content", response_model=ConsultationContent)
async def get_consultation_content(
    record_id: RecordId,
    admin: AdminUser = Depends(get_current_admin),
):
    """
    Memo content decoded two ways:
    - editable_text: newline-joined, for the edit form
    - lines: one entry per item, with quoted ("> ...") lines flagged
    """
    return ConsultationService.get_content(record_id)


@router.post("/{record_id}/processed")
async def mark_processed(
    record_id: RecordId,
    admin: AdminUser = Depends(require_permission("can_edit_data")),
    audit: AuditContext = Depends(get_audit_context),
):
    return ConsultationService.mark_processed(record_id, audit)


@router.delete("/{record_id}/processed")
async def mark_unprocessed(
    record_id: RecordId,
    admin: AdminUser = Depends(require_permission("can_edit_data")),
    audit: AuditContext = Depends(get_audit_context),
):
    return ConsultationService.mark_unprocessed(record_id, audit)


@router.post("/{record_id}/attachment", response_model=Attachment)
async def upload_attachment(
    record_id: RecordId,
    file: Annotated[UploadFile, File(description="File to attach")],
    admin: AdminUser = Depends(require_permission("can_edit_data")),
    audit: AuditContext = Depends(get_audit_context),
):
    """Attach a file to a memo, replacing the previous one."""
    content = await file.read()
    filename = file.filename or "attachment"
    logger.info(f"Uploading attachment {filename} ({len(content)} bytes) to consultation {record_id}")
    return ConsultationService.upload_attachment(
        record_id,
        filename,
        content,
        content_type=file.content_type,
        audit=audit,
    )


@router.delete("/{record_id}/attachment")
async def delete_attachment(
    record_id: RecordId,
    admin: AdminUser = Depends(require_permission("can_edit_data")),
    audit: AuditContext = Depends(get_audit_context),
):
    return ConsultationService.delete_attachment(record_id, audit)
