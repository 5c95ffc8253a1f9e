# =============================================================================
# app/routers/students.py - Student Status Transitions
# =============================================================================
# Bulk actions on the selected rows of the students screen and the single
# payment-status change of the detail view. Listing, editing and deleting
# go through the generic /admin/{kind} endpoints.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.auth import get_audit_context, require_permission
from core.models.admin import AdminUser
from core.models.listing import BulkResult
from core.models.student import PaymentStatusChange, StudentBulkAction, StudentBulkRequest
from core.services.activity_log_service import AuditContext
from core.services.student_service import StudentService

router = APIRouter()

ACTION_MESSAGES = {
    StudentBulkAction.MARK_PAID: "{n}명의 학생을 입금완료로 처리했습니다.",
    StudentBulkAction.CANCEL_PAYMENT: "{n}명의 학생을 입금대기로 되돌렸습니다.",
    StudentBulkAction.MOVE_TO_PENDING: "{n}명의 학생을 입금대기로 되돌렸습니다.",
    StudentBulkAction.MARK_COMPLETED: "{n}명의 학생을 실습완료로 처리했습니다.",
    StudentBulkAction.MARK_REFUNDED: "{n}명의 학생을 환불완료로 처리했습니다.",
}


@router.post("/bulk/{action}")
async def bulk_transition(
    action: Annotated[StudentBulkAction, Path(description="Transition to apply")],
    request: StudentBulkRequest,
    admin: AdminUser = Depends(require_permission("can_edit_data")),
    audit: AuditContext = Depends(get_audit_context),
):
    """
    Apply a status transition to the selected students.

    Rows are updated one at a time. If one fails, the response is 502 with
    the IDs that were and weren't updated; reload the list before retrying.
    """
    rows = StudentService.apply_bulk_action(action, request.ids, audit)
    result = BulkResult(succeeded=[str(row["id"]) for row in rows], count=len(rows))
    return {
        **result.model_dump(),
        "message": ACTION_MESSAGES[action].format(n=result.count),
    }


@router.patch("/{record_id}/payment-status")
async def change_payment_status(
    record_id: Annotated[str, Path(description="Application ID")],
    request: PaymentStatusChange,
    admin: AdminUser = Depends(require_permission("can_edit_data")),
    audit: AuditContext = Depends(get_audit_context),
):
    """Change one student's payment status."""
    return StudentService.change_payment_status(record_id, request.status, audit)
