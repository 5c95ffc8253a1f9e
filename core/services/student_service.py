# =============================================================================
# core/services/student_service.py - Student Applications
# =============================================================================
# Public form submission and the status transitions of the students screen.
#
# Status transitions and the tab each lands the student in:
#   mark_paid        payment_status=paid,     service_payment_status=입금완료
#   cancel_payment   payment_status=pending,  service_payment_status=null
#   move_to_pending  same as cancel_payment (from the refunded tab)
#   mark_refunded    payment_status=refunded, service_payment_status=환불완료
#   mark_completed   practice_completion_status=completed
# =============================================================================

import logging
from typing import Any, Iterable

from pydantic import ValidationError

from app.exceptions import FormValidationError, jsonable_errors
from core.models.student import (
    SERVICE_PAYMENT_LABELS,
    STAFF_FIELDS,
    CompletionStatus,
    PaymentStatus,
    StudentApplicationCreate,
    StudentBulkAction,
)
from core.services.activity_log_service import AuditContext
from core.services.record_service import RecordService
from lib.formatting import korean_spaced_date, short_date
from lib.supabase_client import SupabaseClientError

logger = logging.getLogger(__name__)

KIND = "students"


def payment_patch(status: PaymentStatus) -> dict[str, Any]:
    """Columns written when payment status changes."""
    return {
        "payment_status": status.value,
        "service_payment_status": SERVICE_PAYMENT_LABELS[status],
    }


BULK_PATCHES: dict[StudentBulkAction, dict[str, Any]] = {
    StudentBulkAction.MARK_PAID: payment_patch(PaymentStatus.PAID),
    StudentBulkAction.CANCEL_PAYMENT: payment_patch(PaymentStatus.PENDING),
    StudentBulkAction.MOVE_TO_PENDING: payment_patch(PaymentStatus.PENDING),
    StudentBulkAction.MARK_REFUNDED: payment_patch(PaymentStatus.REFUNDED),
    StudentBulkAction.MARK_COMPLETED: {
        "practice_completion_status": CompletionStatus.COMPLETED.value,
    },
}


class StudentService:
    """Service for student applications."""

    @staticmethod
    def build_application_row(form: StudentApplicationCreate) -> dict[str, Any]:
        """
        Turn a validated form into the row that gets inserted.

        Dates are stored in the formats the admin screens display, staff
        columns start empty, and the application starts in the pending tab.
        """
        row = form.model_dump()
        row["birth_date"] = short_date(form.birth_date)
        row["preferred_practice_date"] = korean_spaced_date(form.preferred_practice_date)
        row.update(dict.fromkeys(STAFF_FIELDS))
        row["payment_status"] = PaymentStatus.PENDING.value
        row["practice_completion_status"] = CompletionStatus.NOT_STARTED.value
        return row

    @staticmethod
    def submit_application(payload: dict[str, Any] | StudentApplicationCreate) -> dict[str, Any]:
        """
        Submit the public application form.

        Validation happens before any remote call.

        Returns:
            The inserted application row

        Raises:
            FormValidationError: If a required field is missing or invalid
            SupabaseClientError: If the insert fails
        """
        if isinstance(payload, StudentApplicationCreate):
            form = payload
        else:
            try:
                form = StudentApplicationCreate.model_validate(payload)
            except ValidationError as e:
                raise FormValidationError(jsonable_errors(e.errors()))

        row = StudentService.build_application_row(form)

        try:
            created = RecordService.insert_record(KIND, row)
        except SupabaseClientError as e:
            logger.error(f"Failed to submit application for {form.student_name}: {e}")
            raise

        logger.info(f"Received application: {created.get('id')}")
        return created

    @staticmethod
    def apply_bulk_action(
        action: StudentBulkAction,
        record_ids: Iterable[str],
        audit: AuditContext | None = None,
    ) -> list[dict[str, Any]]:
        """
        Run one status transition on the selected applications.

        Raises:
            BatchOperationError: If the batch stops partway
        """
        return RecordService.bulk_update(
            KIND,
            record_ids,
            BULK_PATCHES[action],
            audit,
            operation=action.value,
        )

    @staticmethod
    def mark_paid(record_ids: Iterable[str], audit: AuditContext | None = None) -> list[dict[str, Any]]:
        return StudentService.apply_bulk_action(StudentBulkAction.MARK_PAID, record_ids, audit)

    @staticmethod
    def cancel_payment(record_ids: Iterable[str], audit: AuditContext | None = None) -> list[dict[str, Any]]:
        return StudentService.apply_bulk_action(StudentBulkAction.CANCEL_PAYMENT, record_ids, audit)

    @staticmethod
    def mark_completed(record_ids: Iterable[str], audit: AuditContext | None = None) -> list[dict[str, Any]]:
        return StudentService.apply_bulk_action(StudentBulkAction.MARK_COMPLETED, record_ids, audit)

    @staticmethod
    def move_to_pending(record_ids: Iterable[str], audit: AuditContext | None = None) -> list[dict[str, Any]]:
        return StudentService.apply_bulk_action(StudentBulkAction.MOVE_TO_PENDING, record_ids, audit)

    @staticmethod
    def mark_refunded(record_ids: Iterable[str], audit: AuditContext | None = None) -> list[dict[str, Any]]:
        return StudentService.apply_bulk_action(StudentBulkAction.MARK_REFUNDED, record_ids, audit)

    @staticmethod
    def change_payment_status(
        record_id: str,
        status: PaymentStatus,
        audit: AuditContext | None = None,
    ) -> dict[str, Any]:
        """Change one application's payment status from the detail view."""
        return RecordService.patch_record(KIND, record_id, payment_patch(status), audit)
