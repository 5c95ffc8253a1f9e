# =============================================================================
# core/services/consultation_service.py - Consultation Memos
# =============================================================================
# Memo CRUD on top of RecordService, plus:
# - content encoding: memo text is stored in <li>-tagged list form
# - processed / unprocessed marking, single and bulk
# - consultant list with memo counts
# - one attachment per memo, kept in Supabase Storage
# =============================================================================

import logging
import time
from collections import Counter
from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import Any, Iterable

from pydantic import ValidationError

from app.config import settings
from app.exceptions import (
    FileTooLargeError,
    FormValidationError,
    StorageUploadError,
    jsonable_errors,
)
from core.models.consultation import (
    Attachment,
    Consultant,
    ConsultationContent,
    ConsultationCreate,
    ConsultationUpdate,
    ContentLine,
)
from core.services.activity_log_service import ActivityLogService, AuditContext
from core.services.record_service import RecordService
from lib.formatting import format_file_size
from lib.list_content import to_display_lines, to_editable_text, to_storage
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import normalize_id

logger = logging.getLogger(__name__)

KIND = "consultations"

# Placeholder owner when a memo is created without a signed-in admin
ANONYMOUS_USER_ID = "00000000-0000-0000-0000-000000000000"

ATTACHMENT_FIELDS = ("attached_file_name", "attached_file_url", "attached_file_size")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _validate(schema, payload: dict[str, Any]):
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        raise FormValidationError(jsonable_errors(e.errors()))


class ConsultationService:
    """Service for consultation memos."""

    @staticmethod
    def create(
        payload: dict[str, Any] | ConsultationCreate,
        audit: AuditContext | None = None,
    ) -> dict[str, Any]:
        """
        Create a memo.

        consultation_date is set to now and the memo starts unprocessed.

        Raises:
            FormValidationError: If a required field is missing
        """
        form = payload if isinstance(payload, ConsultationCreate) else _validate(ConsultationCreate, payload)

        fields = {
            "consultation_type": form.consultation_type,
            "consultant_name": form.consultant_name,
            "member_name": form.member_name,
            "consultation_content": to_storage(form.consultation_content),
            "consultation_date": _now_iso(),
            "user_id": audit.admin.id if audit else ANONYMOUS_USER_ID,
            "is_processed": False,
            "processed_at": None,
            **dict.fromkeys(ATTACHMENT_FIELDS),
        }
        return RecordService.insert_record(KIND, fields, audit)

    @staticmethod
    def update(
        record_id: str,
        payload: dict[str, Any] | ConsultationUpdate,
        audit: AuditContext | None = None,
    ) -> dict[str, Any]:
        """Edit a memo; new content is re-encoded before it's stored."""
        form = payload if isinstance(payload, ConsultationUpdate) else _validate(ConsultationUpdate, payload)

        patch = form.model_dump(exclude_unset=True)
        if "consultation_content" in patch:
            patch["consultation_content"] = to_storage(patch["consultation_content"])
        if not patch:
            return RecordService.get_record(KIND, record_id)

        return RecordService.patch_record(KIND, record_id, patch, audit)

    @staticmethod
    def get_content(record_id: str) -> ConsultationContent:
        """Stored memo content decoded for the edit form and detail view."""
        row = RecordService.get_record(KIND, record_id)
        stored = row.get("consultation_content")
        return ConsultationContent(
            id=normalize_id(row["id"]),
            editable_text=to_editable_text(stored),
            lines=[
                ContentLine(text=line.text, is_quoted=line.is_quoted)
                for line in to_display_lines(stored)
            ],
        )

    # -------------------------------------------------------------------------
    # Processed state
    # -------------------------------------------------------------------------

    @staticmethod
    def _processed_patch(processed: bool) -> dict[str, Any]:
        return {
            "is_processed": processed,
            "processed_at": _now_iso() if processed else None,
        }

    @staticmethod
    def mark_processed(record_id: str, audit: AuditContext | None = None) -> dict[str, Any]:
        return RecordService.patch_record(KIND, record_id, ConsultationService._processed_patch(True), audit)

    @staticmethod
    def mark_unprocessed(record_id: str, audit: AuditContext | None = None) -> dict[str, Any]:
        return RecordService.patch_record(KIND, record_id, ConsultationService._processed_patch(False), audit)

    @staticmethod
    def bulk_mark_processed(
        record_ids: Iterable[str],
        audit: AuditContext | None = None,
    ) -> list[dict[str, Any]]:
        """
        Raises:
            BatchOperationError: If the batch stops partway
        """
        return RecordService.bulk_update(
            KIND, record_ids, ConsultationService._processed_patch(True), audit,
            operation="mark processed",
        )

    @staticmethod
    def bulk_mark_unprocessed(
        record_ids: Iterable[str],
        audit: AuditContext | None = None,
    ) -> list[dict[str, Any]]:
        return RecordService.bulk_update(
            KIND, record_ids, ConsultationService._processed_patch(False), audit,
            operation="mark unprocessed",
        )

    # -------------------------------------------------------------------------
    # Consultants
    # -------------------------------------------------------------------------

    @staticmethod
    def list_consultants() -> list[Consultant]:
        """Each consultant with their memo count, ordered by name."""
        rows = SupabaseClient.fetch_all(
            "consultations",
            order_by="consultant_name",
            desc=False,
            columns="consultant_name",
        )
        counts = Counter(row["consultant_name"] for row in rows if row.get("consultant_name"))
        return [
            Consultant(consultant_name=name, count=count)
            for name, count in counts.items()
        ]

    # -------------------------------------------------------------------------
    # Attachments
    # -------------------------------------------------------------------------

    @staticmethod
    def upload_attachment(
        record_id: str,
        filename: str,
        content: bytes,
        content_type: str | None = None,
        audit: AuditContext | None = None,
    ) -> Attachment:
        """
        Store a file and attach it to a memo, replacing any previous file.

        Files are stored as {owner_id}/{epoch_ms}{ext}.

        Raises:
            FileTooLargeError: If the file exceeds MAX_UPLOAD_SIZE_MB
            StorageUploadError: If the upload fails
            RecordNotFoundError: If the memo doesn't exist
        """
        size = len(content)
        if size > settings.max_upload_size_bytes:
            raise FileTooLargeError(size / (1024 * 1024), settings.MAX_UPLOAD_SIZE_MB)

        row = RecordService.get_record(KIND, record_id)
        owner = audit.admin.id if audit else row.get("user_id") or ANONYMOUS_USER_ID
        path = f"{owner}/{int(time.time() * 1000)}{PurePosixPath(filename).suffix}"
        bucket = settings.CONSULTATION_FILES_BUCKET

        try:
            SupabaseClient.upload_file(
                bucket, path, content, content_type or "application/octet-stream"
            )
        except SupabaseClientError as e:
            logger.error(f"Attachment upload failed for consultation {record_id}: {e}")
            raise StorageUploadError(e.message)

        url = SupabaseClient.get_public_url(bucket, path)
        previous_url = row.get("attached_file_url")

        RecordService.patch_record(
            KIND,
            record_id,
            {
                "attached_file_name": filename,
                "attached_file_url": url,
                "attached_file_size": size,
            },
            audit,
            old_row=row,
        )

        if previous_url:
            try:
                ConsultationService._remove_stored_file(previous_url)
            except SupabaseClientError as e:
                # The memo already points at the new file
                logger.warning(f"Could not remove replaced attachment {previous_url}: {e}")

        return Attachment(
            attached_file_name=filename,
            attached_file_url=url,
            attached_file_size=size,
            size_label=format_file_size(size),
        )

    @staticmethod
    def delete_attachment(record_id: str, audit: AuditContext | None = None) -> dict[str, Any]:
        """Remove a memo's file from storage and clear its attachment columns."""
        row = RecordService.get_record(KIND, record_id)
        url = row.get("attached_file_url")
        if not url:
            return row

        ConsultationService._remove_stored_file(url)
        return RecordService.patch_record(
            KIND,
            record_id,
            dict.fromkeys(ATTACHMENT_FIELDS),
            audit,
            old_row=row,
            description=ActivityLogService.describe_action(
                "UPDATE", KIND, record_name=f"{row.get('member_name') or record_id} 첨부파일 삭제"
            ),
        )

    @staticmethod
    def storage_path(url: str) -> str:
        """
        Object path inside the bucket for a public URL.

        Example:
            ".../object/public/consultation-files/u1/1700000000000.pdf" -> "u1/1700000000000.pdf"
        """
        marker = f"/{settings.CONSULTATION_FILES_BUCKET}/"
        if marker in url:
            return url.split(marker, 1)[1]
        return url.rsplit("/", 1)[-1]

    @staticmethod
    def _remove_stored_file(url: str) -> None:
        SupabaseClient.remove_files(
            settings.CONSULTATION_FILES_BUCKET,
            [ConsultationService.storage_path(url)],
        )
