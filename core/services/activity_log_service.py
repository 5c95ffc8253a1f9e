# =============================================================================
# core/services/activity_log_service.py - Admin Audit Log
# =============================================================================
# Records who changed what, and reads it back for the log screen.
#
# Writing a log entry never fails the write it describes: a failed insert is
# logged and dropped.
# =============================================================================

import logging
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Any, Iterable

from core.models.activity_log import ActionType, ActivityStats, FieldChange
from core.models.admin import AdminUser
from lib.formatting import KST
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import blank_to_none, normalize_ids

logger = logging.getLogger(__name__)

LOG_TABLE = "admin_activity_logs"

# Bookkeeping columns that never count as a change
SYSTEM_FIELDS = frozenset({
    "id",
    "created_at",
    "updated_at",
    "admin_user_id",
    "admin_username",
    "admin_role_name",
    "action_type",
    "table_name",
    "record_id",
    "ip_address",
    "user_agent",
    "description",
})

MODULE_NAMES = {
    "consultations": "상담",
    "students": "학생",
    "student_applications": "학생",
    "institutions": "기관",
    "education_centers": "실습교육원",
    "practice_institutions": "실습기관",
    "contract_centers": "계약교육원",
    "contract_education_centers": "계약교육원",
    "activity_logs": "활동 로그",
    "admin_activity_logs": "활동 로그",
    "users": "사용자",
}

ACTION_NAMES = {
    ActionType.CREATE.value: "등록",
    ActionType.UPDATE.value: "수정",
    ActionType.DELETE.value: "삭제",
    ActionType.LOGIN.value: "로그인",
    ActionType.LOGOUT.value: "로그아웃",
}

FIELD_DISPLAY_NAMES = {
    "name": "이름",
    "status": "상태",
    "email": "이메일",
    "phone": "전화번호",
    "address": "주소",
    "description": "설명",
    "created_at": "생성일",
    "updated_at": "수정일",
    "admin_user_id": "관리자 ID",
    "admin_username": "관리자명",
    "admin_role_name": "관리자 역할",
    "action_type": "액션 타입",
    "table_name": "테이블명",
    "record_id": "레코드 ID",
    "ip_address": "IP 주소",
    "user_agent": "사용자 에이전트",
    # Contract centers
    "center_name": "교육원명",
    "classification": "구분",
    "contact": "연락처",
    "payment_amount": "결제금액",
    "payment_date": "결제일",
    "payment_method": "결제방법",
    "manager": "담당자",
    "special_notes": "특이사항",
    # Students
    "student_name": "학생명",
    "birth_date": "생년월일",
    "gender": "성별",
    "preferred_practice_date": "실습희망일",
    "preferred_semester": "희망학기",
    "practice_type": "실습유형",
    "preferred_day": "희망요일",
    "advisor_name": "지도교수",
    "car_available": "자차여부",
    "cash_receipt_number": "현금영수증 번호",
    "practice_manager": "실습담당자",
    "practice_period": "실습인정기간",
    "practice_education_center": "실습교육원",
    "practice_institution": "현장실습기관",
    "service_payment_status": "서비스비용 입금여부",
    "payment_status": "결제 상태",
    "practice_completion_status": "실습 완료 상태",
    # Institutions
    "institution_name": "기관명",
    "location": "지역",
    "practice_area": "실습분야",
    "schedule_type": "일정유형",
    "cost": "비용",
    # Consultations
    "consultation_type": "상담 유형",
    "consultation_date": "상담일",
    "consultation_content": "상담 내용",
    "consultant_name": "상담자명",
    "member_name": "회원명",
    "is_processed": "처리 여부",
    "processed_at": "처리일",
    "attached_file_name": "첨부파일",
}


@dataclass(frozen=True)
class AuditContext:
    """The acting admin and request metadata attached to every log entry."""
    admin: AdminUser
    ip_address: str | None = None
    user_agent: str | None = None


class ActivityLogService:
    """
    Service for the admin activity log.

    Example:
        ActivityLogService.log_activity(
            audit, ActionType.UPDATE, "consultations", record_id,
            old_values=before, new_values=after,
            description="상담 수정: 김민수",
        )
    """

    @staticmethod
    def log_activity(
        audit: AuditContext | None,
        action: ActionType,
        table_name: str,
        record_id: str | None = None,
        old_values: dict[str, Any] | None = None,
        new_values: dict[str, Any] | None = None,
        description: str | None = None,
    ) -> dict[str, Any] | None:
        """
        Insert one audit row.

        Returns:
            The inserted row, or None when there is no acting admin or the
            insert failed
        """
        if audit is None:
            return None

        entry = {
            "admin_user_id": audit.admin.id,
            "admin_username": audit.admin.username,
            "admin_role_name": audit.admin.role_name,
            "action_type": action.value,
            "table_name": table_name,
            "record_id": record_id,
            "old_values": old_values,
            "new_values": new_values,
            "description": description,
            "ip_address": audit.ip_address,
            "user_agent": audit.user_agent,
        }

        try:
            row = SupabaseClient.insert(LOG_TABLE, entry)
            logger.debug(f"Logged {action.value} on {table_name}/{record_id}")
            return row
        except SupabaseClientError as e:
            logger.error(f"Failed to write activity log for {table_name}/{record_id}: {e}")
            return None

    @staticmethod
    def user_logs(admin_user_id: str, limit: int = 50) -> list[dict[str, Any]]:
        """Most recent entries written by one admin."""
        rows = SupabaseClient.fetch_where(
            LOG_TABLE,
            {"admin_user_id": admin_user_id},
            order_by="created_at",
            desc=True,
        )
        return rows[:limit]

    @staticmethod
    def record_history(table_name: str, record_id: str) -> list[dict[str, Any]]:
        """Entries about one record, newest first."""
        return SupabaseClient.fetch_where(
            LOG_TABLE,
            {"table_name": table_name, "record_id": record_id},
            order_by="created_at",
            desc=True,
        )

    @staticmethod
    def activity_stats(now: datetime | None = None) -> ActivityStats:
        """
        Count entries written today and since the start of this week.

        Days and weeks are KST; weeks start on Sunday.
        """
        if now is None:
            now = datetime.now(KST)
        elif now.tzinfo is not None:
            now = now.astimezone(KST)

        today = now.date()
        day_start = datetime.combine(today, time.min, tzinfo=KST)
        day_end = datetime.combine(today, time(23, 59, 59, 999000), tzinfo=KST)
        week_start = day_start - timedelta(days=(today.weekday() + 1) % 7)

        today_count = SupabaseClient.count(
            LOG_TABLE,
            gte=day_start.isoformat(),
            lte=day_end.isoformat(),
        )
        week_count = SupabaseClient.count(LOG_TABLE, gte=week_start.isoformat())

        return ActivityStats(today=today_count, this_week=week_count)

    @staticmethod
    def changed_fields(
        old_values: dict[str, Any] | None,
        new_values: dict[str, Any] | None,
    ) -> list[FieldChange]:
        """
        Field-by-field diff of two record snapshots.

        System columns are skipped, and None, "" and whitespace compare equal. Fields are
        reported in first-seen order (old snapshot first).
        """
        if not old_values or not new_values:
            return []

        keys: dict[str, None] = dict.fromkeys([*old_values, *new_values])
        changes = []
        for key in keys:
            if key in SYSTEM_FIELDS:
                continue
            old = old_values.get(key)
            new = new_values.get(key)
            if blank_to_none(old) != blank_to_none(new):
                changes.append(FieldChange(
                    field=key,
                    display_name=ActivityLogService.field_display_name(key),
                    old_value=old,
                    new_value=new,
                ))
        return changes

    @staticmethod
    def field_display_name(field_name: str) -> str:
        return FIELD_DISPLAY_NAMES.get(field_name, field_name)

    @staticmethod
    def describe_action(
        action: ActionType | str,
        module: str,
        record_name: str | None = None,
        record_id: str | None = None,
    ) -> str:
        """
        Human-readable description of an action.

        Example:
            describe_action("UPDATE", "consultations", record_name="김민수")
            # "상담 수정: 김민수"
        """
        action_code = action.value if isinstance(action, ActionType) else action
        module_name = MODULE_NAMES.get(module, module)
        action_name = ACTION_NAMES.get(action_code, action_code)

        if record_name:
            return f"{module_name} {action_name}: {record_name}"
        if record_id:
            return f"{module_name} {action_name}: {module_name} ID {record_id}"
        return f"{module_name} {action_name}"

    @staticmethod
    def delete_logs(log_ids: Iterable[str]) -> int:
        ids = normalize_ids(log_ids)
        SupabaseClient.delete(LOG_TABLE, ids)
        logger.info(f"Deleted {len(ids)} activity log entries")
        return len(ids)
