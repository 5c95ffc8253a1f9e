# =============================================================================
# recordset/kinds.py - Registered Record Kinds
# =============================================================================
# One declaration per admin list screen. Field lists mirror what each screen
# searches and filters on.
# =============================================================================

from __future__ import annotations

from core.models.student import CompletionStatus, PaymentStatus
from recordset.registry import RecordKind, register_kind
from recordset.types import Record


# =============================================================================
# Student application tabs
# =============================================================================
# Each tab is evaluated on its own. A record that is both completed and
# refunded satisfies both the "completed" and "refunded" predicates; only
# "pending" excludes it. See DESIGN.md "Student tab overlap".

def is_pending(record: Record) -> bool:
    return (
        record.get("payment_status") != PaymentStatus.REFUNDED.value
        and record.get("practice_completion_status") != CompletionStatus.COMPLETED.value
    )


def is_completed(record: Record) -> bool:
    return record.get("practice_completion_status") == CompletionStatus.COMPLETED.value


def is_refunded(record: Record) -> bool:
    return record.get("payment_status") == PaymentStatus.REFUNDED.value


STUDENTS = register_kind(RecordKind(
    name="students",
    table="student_applications",
    label="학생",
    searchable_fields=(
        "student_name",
        "phone",
        "address",
        "practice_type",
        "preferred_semester",
        "practice_manager",
    ),
    filterable_fields=(
        "student_name",
        "gender",
        "practice_type",
        "preferred_semester",
        "preferred_day",
        "car_available",
        "practice_manager",
        "service_payment_status",
    ),
    date_field="created_at",
    tabs={
        "pending": is_pending,
        "completed": is_completed,
        "refunded": is_refunded,
    },
    default_tab="pending",
    title_field="student_name",
))


EDUCATION_CENTERS = register_kind(RecordKind(
    name="education_centers",
    table="education_centers",
    label="실습교육원",
    searchable_fields=(
        "center_name",
        "practice_type",
        "location",
        "practice_available_area",
        "semester",
        "website_url",
    ),
    filterable_fields=(
        "center_name",
        "practice_type",
        "semester",
        "law_type",
        "seminar_day",
        "seminar_count",
        "location",
        "practice_available_area",
        "website_url",
    ),
    title_field="center_name",
))


PRACTICE_INSTITUTIONS = register_kind(RecordKind(
    name="practice_institutions",
    table="practice_institutions",
    label="실습기관",
    searchable_fields=(
        "institution_name",
        "location",
        "practice_area",
        "schedule_type",
    ),
    filterable_fields=(
        "institution_name",
        "location",
        "practice_area",
        "schedule_type",
        "cost",
    ),
    title_field="institution_name",
))


CONTRACT_CENTERS = register_kind(RecordKind(
    name="contract_centers",
    table="contract_education_centers",
    label="협약교육원",
    searchable_fields=(
        "classification",
        "student_name",
        "contact",
        "payment_amount",
        "payment_date",
        "payment_method",
        "manager",
        "special_notes",
    ),
    filterable_fields=(
        "classification",
        "student_name",
        "contact",
        "payment_amount",
        "payment_date",
        "payment_method",
        "manager",
        "special_notes",
    ),
    date_field="created_at",
    month_field="payment_date",
    title_field="student_name",
))


CONSULTATIONS = register_kind(RecordKind(
    name="consultations",
    table="consultations",
    label="상담",
    searchable_fields=(
        "consultation_content",
        "member_name",
        "consultant_name",
    ),
    filterable_fields=(
        "consultation_type",
        "consultant_name",
        "is_processed",
    ),
    date_field="created_at",
    title_field="member_name",
))


ACTIVITY_LOGS = register_kind(RecordKind(
    name="activity_logs",
    table="admin_activity_logs",
    label="활동 로그",
    searchable_fields=(
        "admin_username",
        "description",
    ),
    filterable_fields=(
        "action_type",
        "admin_username",
        "table_name",
    ),
    date_field="created_at",
    min_role_level=1,
))
