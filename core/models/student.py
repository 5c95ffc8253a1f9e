# =============================================================================
# core/models/student.py - Student Application Schemas
# =============================================================================
# These models define the API contract for student applications:
# - StudentApplicationCreate: Public application form input
# - StudentApplicationUpdate: Staff edits from the admin console
# - StudentBulkAction: Bulk status transition request
# - PaymentStatus / CompletionStatus: Status columns that drive the tabs
#
# An application is submitted by a student with 13 fields; staff fill in the
# remaining 7 fields later. Dates are stored in the display formats the admin
# screens show (YY.MM.DD, YY년 MM월 DD일).
# =============================================================================

from datetime import date
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from lib.formatting import format_phone


class PaymentStatus(str, Enum):
    """
    Payment state of an application.

    Flow: pending -> paid -> (refund) -> refunded
    """
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"


class CompletionStatus(str, Enum):
    """Whether the practicum itself has been completed."""
    NOT_STARTED = "not_started"
    COMPLETED = "completed"


class StudentTab(str, Enum):
    """Tabs of the student list screen."""
    PENDING = "pending"
    COMPLETED = "completed"
    REFUNDED = "refunded"


class StudentBulkAction(str, Enum):
    """Status transitions available on selected students."""
    MARK_PAID = "mark_paid"
    CANCEL_PAYMENT = "cancel_payment"
    MARK_COMPLETED = "mark_completed"
    MOVE_TO_PENDING = "move_to_pending"
    MARK_REFUNDED = "mark_refunded"


# service_payment_status labels written alongside payment_status
SERVICE_PAYMENT_LABELS: dict[PaymentStatus, str | None] = {
    PaymentStatus.PENDING: None,
    PaymentStatus.PAID: "입금완료",
    PaymentStatus.REFUNDED: "환불완료",
}

# Staff-only columns, null until a practicum manager fills them in
STAFF_FIELDS = (
    "practice_manager",
    "practice_period",
    "practice_education_center",
    "practice_institution",
    "consultation_content",
    "special_notes",
    "service_payment_status",
)


class StudentApplicationCreate(BaseModel):
    """
    Schema for the public application form.

    Every field is required except the cash receipt number. Phone numbers are
    normalized to 010-1234-5678 form; dates arrive as ISO dates and are
    reformatted when the row is built (see StudentService).

    Example:
        {
            "student_name": "김민수",
            "gender": "남",
            "phone": "01012345678",
            "birth_date": "1999-03-02",
            "address": "서울시 강남구",
            "preferred_practice_date": "2025-03-04",
            "grade_report_date": "25년 2월",
            "preferred_semester": "2025-1",
            "practice_type": "사회복지현장실습",
            "preferred_day": "평일",
            "advisor_name": "이교수",
            "car_available": "가능"
        }
    """

    student_name: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Student's full name"
    )

    gender: str = Field(
        ...,
        min_length=1,
        description="Gender as chosen on the form"
    )

    # Any input with digits is accepted; stored formatted
    phone: str = Field(
        ...,
        min_length=1,
        description="Mobile phone number"
    )

    birth_date: date = Field(
        ...,
        description="Date of birth (stored as YY.MM.DD)"
    )

    address: str = Field(
        ...,
        min_length=1,
        description="Home address"
    )

    preferred_practice_date: date = Field(
        ...,
        description="Preferred practicum start date (stored as YY년 MM월 DD일)"
    )

    grade_report_date: str = Field(
        ...,
        min_length=1,
        description="When grades are reported"
    )

    preferred_semester: str = Field(
        ...,
        min_length=1,
        description="Preferred semester"
    )

    practice_type: str = Field(
        ...,
        min_length=1,
        description="Type of practicum"
    )

    preferred_day: str = Field(
        ...,
        min_length=1,
        description="Preferred weekday(s)"
    )

    advisor_name: str = Field(
        ...,
        min_length=1,
        description="Name of the advising professor"
    )

    car_available: str = Field(
        ...,
        min_length=1,
        description="Whether the student can drive to the site"
    )

    cash_receipt_number: str | None = Field(
        default=None,
        description="Number to issue the cash receipt to"
    )

    @field_validator(
        "student_name",
        "gender",
        "address",
        "grade_report_date",
        "preferred_semester",
        "practice_type",
        "preferred_day",
        "advisor_name",
        "car_available",
    )
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("This field is required")
        return v

    @field_validator("phone")
    @classmethod
    def normalize_phone(cls, v: str) -> str:
        formatted = format_phone(v)
        if len(formatted.replace("-", "")) < 10:
            raise ValueError("Phone number must have 10 or 11 digits")
        return formatted


class StudentApplicationUpdate(BaseModel):
    """
    Schema for staff edits of an application.

    All fields optional; only the fields sent are written.
    """

    student_name: str | None = None
    gender: str | None = None
    phone: str | None = None
    address: str | None = None
    preferred_semester: str | None = None
    practice_type: str | None = None
    preferred_day: str | None = None
    advisor_name: str | None = None
    car_available: str | None = None
    cash_receipt_number: str | None = None

    practice_manager: str | None = None
    practice_period: str | None = None
    practice_education_center: str | None = None
    practice_institution: str | None = None
    consultation_content: str | None = None
    special_notes: str | None = None
    service_payment_status: str | None = None

    @field_validator("phone")
    @classmethod
    def normalize_phone(cls, v: str | None) -> str | None:
        return format_phone(v) if v else v


class StudentBulkRequest(BaseModel):
    """Selected application IDs for a bulk transition."""

    ids: list[str] = Field(
        ...,
        min_length=1,
        description="Application IDs to transition"
    )


class PaymentStatusChange(BaseModel):
    """Single-row payment status change from the detail modal."""

    status: PaymentStatus = Field(
        ...,
        description="New payment status"
    )
