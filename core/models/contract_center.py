# =============================================================================
# core/models/contract_center.py - Contract Education Center Payment Schemas
# =============================================================================
# Each row records one student's payment to a contract education center.
# The list screen buckets rows by the month of payment_date and colors rows
# by payment_method.
# =============================================================================

from enum import Enum

from pydantic import BaseModel, Field


class PaymentMethod(str, Enum):
    """How (or whether) a contract center payment was received."""
    CARD = "카드결제"
    TRANSFER = "계좌이체"
    UNCONFIRMED = "확인불가"
    MISSING_CODE = "코드누락"
    REFUNDED = "환불자"


class ContractCenterCreate(BaseModel):
    """
    Schema for adding a payment row.

    Example:
        {
            "classification": "사회복지",
            "student_name": "박지영",
            "contact": "010-2222-3333",
            "payment_amount": "350000",
            "payment_date": "2025-07-01",
            "payment_method": "카드결제",
            "manager": "최담당"
        }
    """

    classification: str | None = Field(default=None, description="Program classification")

    student_name: str = Field(
        ...,
        min_length=1,
        description="Student who paid"
    )

    contact: str | None = Field(default=None, description="Student contact number")
    payment_amount: str | None = Field(default=None, description="Amount paid")

    # Month filter buckets are derived from this column
    payment_date: str | None = Field(default=None, description="Payment date")

    payment_method: PaymentMethod | None = Field(
        default=None,
        description="Payment method"
    )

    manager: str | None = Field(default=None, description="Staff member in charge")
    special_notes: str | None = Field(default=None, description="Free-form notes")


class ContractCenterUpdate(BaseModel):
    """Partial update of a payment row."""

    classification: str | None = None
    student_name: str | None = None
    contact: str | None = None
    payment_amount: str | None = None
    payment_date: str | None = None
    payment_method: PaymentMethod | None = None
    manager: str | None = None
    special_notes: str | None = None


class PaymentMethodChange(BaseModel):
    """Set the payment method on one or more rows."""

    ids: list[str] = Field(
        ...,
        min_length=1,
        description="Row IDs to change"
    )

    payment_method: PaymentMethod = Field(
        ...,
        description="New payment method"
    )
