# =============================================================================
# app/routers/applications.py - Public Application Form
# =============================================================================
# The only unauthenticated write: students submit a practicum application.
# =============================================================================

import logging

from fastapi import APIRouter
from pydantic import BaseModel, Field

from core.models.student import StudentApplicationCreate
from core.services.student_service import StudentService

logger = logging.getLogger(__name__)

router = APIRouter()


class ApplicationSubmitted(BaseModel):
    """Response after a successful submission."""
    application_id: str = Field(..., example="550e8400-e29b-41d4-a716-446655440000")
    created_at: str | None = Field(default=None, example="2025-07-01T03:00:00Z")
    message: str = Field(default="실습신청이 성공적으로 제출되었습니다!")


@router.post("/applications", response_model=ApplicationSubmitted, status_code=201)
async def submit_application(form: StudentApplicationCreate):
    """
    Submit a practicum application.

    The phone number is normalized, dates are stored as YY.MM.DD (birth
    date) and YY년 MM월 DD일 (preferred practicum date), and the
    application starts in the pending tab of the admin console.
    """
    row = StudentService.submit_application(form)
    return ApplicationSubmitted(
        application_id=str(row["id"]),
        created_at=row.get("created_at"),
    )
