# =============================================================================
# core/models/consultation.py - Consultation Memo Schemas
# =============================================================================
# These models define the API contract for consultation memos:
# - ConsultationCreate: New memo from the admin console
# - ConsultationUpdate: Edit of an existing memo
# - ConsultationContent: Stored content decoded for editing and display
# - Consultant: Consultant name with memo count
#
# consultation_content is stored in the <li>-tagged list form; the service
# layer encodes it on every write (see lib/list_content.py).
# =============================================================================

from pydantic import BaseModel, Field, field_validator


CONSULTATION_TYPES = ("일반상담", "기술지원", "기타")


class ConsultationCreate(BaseModel):
    """
    Schema for creating a consultation memo.

    Type, consultant, member and content are all required.

    Example:
        {
            "consultation_type": "일반상담",
            "consultant_name": "이상담",
            "member_name": "김민수",
            "consultation_content": "실습 일정 문의\\n> 3월 시작 희망"
        }
    """

    consultation_type: str = Field(
        ...,
        description="One of 일반상담, 기술지원, 기타"
    )

    consultant_name: str = Field(
        ...,
        min_length=1,
        description="Staff member who held the consultation"
    )

    member_name: str = Field(
        ...,
        min_length=1,
        description="Person who was consulted"
    )

    # Plain text, one line per list item; "> " lines are quoted replies
    consultation_content: str = Field(
        ...,
        min_length=1,
        description="Memo text"
    )

    @field_validator("consultation_type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        if v not in CONSULTATION_TYPES:
            raise ValueError(f"consultation_type must be one of {', '.join(CONSULTATION_TYPES)}")
        return v

    @field_validator("consultant_name", "member_name", "consultation_content")
    @classmethod
    def strip_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("This field is required")
        return v.strip()


class ConsultationUpdate(BaseModel):
    """Partial update of a memo."""

    consultation_type: str | None = None
    consultant_name: str | None = None
    member_name: str | None = None
    consultation_content: str | None = None

    @field_validator("consultation_type")
    @classmethod
    def validate_type(cls, v: str | None) -> str | None:
        if v is not None and v not in CONSULTATION_TYPES:
            raise ValueError(f"consultation_type must be one of {', '.join(CONSULTATION_TYPES)}")
        return v


class ConsultationIds(BaseModel):
    """IDs for bulk processed/unprocessed changes."""

    ids: list[str] = Field(..., min_length=1)


class ContentLine(BaseModel):
    text: str
    is_quoted: bool = False


class ConsultationContent(BaseModel):
    """Stored memo content decoded for the edit form and the detail view."""

    id: str
    editable_text: str = Field(..., description="Newline-joined text for the edit form")
    lines: list[ContentLine] = Field(default_factory=list, description="Lines for display")


class Consultant(BaseModel):
    """Consultant name with the number of memos they wrote."""

    consultant_name: str
    count: int = Field(..., ge=0)


class Attachment(BaseModel):
    """File attached to a consultation memo."""

    attached_file_name: str
    attached_file_url: str
    attached_file_size: int = Field(..., ge=0)
    size_label: str = Field(default="", description='Human-readable size, e.g. "1.5 KB"')
