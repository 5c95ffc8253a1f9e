# =============================================================================
# core/models/institution.py - Partner Institution Schemas
# =============================================================================
# Two partner directories managed from the institutions screen:
# - Education centers (실습교육원): run the seminar part of the practicum
# - Practice institutions (실습기관): host the field placement
# =============================================================================

from pydantic import BaseModel, Field, field_validator


class EducationCenterCreate(BaseModel):
    """
    Schema for adding an education center.

    Example:
        {
            "center_name": "한빛실습교육원",
            "practice_type": "사회복지",
            "semester": "2025-1",
            "location": "서울",
            "seminar_day": "토요일"
        }
    """

    center_name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Name of the education center"
    )

    practice_type: str | None = Field(default=None, description="Practicum type offered")
    semester: str | None = Field(default=None, description="Semester the center runs")
    law_type: str | None = Field(default=None, description="Applicable law (old/new)")
    seminar_day: str | None = Field(default=None, description="Weekday of the seminar")
    seminar_count: str | None = Field(default=None, description="Number of seminar sessions")
    location: str | None = Field(default=None, description="Center location")
    practice_available_area: str | None = Field(
        default=None,
        description="Regions where a placement can be arranged"
    )
    website_url: str | None = Field(default=None, description="Center homepage")

    @field_validator("center_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Center name is required")
        return v


class EducationCenterUpdate(BaseModel):
    """Partial update of an education center."""

    center_name: str | None = None
    practice_type: str | None = None
    semester: str | None = None
    law_type: str | None = None
    seminar_day: str | None = None
    seminar_count: str | None = None
    location: str | None = None
    practice_available_area: str | None = None
    website_url: str | None = None


class PracticeInstitutionCreate(BaseModel):
    """Schema for adding a practice institution."""

    institution_name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Name of the host institution"
    )

    location: str | None = Field(default=None, description="Institution location")
    practice_area: str | None = Field(default=None, description="Field of practice")
    schedule_type: str | None = Field(default=None, description="Weekday/weekend schedule")
    cost: str | None = Field(default=None, description="Placement cost")

    @field_validator("institution_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Institution name is required")
        return v


class PracticeInstitutionUpdate(BaseModel):
    """Partial update of a practice institution."""

    institution_name: str | None = None
    location: str | None = None
    practice_area: str | None = None
    schedule_type: str | None = None
    cost: str | None = None
