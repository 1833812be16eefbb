"""Personnel request/response schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from skillmatch.models.enums import ExperienceLevel, ProficiencyLevel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class PersonnelBase(BaseModel):
    """Base schema for personnel."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    role: str | None = Field(None, max_length=255)
    experience_level: ExperienceLevel | None = None


class PersonnelCreate(PersonnelBase):
    """Schema for creating a personnel record."""

    pass


class PersonnelUpdate(BaseModel):
    """Schema for updating personnel (all fields optional)."""

    name: str | None = Field(None, min_length=1, max_length=255)
    email: str | None = Field(None, max_length=255, pattern=EMAIL_PATTERN)
    role: str | None = Field(None, max_length=255)
    experience_level: ExperienceLevel | None = None


class PersonnelResponse(PersonnelBase):
    """Schema for a raw personnel record."""

    id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PersonnelSkillAssign(BaseModel):
    """Schema for assigning (or re-rating) a skill held by a person."""

    skill_id: UUID
    proficiency_level: ProficiencyLevel


class PersonnelSkillUpdate(BaseModel):
    """Schema for changing the proficiency of an existing assignment."""

    proficiency_level: ProficiencyLevel


class PersonnelSkillResponse(BaseModel):
    """Skill held by a person, flattened with the skill name."""

    skill_id: UUID
    skill_name: str
    proficiency_level: ProficiencyLevel
