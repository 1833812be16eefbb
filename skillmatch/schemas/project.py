"""Project request/response schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from skillmatch.models.enums import ProficiencyLevel, ProjectStatus


def check_date_range(start_date: date | None, end_date: date | None) -> None:
    """Raise ValueError when a project would end before it starts."""
    if start_date and end_date and end_date < start_date:
        raise ValueError("end_date must not be earlier than start_date")


class ProjectBase(BaseModel):
    """Base schema for project."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    status: ProjectStatus = ProjectStatus.PLANNING


class ProjectCreate(ProjectBase):
    """Schema for creating a project."""

    @model_validator(mode="after")
    def validate_dates(self) -> "ProjectCreate":
        check_date_range(self.start_date, self.end_date)
        return self


class ProjectUpdate(BaseModel):
    """Schema for updating a project (all fields optional)."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    status: ProjectStatus | None = None

    @model_validator(mode="after")
    def validate_dates(self) -> "ProjectUpdate":
        check_date_range(self.start_date, self.end_date)
        return self


class ProjectResponse(ProjectBase):
    """Schema for project response."""

    id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class RequirementCreate(BaseModel):
    """Schema for adding a required skill to a project."""

    skill_id: UUID
    minimum_proficiency_level: ProficiencyLevel


class RequirementUpdate(BaseModel):
    """Schema for changing a requirement's minimum proficiency."""

    minimum_proficiency_level: ProficiencyLevel


class RequirementResponse(BaseModel):
    """Required skill of a project, flattened with the skill name."""

    skill_id: UUID
    skill_name: str
    minimum_proficiency_level: ProficiencyLevel
