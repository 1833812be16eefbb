"""Matching-related Pydantic schemas.

Response rows for the skill-coverage matcher and the utilization
aggregator.
"""

from uuid import UUID

from pydantic import BaseModel, Field

from skillmatch.models.enums import ExperienceLevel


class PersonnelSummary(BaseModel):
    """Identity columns shared by matching and utilization rows."""

    id: UUID
    name: str
    email: str
    role: str | None = None
    experience_level: ExperienceLevel | None = None


class PersonnelMatch(PersonnelSummary):
    """A person who covers every required skill of a project."""

    matched_skills: str = Field(
        ...,
        description="Matched 'Skill:Level' pairs, comma-separated, alphabetical by skill",
    )
    match_percentage: int = Field(..., ge=0, le=100)


class PersonnelUtilization(PersonnelSummary):
    """Per-person count of exactly-covered projects, by status."""

    project_count: int = Field(..., ge=0, description="Covered projects of any status")
    active_project_count: int = Field(..., ge=0)
    planning_project_count: int = Field(..., ge=0)
    completed_project_count: int = Field(..., ge=0)
    utilization_percentage: int = Field(..., ge=0, le=100)
