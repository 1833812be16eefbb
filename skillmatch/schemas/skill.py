"""Pydantic schemas for Skills API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class SkillCreate(BaseModel):
    """Schema for creating a single skill."""

    name: str = Field(..., min_length=1, max_length=255, description="Skill name (e.g., 'Python', 'Scrum')")
    category: str | None = Field(None, max_length=100, description="Skill category (e.g., 'language', 'management')")
    description: str | None = Field(None, description="Optional description or notes about the skill")


class SkillUpdate(BaseModel):
    """Schema for updating a skill (all fields optional)."""

    name: str | None = Field(None, min_length=1, max_length=255)
    category: str | None = Field(None, max_length=100)
    description: str | None = None


class SkillResponse(BaseModel):
    """Schema for skill response."""

    id: UUID
    name: str
    category: str | None
    description: str | None
    created_at: datetime
    updated_at: datetime

    class Config:
        """Pydantic config."""
        from_attributes = True
