"""Project and ProjectRequiredSkill models."""

from datetime import date
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Date, Enum, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin
from .enums import ProficiencyLevel, ProjectStatus, enum_values
from .personnel import ProficiencyLevelType


class Project(Base, TimestampMixin):
    """A project that personnel can be matched against."""

    __tablename__ = "projects"

    # Primary Key - UUID
    id: Mapped[UUID] = mapped_column(
        primary_key=True,
        default=uuid4,
        nullable=False,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Date Range
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    status: Mapped[ProjectStatus] = mapped_column(
        Enum(
            ProjectStatus,
            name="project_status_enum",
            values_callable=enum_values,
        ),
        nullable=False,
        default=ProjectStatus.PLANNING,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Project(name='{self.name}', status='{self.status.value}')>"


class ProjectRequiredSkill(Base, TimestampMixin):
    """Skill a project requires, with the minimum acceptable proficiency."""

    __tablename__ = "project_required_skills"
    __table_args__ = (
        UniqueConstraint("project_id", "skill_id", name="uq_project_required_skill"),
    )

    id: Mapped[UUID] = mapped_column(
        primary_key=True,
        default=uuid4,
        nullable=False,
    )

    project_id: Mapped[UUID] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    skill_id: Mapped[UUID] = mapped_column(
        ForeignKey("skills.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    minimum_proficiency_level: Mapped[ProficiencyLevel] = mapped_column(
        ProficiencyLevelType,
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<ProjectRequiredSkill(project_id={self.project_id}, "
            f"skill_id={self.skill_id}, minimum='{self.minimum_proficiency_level.value}')>"
        )
