"""Personnel and PersonnelSkill models."""

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Enum, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin
from .enums import ExperienceLevel, ProficiencyLevel, enum_values

# Shared by personnel_skills and project_required_skills so PostgreSQL
# creates a single enum type.
ProficiencyLevelType = Enum(
    ProficiencyLevel,
    name="proficiency_level_enum",
    values_callable=enum_values,
)


class Personnel(Base, TimestampMixin):
    """A person who can be staffed on projects."""

    __tablename__ = "personnel"

    # Primary Key - UUID
    id: Mapped[UUID] = mapped_column(
        primary_key=True,
        default=uuid4,
        nullable=False,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    role: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    experience_level: Mapped[Optional[ExperienceLevel]] = mapped_column(
        Enum(
            ExperienceLevel,
            name="experience_level_enum",
            values_callable=enum_values,
        ),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Personnel(name='{self.name}', email='{self.email}')>"


class PersonnelSkill(Base, TimestampMixin):
    """Skill held by a person at a given proficiency."""

    __tablename__ = "personnel_skills"
    __table_args__ = (
        UniqueConstraint("personnel_id", "skill_id", name="uq_personnel_skill"),
    )

    id: Mapped[UUID] = mapped_column(
        primary_key=True,
        default=uuid4,
        nullable=False,
    )

    personnel_id: Mapped[UUID] = mapped_column(
        ForeignKey("personnel.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    skill_id: Mapped[UUID] = mapped_column(
        ForeignKey("skills.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    proficiency_level: Mapped[ProficiencyLevel] = mapped_column(
        ProficiencyLevelType,
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<PersonnelSkill(personnel_id={self.personnel_id}, "
            f"skill_id={self.skill_id}, level='{self.proficiency_level.value}')>"
        )
