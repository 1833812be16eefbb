"""Database models for SkillMatch."""

from .base import Base
from .enums import ExperienceLevel, ProficiencyLevel, ProjectStatus
from .personnel import Personnel, PersonnelSkill
from .project import Project, ProjectRequiredSkill
from .skill import Skill

__all__ = [
    "Base",
    "ExperienceLevel",
    "ProficiencyLevel",
    "ProjectStatus",
    "Personnel",
    "PersonnelSkill",
    "Project",
    "ProjectRequiredSkill",
    "Skill",
]
