"""Ordered enumerations shared by the models, schemas and matching engine."""

import enum


class ProficiencyLevel(str, enum.Enum):
    """Competence rating for a skill, Beginner < Intermediate < Advanced < Expert."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"

    @property
    def rank(self) -> int:
        return _PROFICIENCY_RANKS[self]

    def meets(self, minimum: "ProficiencyLevel") -> bool:
        """True when this level is at or above ``minimum``."""
        return self.rank >= minimum.rank

    @classmethod
    def at_least(cls, minimum: "ProficiencyLevel") -> list["ProficiencyLevel"]:
        """All levels ranked at or above ``minimum``, lowest first."""
        return [level for level in cls if level.meets(minimum)]


_PROFICIENCY_RANKS = {
    ProficiencyLevel.BEGINNER: 1,
    ProficiencyLevel.INTERMEDIATE: 2,
    ProficiencyLevel.ADVANCED: 3,
    ProficiencyLevel.EXPERT: 4,
}


class ExperienceLevel(str, enum.Enum):
    """Seniority of a person, Junior < Mid-Level < Senior."""

    JUNIOR = "Junior"
    MID_LEVEL = "Mid-Level"
    SENIOR = "Senior"

    @property
    def rank(self) -> int:
        return _EXPERIENCE_RANKS[self]


_EXPERIENCE_RANKS = {
    ExperienceLevel.JUNIOR: 1,
    ExperienceLevel.MID_LEVEL: 2,
    ExperienceLevel.SENIOR: 3,
}


class ProjectStatus(str, enum.Enum):
    """Lifecycle status of a project."""

    PLANNING = "Planning"
    ACTIVE = "Active"
    COMPLETED = "Completed"
    ON_HOLD = "On Hold"
    CANCELLED = "Cancelled"
    ARCHIVED = "Archived"


def enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    """Persist enums by their human-readable values rather than member names."""
    return [member.value for member in enum_cls]
