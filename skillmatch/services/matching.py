"""Skill-coverage matching engine.

This module answers three read-only questions over the current storage
state: which personnel cover every required skill of a project, which
personnel pass a set of search filters, and how many projects each person
covers (utilization).

"Covers" has exactly one definition, ``covers()``: a person covers a project
when the project has at least one requirement and the person holds every
required skill at or above its minimum proficiency. Partial coverage counts
for nothing. ``covers()`` is the shared predicate: the single-project
matcher and the utilization aggregator evaluate it over rows they load in
bulk, and ``satisfies()`` is the single (person, project) lookup built on it.

Every function takes the database session explicitly and keeps no state
between calls.
"""

import logging
from collections import defaultdict
from collections.abc import Mapping
from uuid import UUID

from sqlalchemy import and_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from skillmatch.models import (
    Personnel,
    PersonnelSkill,
    Project,
    ProjectRequiredSkill,
    Skill,
)
from skillmatch.models.enums import (
    ExperienceLevel,
    ProficiencyLevel,
    ProjectStatus,
)
from skillmatch.schemas.matching import PersonnelMatch, PersonnelUtilization

logger = logging.getLogger(__name__)

# Only full-coverage matches exist, so every reported match is 100%.
FULL_MATCH_PERCENTAGE = 100

# Linear utilization proxy: each covered Active project adds 25%, capped at 100%.
UTILIZATION_PER_ACTIVE_PROJECT = 25
MAX_UTILIZATION_PERCENTAGE = 100

SkillLevels = Mapping[UUID, ProficiencyLevel]


def covers(held: SkillLevels, required: SkillLevels) -> bool:
    """Check whether held skills satisfy every requirement.

    Args:
        held: skill_id -> proficiency the person holds
        required: skill_id -> minimum proficiency the project requires

    Returns:
        False when ``required`` is empty; otherwise True iff every required
        skill is held at a proficiency ranked at or above its minimum.
    """
    if not required:
        return False

    for skill_id, minimum in required.items():
        level = held.get(skill_id)
        if level is None or not level.meets(minimum):
            return False
    return True


def utilization_percentage(active_project_count: int) -> int:
    return min(
        MAX_UTILIZATION_PERCENTAGE,
        active_project_count * UTILIZATION_PER_ACTIVE_PROJECT,
    )


def experience_rank(level: ExperienceLevel | None) -> int:
    """Rank used for ordering; personnel without a level sort last."""
    return level.rank if level is not None else 0


def format_matched_skills(pairs: list[tuple[str, ProficiencyLevel]]) -> str:
    """Render (skill name, level) pairs as "A:Expert, B:Beginner" by skill name."""
    return ", ".join(
        f"{name}:{level.value}" for name, level in sorted(pairs, key=lambda p: p[0])
    )


async def load_requirements(db: AsyncSession, project_id: UUID) -> dict[UUID, ProficiencyLevel]:
    """Required skills of one project; empty for unknown projects."""
    result = await db.execute(
        select(
            ProjectRequiredSkill.skill_id,
            ProjectRequiredSkill.minimum_proficiency_level,
        ).where(ProjectRequiredSkill.project_id == project_id)
    )
    return {skill_id: minimum for skill_id, minimum in result.all()}


async def load_held_skills(db: AsyncSession, personnel_id: UUID) -> dict[UUID, ProficiencyLevel]:
    """Skills held by one person; empty for unknown personnel."""
    result = await db.execute(
        select(
            PersonnelSkill.skill_id,
            PersonnelSkill.proficiency_level,
        ).where(PersonnelSkill.personnel_id == personnel_id)
    )
    return {skill_id: level for skill_id, level in result.all()}


async def satisfies(db: AsyncSession, personnel_id: UUID, project_id: UUID) -> bool:
    """Whether one person exactly covers one project."""
    required = await load_requirements(db, project_id)
    if not required:
        return False

    held = await load_held_skills(db, personnel_id)
    return covers(held, required)


async def match_personnel_for_project(
    db: AsyncSession,
    project_id: UUID,
) -> list[PersonnelMatch]:
    """Find personnel who cover every required skill of a project.

    Workflow:
    1. Load the project's requirements; none (or unknown project) -> []
    2. Load personnel skills restricted to the required skills
    3. Keep personnel passing ``covers()`` (the bulk form of ``satisfies()``)
    4. Order by experience level (Senior first), then name

    Args:
        project_id: UUID of the project
        db: Database session

    Returns:
        Ordered list of PersonnelMatch rows (may be empty)

    Raises:
        SQLAlchemyError: On storage failures
    """
    try:
        required = await load_requirements(db, project_id)
        if not required:
            logger.info(f"Project {project_id} has no required skills; nobody matches")
            return []

        result = await db.execute(
            select(
                Personnel,
                Skill.name,
                PersonnelSkill.skill_id,
                PersonnelSkill.proficiency_level,
            )
            .join(PersonnelSkill, PersonnelSkill.personnel_id == Personnel.id)
            .join(Skill, Skill.id == PersonnelSkill.skill_id)
            .where(PersonnelSkill.skill_id.in_(list(required)))
        )

        people: dict[UUID, Personnel] = {}
        held: dict[UUID, dict[UUID, ProficiencyLevel]] = defaultdict(dict)
        named: dict[UUID, list[tuple[str, ProficiencyLevel]]] = defaultdict(list)
        for person, skill_name, skill_id, level in result.all():
            people[person.id] = person
            held[person.id][skill_id] = level
            named[person.id].append((skill_name, level))

        matches = [
            PersonnelMatch(
                id=person.id,
                name=person.name,
                email=person.email,
                role=person.role,
                experience_level=person.experience_level,
                matched_skills=format_matched_skills(named[person_id]),
                match_percentage=FULL_MATCH_PERCENTAGE,
            )
            for person_id, person in people.items()
            if covers(held[person_id], required)
        ]
        matches.sort(key=lambda m: (-experience_rank(m.experience_level), m.name))

        logger.info(
            f"Project {project_id}: {len(matches)} of {len(people)} candidates "
            f"cover all {len(required)} required skills"
        )
        return matches

    except SQLAlchemyError as e:
        logger.error(f"Failed to match personnel for project {project_id}: {e}")
        raise


async def search_personnel(
    db: AsyncSession,
    experience_level: ExperienceLevel | None = None,
    skill_id: UUID | None = None,
    min_proficiency: ProficiencyLevel | None = None,
) -> list[Personnel]:
    """Filter personnel by experience level and/or a held skill.

    All supplied filters must hold. ``min_proficiency`` only applies together
    with ``skill_id``; without it any proficiency on the skill qualifies.
    Results are ordered newest first.
    """
    stmt = select(Personnel)

    if skill_id is not None:
        conditions = [
            PersonnelSkill.personnel_id == Personnel.id,
            PersonnelSkill.skill_id == skill_id,
        ]
        if min_proficiency is not None:
            conditions.append(
                PersonnelSkill.proficiency_level.in_(ProficiencyLevel.at_least(min_proficiency))
            )
        stmt = stmt.join(PersonnelSkill, and_(*conditions))

    if experience_level is not None:
        stmt = stmt.where(Personnel.experience_level == experience_level)

    stmt = stmt.order_by(Personnel.created_at.desc())

    try:
        result = await db.execute(stmt)
        return list(result.scalars().all())
    except SQLAlchemyError as e:
        logger.error(f"Personnel search failed: {e}")
        raise


async def personnel_utilization(db: AsyncSession) -> list[PersonnelUtilization]:
    """Count, for every person, the projects they exactly cover.

    Projects without requirements are never covered. Only the Active,
    Planning and Completed statuses get their own counters; projects in any
    other status still count towards ``project_count``.

    Returns:
        One row per person, ordered by project_count desc then name
    """
    try:
        people = (await db.execute(select(Personnel))).scalars().all()

        requirement_rows = await db.execute(
            select(
                ProjectRequiredSkill.project_id,
                ProjectRequiredSkill.skill_id,
                ProjectRequiredSkill.minimum_proficiency_level,
                Project.status,
            ).join(Project, Project.id == ProjectRequiredSkill.project_id)
        )
        requirements: dict[UUID, dict[UUID, ProficiencyLevel]] = defaultdict(dict)
        statuses: dict[UUID, ProjectStatus] = {}
        for project_id, skill_id, minimum, status in requirement_rows.all():
            requirements[project_id][skill_id] = minimum
            statuses[project_id] = status

        holding_rows = await db.execute(
            select(
                PersonnelSkill.personnel_id,
                PersonnelSkill.skill_id,
                PersonnelSkill.proficiency_level,
            )
        )
        holdings: dict[UUID, dict[UUID, ProficiencyLevel]] = defaultdict(dict)
        for personnel_id, skill_id, level in holding_rows.all():
            holdings[personnel_id][skill_id] = level

    except SQLAlchemyError as e:
        logger.error(f"Failed to load utilization data: {e}")
        raise

    rows = []
    for person in people:
        held = holdings.get(person.id, {})
        covered = [
            statuses[project_id]
            for project_id, required in requirements.items()
            if covers(held, required)
        ]
        active = covered.count(ProjectStatus.ACTIVE)
        rows.append(
            PersonnelUtilization(
                id=person.id,
                name=person.name,
                email=person.email,
                role=person.role,
                experience_level=person.experience_level,
                project_count=len(covered),
                active_project_count=active,
                planning_project_count=covered.count(ProjectStatus.PLANNING),
                completed_project_count=covered.count(ProjectStatus.COMPLETED),
                utilization_percentage=utilization_percentage(active),
            )
        )

    rows.sort(key=lambda r: (-r.project_count, r.name))
    logger.info(
        f"Computed utilization for {len(rows)} personnel across "
        f"{len(requirements)} projects with requirements"
    )
    return rows
