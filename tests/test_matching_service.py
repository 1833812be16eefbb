"""Tests for the matching engine against a real database."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from skillmatch.models.enums import ExperienceLevel, ProficiencyLevel, ProjectStatus
from skillmatch.services.matching import (
    match_personnel_for_project,
    personnel_utilization,
    satisfies,
    search_personnel,
)
from tests.conftest import add_person, add_project, add_skill, grant, require

BEGINNER = ProficiencyLevel.BEGINNER
INTERMEDIATE = ProficiencyLevel.INTERMEDIATE
ADVANCED = ProficiencyLevel.ADVANCED
EXPERT = ProficiencyLevel.EXPERT


async def seed_p1(db):
    """P1 requires {A: Intermediate, B: Beginner}; X covers it, Y and Z don't."""
    skill_a = await add_skill(db, "SkillA")
    skill_b = await add_skill(db, "SkillB")
    p1 = await add_project(db, "P1", ProjectStatus.ACTIVE)
    await require(db, p1, skill_a, INTERMEDIATE)
    await require(db, p1, skill_b, BEGINNER)

    x = await add_person(db, "X", ExperienceLevel.MID_LEVEL)
    await grant(db, x, skill_a, ADVANCED)
    await grant(db, x, skill_b, BEGINNER)

    y = await add_person(db, "Y", ExperienceLevel.SENIOR)
    await grant(db, y, skill_a, ADVANCED)

    z = await add_person(db, "Z", ExperienceLevel.SENIOR)
    await grant(db, z, skill_a, BEGINNER)
    await grant(db, z, skill_b, EXPERT)

    return p1, skill_a, skill_b, x, y, z


class TestMatchPersonnelForProject:
    """Tests for the single-project skill-coverage matcher."""

    async def test_only_full_coverage_qualifies(self, db):
        p1, _, _, x, _, _ = await seed_p1(db)

        matches = await match_personnel_for_project(db, p1.id)

        assert [m.id for m in matches] == [x.id]
        assert matches[0].matched_skills == "SkillA:Advanced, SkillB:Beginner"
        assert matches[0].match_percentage == 100

    async def test_project_without_requirements_matches_nobody(self, db):
        skill = await add_skill(db, "Python")
        person = await add_person(db, "Ada")
        await grant(db, person, skill, EXPERT)
        project = await add_project(db, "Empty")

        assert await match_personnel_for_project(db, project.id) == []

    async def test_unknown_project_is_empty_not_error(self, db):
        await seed_p1(db)
        assert await match_personnel_for_project(db, uuid4()) == []

    async def test_no_personnel(self, db):
        skill = await add_skill(db, "Python")
        project = await add_project(db, "Lonely")
        await require(db, project, skill, BEGINNER)

        assert await match_personnel_for_project(db, project.id) == []

    async def test_ordered_by_experience_then_name(self, db):
        skill = await add_skill(db, "Python")
        project = await add_project(db, "Backend")
        await require(db, project, skill, BEGINNER)

        people = [
            ("Bob", ExperienceLevel.JUNIOR),
            ("Carol", ExperienceLevel.SENIOR),
            ("Dan", None),
            ("Alice", ExperienceLevel.SENIOR),
            ("Eve", ExperienceLevel.MID_LEVEL),
        ]
        for name, level in people:
            person = await add_person(db, name, level)
            await grant(db, person, skill, INTERMEDIATE)

        matches = await match_personnel_for_project(db, project.id)

        assert [m.name for m in matches] == ["Alice", "Carol", "Eve", "Bob", "Dan"]

    async def test_matched_skills_only_lists_required_skills(self, db):
        python = await add_skill(db, "Python")
        docker = await add_skill(db, "Docker")
        cobol = await add_skill(db, "COBOL")
        project = await add_project(db, "Platform")
        await require(db, project, python, ADVANCED)
        await require(db, project, docker, BEGINNER)

        person = await add_person(db, "Grace")
        await grant(db, person, python, EXPERT)
        await grant(db, person, docker, INTERMEDIATE)
        await grant(db, person, cobol, EXPERT)

        [match] = await match_personnel_for_project(db, project.id)
        assert match.matched_skills == "Docker:Intermediate, Python:Expert"


class TestSatisfies:
    """Tests for the per-pair coverage predicate."""

    async def test_agrees_with_matcher(self, db):
        p1, _, _, x, y, z = await seed_p1(db)

        assert await satisfies(db, x.id, p1.id)
        assert not await satisfies(db, y.id, p1.id)
        assert not await satisfies(db, z.id, p1.id)

    async def test_empty_project(self, db):
        person = await add_person(db, "Ada")
        project = await add_project(db, "Empty")
        assert not await satisfies(db, person.id, project.id)


class TestSearchPersonnel:
    """Tests for the proficiency-filtered personnel search."""

    async def test_no_filters_returns_everyone_newest_first(self, db):
        now = datetime.now(timezone.utc)
        oldest = await add_person(db, "Oldest", created_at=now - timedelta(days=2))
        newest = await add_person(db, "Newest", created_at=now)
        middle = await add_person(db, "Middle", created_at=now - timedelta(days=1))

        results = await search_personnel(db)

        assert [p.id for p in results] == [newest.id, middle.id, oldest.id]

    async def test_skill_without_minimum_accepts_any_proficiency(self, db):
        skill = await add_skill(db, "Python")
        other = await add_skill(db, "Go")
        novice = await add_person(db, "Novice")
        await grant(db, novice, skill, BEGINNER)
        gopher = await add_person(db, "Gopher")
        await grant(db, gopher, other, EXPERT)

        results = await search_personnel(db, skill_id=skill.id)

        assert [p.id for p in results] == [novice.id]

    async def test_minimum_proficiency_excludes_lower_levels(self, db):
        skill = await add_skill(db, "Python")
        intermediate = await add_person(db, "Mid")
        await grant(db, intermediate, skill, INTERMEDIATE)
        advanced = await add_person(db, "Adv")
        await grant(db, advanced, skill, ADVANCED)
        expert = await add_person(db, "Exp")
        await grant(db, expert, skill, EXPERT)

        results = await search_personnel(db, skill_id=skill.id, min_proficiency=ADVANCED)

        assert {p.id for p in results} == {advanced.id, expert.id}

    async def test_experience_level_is_anded_with_skill_filter(self, db):
        skill = await add_skill(db, "Python")
        senior = await add_person(db, "Senior Dev", ExperienceLevel.SENIOR)
        await grant(db, senior, skill, EXPERT)
        junior = await add_person(db, "Junior Dev", ExperienceLevel.JUNIOR)
        await grant(db, junior, skill, EXPERT)
        await add_person(db, "Senior Without Skill", ExperienceLevel.SENIOR)

        results = await search_personnel(
            db,
            experience_level=ExperienceLevel.SENIOR,
            skill_id=skill.id,
            min_proficiency=INTERMEDIATE,
        )

        assert [p.id for p in results] == [senior.id]

    async def test_minimum_without_skill_is_ignored(self, db):
        await add_person(db, "A")
        await add_person(db, "B")

        results = await search_personnel(db, min_proficiency=EXPERT)

        assert len(results) == 2


class TestPersonnelUtilization:
    """Tests for the utilization aggregator."""

    async def test_counts_match_single_project_matcher(self, db):
        python = await add_skill(db, "Python")
        sql = await add_skill(db, "SQL")

        projects = []
        for name, status, minimum in [
            ("Active One", ProjectStatus.ACTIVE, BEGINNER),
            ("Active Two", ProjectStatus.ACTIVE, ADVANCED),
            ("Planned", ProjectStatus.PLANNING, INTERMEDIATE),
            ("Done", ProjectStatus.COMPLETED, BEGINNER),
            ("Paused", ProjectStatus.ON_HOLD, BEGINNER),
        ]:
            project = await add_project(db, name, status)
            await require(db, project, python, minimum)
            projects.append(project)
        await require(db, projects[3], sql, BEGINNER)
        await add_project(db, "No Requirements", ProjectStatus.ACTIVE)

        ada = await add_person(db, "Ada")
        await grant(db, ada, python, INTERMEDIATE)
        await grant(db, ada, sql, BEGINNER)
        bob = await add_person(db, "Bob")

        rows = {row.id: row for row in await personnel_utilization(db)}

        ada_row = rows[ada.id]
        assert ada_row.project_count == 4
        assert ada_row.active_project_count == 1
        assert ada_row.planning_project_count == 1
        assert ada_row.completed_project_count == 1
        assert ada_row.utilization_percentage == 25

        matched = 0
        for project in projects:
            if ada.id in [m.id for m in await match_personnel_for_project(db, project.id)]:
                matched += 1
        assert matched == ada_row.project_count

        bob_row = rows[bob.id]
        assert bob_row.project_count == 0
        assert bob_row.utilization_percentage == 0

    async def test_status_buckets_sum_to_project_count(self, db):
        skill = await add_skill(db, "Python")
        for i, status in enumerate([ProjectStatus.ACTIVE, ProjectStatus.PLANNING, ProjectStatus.COMPLETED]):
            project = await add_project(db, f"Project {i}", status)
            await require(db, project, skill, BEGINNER)
        person = await add_person(db, "Ada")
        await grant(db, person, skill, BEGINNER)

        [row] = await personnel_utilization(db)

        assert (
            row.active_project_count + row.planning_project_count + row.completed_project_count
            == row.project_count
            == 3
        )

    async def test_utilization_saturates_at_four_active_projects(self, db):
        skill = await add_skill(db, "Python")
        for i in range(5):
            project = await add_project(db, f"Active {i}", ProjectStatus.ACTIVE)
            await require(db, project, skill, BEGINNER)
        person = await add_person(db, "Busy")
        await grant(db, person, skill, EXPERT)

        [row] = await personnel_utilization(db)

        assert row.active_project_count == 5
        assert row.utilization_percentage == 100

    async def test_ordered_by_project_count_then_name(self, db):
        skill = await add_skill(db, "Python")
        for i in range(2):
            project = await add_project(db, f"P{i}", ProjectStatus.ACTIVE)
            await require(db, project, skill, ADVANCED)

        zed = await add_person(db, "Zed")
        await grant(db, zed, skill, EXPERT)
        await add_person(db, "Bea")
        await add_person(db, "Abe")

        rows = await personnel_utilization(db)

        assert [r.name for r in rows] == ["Zed", "Abe", "Bea"]
