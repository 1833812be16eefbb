"""Shared fixtures: a fresh SQLite database per test and an API client."""

import os

# Must be set before skillmatch.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from main import app
from skillmatch.database import build_engine, get_db, get_engine, init_db
from skillmatch.models import (
    Personnel,
    PersonnelSkill,
    Project,
    ProjectRequiredSkill,
    Skill,
)
from skillmatch.models.enums import ExperienceLevel, ProficiencyLevel, ProjectStatus


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(engine, session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_engine] = lambda: engine
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def add_skill(db: AsyncSession, name: str, category: str | None = None) -> Skill:
    skill = Skill(name=name, category=category)
    db.add(skill)
    await db.commit()
    return skill


async def add_person(
    db: AsyncSession,
    name: str,
    experience_level: ExperienceLevel | None = None,
    **kwargs,
) -> Personnel:
    email = kwargs.pop("email", f"{name.lower().replace(' ', '.')}@example.com")
    person = Personnel(name=name, email=email, experience_level=experience_level, **kwargs)
    db.add(person)
    await db.commit()
    return person


async def add_project(
    db: AsyncSession,
    name: str,
    status: ProjectStatus = ProjectStatus.PLANNING,
) -> Project:
    project = Project(name=name, status=status)
    db.add(project)
    await db.commit()
    return project


async def grant(db: AsyncSession, person: Personnel, skill: Skill, level: ProficiencyLevel) -> None:
    db.add(PersonnelSkill(personnel_id=person.id, skill_id=skill.id, proficiency_level=level))
    await db.commit()


async def require(db: AsyncSession, project: Project, skill: Skill, minimum: ProficiencyLevel) -> None:
    db.add(
        ProjectRequiredSkill(
            project_id=project.id,
            skill_id=skill.id,
            minimum_proficiency_level=minimum,
        )
    )
    await db.commit()
