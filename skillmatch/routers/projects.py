"""Project CRUD endpoints, including each project's required skills."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from skillmatch.database import get_db
from skillmatch.models import Project, ProjectRequiredSkill, Skill
from skillmatch.models.enums import ProjectStatus
from skillmatch.schemas.project import (
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
    RequirementCreate,
    RequirementResponse,
    RequirementUpdate,
    check_date_range,
)

router = APIRouter(prefix="/api/v1/projects", tags=["projects"])
logger = logging.getLogger(__name__)


async def get_project_or_404(project_id: UUID, db: AsyncSession) -> Project:
    result = await db.execute(select(Project).where(Project.id == project_id))
    project = result.scalar_one_or_none()

    if not project:
        raise HTTPException(status_code=404, detail="Project not found")

    return project


async def get_requirement(project_id: UUID, skill_id: UUID, db: AsyncSession) -> ProjectRequiredSkill | None:
    result = await db.execute(
        select(ProjectRequiredSkill).where(
            ProjectRequiredSkill.project_id == project_id,
            ProjectRequiredSkill.skill_id == skill_id,
        )
    )
    return result.scalar_one_or_none()


@router.post("/", response_model=ProjectResponse, status_code=201)
async def create_project(
    request: ProjectCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a new project (status defaults to Planning)."""
    project = Project(**request.model_dump())
    db.add(project)
    await db.commit()
    await db.refresh(project)

    logger.info(f"Created project {project.id}: {project.name}")
    return project


@router.get("/", response_model=list[ProjectResponse])
async def list_projects(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    status: ProjectStatus | None = Query(None, description="Filter by status"),
    db: AsyncSession = Depends(get_db),
):
    """List all projects with pagination, newest first."""
    query = select(Project).order_by(Project.created_at.desc())

    if status is not None:
        query = query.where(Project.status == status)

    result = await db.execute(query.offset(skip).limit(limit))
    return result.scalars().all()


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get a single project by ID."""
    return await get_project_or_404(project_id, db)


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: UUID,
    request: ProjectUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update an existing project; omitted or null fields keep their values."""
    project = await get_project_or_404(project_id, db)

    # Update only provided fields
    update_data = {
        field: value
        for field, value in request.model_dump(exclude_unset=True).items()
        if value is not None
    }

    try:
        check_date_range(
            update_data.get("start_date", project.start_date),
            update_data.get("end_date", project.end_date),
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    for field, value in update_data.items():
        setattr(project, field, value)

    await db.commit()
    await db.refresh(project)
    return project


@router.delete("/{project_id}", status_code=204)
async def delete_project(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Delete a project together with its required skills."""
    project = await get_project_or_404(project_id, db)

    await db.execute(
        delete(ProjectRequiredSkill).where(ProjectRequiredSkill.project_id == project_id)
    )
    await db.delete(project)
    await db.commit()

    logger.info(f"Deleted project {project_id}")


@router.get("/{project_id}/requirements", response_model=list[RequirementResponse])
async def list_requirements(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """List a project's required skills, alphabetically by skill name."""
    await get_project_or_404(project_id, db)

    result = await db.execute(
        select(
            ProjectRequiredSkill.skill_id,
            Skill.name,
            ProjectRequiredSkill.minimum_proficiency_level,
        )
        .join(Skill, Skill.id == ProjectRequiredSkill.skill_id)
        .where(ProjectRequiredSkill.project_id == project_id)
        .order_by(Skill.name)
    )
    return [
        RequirementResponse(skill_id=skill_id, skill_name=name, minimum_proficiency_level=minimum)
        for skill_id, name, minimum in result.all()
    ]


@router.post("/{project_id}/requirements", status_code=201)
async def add_requirement(
    project_id: UUID,
    request: RequirementCreate,
    db: AsyncSession = Depends(get_db),
):
    """Require a skill for a project at a minimum proficiency.

    Raises:
        HTTPException: 404 for unknown project or skill, 409 if already required
    """
    await get_project_or_404(project_id, db)

    skill = await db.execute(select(Skill.id).where(Skill.id == request.skill_id))
    if skill.first() is None:
        raise HTTPException(status_code=404, detail=f"Skill with ID {request.skill_id} not found")

    if await get_requirement(project_id, request.skill_id, db):
        raise HTTPException(status_code=409, detail="Skill is already required by this project")

    db.add(
        ProjectRequiredSkill(
            project_id=project_id,
            skill_id=request.skill_id,
            minimum_proficiency_level=request.minimum_proficiency_level,
        )
    )
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=409, detail="Skill is already required by this project")
    return {"created": True}


@router.patch("/{project_id}/requirements/{skill_id}")
async def update_requirement(
    project_id: UUID,
    skill_id: UUID,
    request: RequirementUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Change the minimum proficiency of an existing requirement."""
    requirement = await get_requirement(project_id, skill_id, db)
    if not requirement:
        raise HTTPException(status_code=404, detail="Requirement not found")

    requirement.minimum_proficiency_level = request.minimum_proficiency_level
    await db.commit()
    return {"updated": True}


@router.delete("/{project_id}/requirements/{skill_id}", status_code=204)
async def remove_requirement(
    project_id: UUID,
    skill_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Remove a required skill from a project."""
    requirement = await get_requirement(project_id, skill_id, db)
    if not requirement:
        raise HTTPException(status_code=404, detail="Requirement not found")

    await db.delete(requirement)
    await db.commit()
