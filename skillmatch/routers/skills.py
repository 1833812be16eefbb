"""Skills API router for the master skills catalogue."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from skillmatch.database import get_db
from skillmatch.models import PersonnelSkill, ProjectRequiredSkill, Skill
from skillmatch.schemas.skill import SkillCreate, SkillResponse, SkillUpdate

router = APIRouter(prefix="/api/v1/skills", tags=["skills"])
logger = logging.getLogger(__name__)


async def get_skill_or_404(skill_id: UUID, db: AsyncSession) -> Skill:
    result = await db.execute(select(Skill).where(Skill.id == skill_id))
    skill = result.scalar_one_or_none()

    if not skill:
        raise HTTPException(status_code=404, detail=f"Skill with ID {skill_id} not found")

    return skill


async def ensure_unique_name(name: str, db: AsyncSession, exclude_id: UUID | None = None) -> None:
    query = select(Skill.id).where(Skill.name == name)
    if exclude_id is not None:
        query = query.where(Skill.id != exclude_id)

    result = await db.execute(query)
    if result.first() is not None:
        raise HTTPException(status_code=409, detail=f"Skill '{name}' already exists")


@router.post("/", response_model=SkillResponse, status_code=201)
async def create_skill(
    request: SkillCreate,
    db: AsyncSession = Depends(get_db)
):
    """Create a new skill.

    Raises:
        HTTPException: 409 if a skill with the same name exists
    """
    await ensure_unique_name(request.name, db)

    skill = Skill(**request.model_dump())
    db.add(skill)
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race with a concurrent create of the same name
        await db.rollback()
        raise HTTPException(status_code=409, detail=f"Skill '{request.name}' already exists")
    await db.refresh(skill)

    logger.info(f"Created skill {skill.id}: {skill.name}")
    return skill


@router.get("/", response_model=list[SkillResponse])
async def list_skills(
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum number of records to return"),
    category: str | None = Query(None, description="Filter by category"),
    db: AsyncSession = Depends(get_db)
):
    """List all skills alphabetically with optional filtering and pagination.

    Args:
        skip: Number of records to skip (for pagination)
        limit: Maximum number of records to return (1-1000)
        category: Optional category filter
        db: Database session

    Returns:
        List of SkillResponse objects
    """
    query = select(Skill).order_by(Skill.name)

    if category:
        query = query.where(Skill.category == category)

    query = query.offset(skip).limit(limit)

    result = await db.execute(query)
    return result.scalars().all()


@router.get("/{skill_id}", response_model=SkillResponse)
async def get_skill(
    skill_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    """Get a single skill by ID.

    Raises:
        HTTPException: 404 if skill not found
    """
    return await get_skill_or_404(skill_id, db)


@router.patch("/{skill_id}", response_model=SkillResponse)
async def update_skill(
    skill_id: UUID,
    request: SkillUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Update a skill; omitted or null fields keep their values."""
    skill = await get_skill_or_404(skill_id, db)

    update_data = {
        field: value
        for field, value in request.model_dump(exclude_unset=True).items()
        if value is not None
    }
    if "name" in update_data and update_data["name"] != skill.name:
        await ensure_unique_name(update_data["name"], db, exclude_id=skill_id)

    for field, value in update_data.items():
        setattr(skill, field, value)

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=409, detail="Skill name already exists")
    await db.refresh(skill)
    return skill


@router.delete("/{skill_id}", status_code=204)
async def delete_skill(
    skill_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    """Delete a skill.

    Also removes every personnel assignment and project requirement that
    references it.

    Raises:
        HTTPException: 404 if skill not found
    """
    skill = await get_skill_or_404(skill_id, db)

    held = await db.execute(delete(PersonnelSkill).where(PersonnelSkill.skill_id == skill_id))
    required = await db.execute(
        delete(ProjectRequiredSkill).where(ProjectRequiredSkill.skill_id == skill_id)
    )
    await db.delete(skill)
    await db.commit()

    logger.info(
        f"Deleted skill {skill_id} with {held.rowcount} personnel assignments "
        f"and {required.rowcount} project requirements"
    )
