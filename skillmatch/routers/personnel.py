"""Personnel CRUD endpoints, including the skills each person holds."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from skillmatch.database import get_db
from skillmatch.models import Personnel, PersonnelSkill, Skill
from skillmatch.schemas.personnel import (
    PersonnelCreate,
    PersonnelResponse,
    PersonnelSkillAssign,
    PersonnelSkillResponse,
    PersonnelSkillUpdate,
    PersonnelUpdate,
)

router = APIRouter(prefix="/api/v1/personnel", tags=["personnel"])
logger = logging.getLogger(__name__)


async def get_personnel_or_404(personnel_id: UUID, db: AsyncSession) -> Personnel:
    result = await db.execute(select(Personnel).where(Personnel.id == personnel_id))
    person = result.scalar_one_or_none()

    if not person:
        raise HTTPException(status_code=404, detail="Personnel not found")

    return person


async def get_assignment(personnel_id: UUID, skill_id: UUID, db: AsyncSession) -> PersonnelSkill | None:
    result = await db.execute(
        select(PersonnelSkill).where(
            PersonnelSkill.personnel_id == personnel_id,
            PersonnelSkill.skill_id == skill_id,
        )
    )
    return result.scalar_one_or_none()


async def ensure_unique_email(email: str, db: AsyncSession, exclude_id: UUID | None = None) -> None:
    query = select(Personnel.id).where(Personnel.email == email)
    if exclude_id is not None:
        query = query.where(Personnel.id != exclude_id)

    result = await db.execute(query)
    if result.first() is not None:
        raise HTTPException(status_code=409, detail="Email already exists")


@router.post("/", response_model=PersonnelResponse, status_code=201)
async def create_personnel(
    request: PersonnelCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a new personnel record (email must be unique)."""
    await ensure_unique_email(request.email, db)

    person = Personnel(**request.model_dump())
    db.add(person)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=409, detail="Email already exists")
    await db.refresh(person)

    logger.info(f"Created personnel {person.id}: {person.name}")
    return person


@router.get("/", response_model=list[PersonnelResponse])
async def list_personnel(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
):
    """List all personnel, newest first."""
    result = await db.execute(
        select(Personnel).order_by(Personnel.created_at.desc()).offset(skip).limit(limit)
    )
    return result.scalars().all()


@router.get("/{personnel_id}", response_model=PersonnelResponse)
async def get_personnel(
    personnel_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get a single personnel record by ID."""
    return await get_personnel_or_404(personnel_id, db)


@router.patch("/{personnel_id}", response_model=PersonnelResponse)
async def update_personnel(
    personnel_id: UUID,
    request: PersonnelUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update a personnel record; omitted or null fields keep their values."""
    person = await get_personnel_or_404(personnel_id, db)

    # Update only provided fields
    update_data = {
        field: value
        for field, value in request.model_dump(exclude_unset=True).items()
        if value is not None
    }
    if "email" in update_data and update_data["email"] != person.email:
        await ensure_unique_email(update_data["email"], db, exclude_id=personnel_id)

    for field, value in update_data.items():
        setattr(person, field, value)

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=409, detail="Email already exists")
    await db.refresh(person)
    return person


@router.delete("/{personnel_id}", status_code=204)
async def delete_personnel(
    personnel_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Delete a personnel record together with their skill assignments."""
    person = await get_personnel_or_404(personnel_id, db)

    await db.execute(delete(PersonnelSkill).where(PersonnelSkill.personnel_id == personnel_id))
    await db.delete(person)
    await db.commit()

    logger.info(f"Deleted personnel {personnel_id}")


@router.get("/{personnel_id}/skills", response_model=list[PersonnelSkillResponse])
async def list_personnel_skills(
    personnel_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """List the skills a person holds, alphabetically by skill name."""
    await get_personnel_or_404(personnel_id, db)

    result = await db.execute(
        select(PersonnelSkill.skill_id, Skill.name, PersonnelSkill.proficiency_level)
        .join(Skill, Skill.id == PersonnelSkill.skill_id)
        .where(PersonnelSkill.personnel_id == personnel_id)
        .order_by(Skill.name)
    )
    return [
        PersonnelSkillResponse(skill_id=skill_id, skill_name=name, proficiency_level=level)
        for skill_id, name, level in result.all()
    ]


@router.post("/{personnel_id}/skills", status_code=201)
async def assign_skill(
    personnel_id: UUID,
    request: PersonnelSkillAssign,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Assign a skill to a person, or re-rate it if already assigned.

    Returns:
        {"created": true} with 201, or {"updated": true} with 200
    """
    await get_personnel_or_404(personnel_id, db)

    skill = await db.execute(select(Skill.id).where(Skill.id == request.skill_id))
    if skill.first() is None:
        raise HTTPException(status_code=404, detail=f"Skill with ID {request.skill_id} not found")

    assignment = await get_assignment(personnel_id, request.skill_id, db)
    if not assignment:
        db.add(
            PersonnelSkill(
                personnel_id=personnel_id,
                skill_id=request.skill_id,
                proficiency_level=request.proficiency_level,
            )
        )
        try:
            await db.commit()
            return {"created": True}
        except IntegrityError:
            # A concurrent request created the assignment first; re-rate it instead
            await db.rollback()
            assignment = await get_assignment(personnel_id, request.skill_id, db)
            if not assignment:
                raise

    assignment.proficiency_level = request.proficiency_level
    await db.commit()
    response.status_code = 200
    return {"updated": True}


@router.patch("/{personnel_id}/skills/{skill_id}")
async def update_personnel_skill(
    personnel_id: UUID,
    skill_id: UUID,
    request: PersonnelSkillUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Change the proficiency of an existing assignment."""
    assignment = await get_assignment(personnel_id, skill_id, db)
    if not assignment:
        raise HTTPException(status_code=404, detail="Assignment not found")

    assignment.proficiency_level = request.proficiency_level
    await db.commit()
    return {"updated": True}


@router.delete("/{personnel_id}/skills/{skill_id}", status_code=204)
async def remove_personnel_skill(
    personnel_id: UUID,
    skill_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Remove a skill from a person."""
    assignment = await get_assignment(personnel_id, skill_id, db)
    if not assignment:
        raise HTTPException(status_code=404, detail="Assignment not found")

    await db.delete(assignment)
    await db.commit()
