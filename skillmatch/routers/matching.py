"""Matching API router.

Exposes the skill-coverage matcher, the proficiency-filtered personnel
search and the utilization aggregate. Unknown ids produce empty results
rather than 404s; invalid enum values are rejected with 422 before any
query runs.
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from skillmatch.config import settings
from skillmatch.database import get_db
from skillmatch.models.enums import ExperienceLevel, ProficiencyLevel
from skillmatch.schemas.matching import PersonnelMatch, PersonnelUtilization
from skillmatch.schemas.personnel import PersonnelResponse
from skillmatch.services.matching import (
    match_personnel_for_project,
    personnel_utilization,
    search_personnel,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/matching", tags=["matching"])

T = TypeVar("T")


async def run_with_budget(operation: str, query: Awaitable[T]) -> T:
    """Await an engine query under the configured time budget.

    Raises:
        HTTPException 504: Budget exceeded
        HTTPException 500: Storage failure
    """
    try:
        async with asyncio.timeout(settings.matching_timeout_seconds):
            return await query
    except asyncio.TimeoutError:
        logger.error(f"Timed out after {settings.matching_timeout_seconds}s: {operation}")
        raise HTTPException(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            detail=f"Timed out while trying to {operation}"
        )
    except SQLAlchemyError as e:
        logger.error(f"Storage failure while trying to {operation}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to {operation}: {str(e)}"
        )


# Static paths are registered before /{project_id}
@router.get(
    "/search/personnel",
    response_model=list[PersonnelResponse],
    summary="Search personnel by experience and skill proficiency"
)
async def search(
    experience_level: ExperienceLevel | None = Query(None, description="Exact experience level"),
    skill_id: UUID | None = Query(None, description="Skill the person must hold"),
    min_proficiency: ProficiencyLevel | None = Query(
        None, description="Minimum proficiency on skill_id (ignored without it)"
    ),
    db: AsyncSession = Depends(get_db),
):
    """Return personnel matching every supplied filter, newest first."""
    return await run_with_budget(
        "search personnel",
        search_personnel(
            db,
            experience_level=experience_level,
            skill_id=skill_id,
            min_proficiency=min_proficiency,
        ),
    )


@router.get(
    "/utilization/personnel",
    response_model=list[PersonnelUtilization],
    summary="Per-person project coverage and utilization"
)
async def utilization(db: AsyncSession = Depends(get_db)):
    """Return covered-project counts per person, busiest first."""
    return await run_with_budget("compute personnel utilization", personnel_utilization(db))


@router.get(
    "/{project_id}",
    response_model=list[PersonnelMatch],
    summary="Personnel covering every required skill of a project"
)
async def match_project(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Return personnel who meet all of a project's skill minimums.

    Empty when the project is unknown, has no requirements, or nobody
    covers them.
    """
    return await run_with_budget(
        f"match personnel for project {project_id}",
        match_personnel_for_project(db, project_id),
    )
