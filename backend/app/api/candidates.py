"""Candidate API endpoints"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.database import get_db
from backend.app.core.logging import get_logger
from backend.app.repositories.candidate_repository import CandidateRepository
from backend.app.repositories.dependent_repository import (
    EducationRepository,
    ResumeRepository,
    WorkExperienceRepository,
)
from backend.app.schemas.candidate import CandidateAggregate, CandidateCreateResponse
from backend.app.services.candidate_service import CandidateService

logger = get_logger(__name__)

router = APIRouter()


async def get_candidate_service(db: AsyncSession = Depends(get_db)) -> CandidateService:
    """Dependency to get candidate service"""
    return CandidateService(
        CandidateRepository(db),
        EducationRepository(db),
        WorkExperienceRepository(db),
        ResumeRepository(db),
    )


@router.post("", response_model=CandidateCreateResponse, status_code=status.HTTP_201_CREATED)
async def add_candidate(
    candidate_data: Dict[str, Any] = Body(...),
    candidate_service: CandidateService = Depends(get_candidate_service)
):
    """
    Add a candidate, or edit one when the body carries its id

    **Body (camelCase):**
    - firstName, lastName, email: required for new candidates
    - phone, address: optional
    - educations, workExperiences: optional lists
    - cv: optional `{filePath, fileType}`

    Dependent records are saved one by one after the candidate. If one of
    them fails, the records saved before it are kept.
    """
    candidate = await candidate_service.add_candidate(candidate_data)
    return CandidateCreateResponse(data=candidate)


@router.get("/{candidate_id}", response_model=CandidateAggregate)
async def get_candidate(
    candidate_id: int,
    candidate_service: CandidateService = Depends(get_candidate_service)
):
    """Get a candidate with its education, work experience and resumes"""
    return await candidate_service.get_candidate(candidate_id)
