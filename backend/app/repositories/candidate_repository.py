"""Candidate repository for database operations"""

from typing import Optional, Dict, Any
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from backend.app.models.candidate import Candidate
from backend.app.core.exceptions import NotFoundException
from backend.app.core.logging import get_logger
from backend.app.repositories.errors import (
    STORAGE_ERROR_MESSAGES,
    StorageErrorCode,
    storage_operation,
)

logger = get_logger(__name__)


class CandidateRepository:
    """Repository for candidate database operations"""

    def __init__(self, session: AsyncSession):
        """
        Initialize repository

        Args:
            session: Database session
        """
        self.session = session

    @storage_operation
    async def create(self, candidate_data: Dict[str, Any]) -> Candidate:
        """
        Create a new candidate

        Args:
            candidate_data: Dictionary with candidate column values

        Returns:
            Created candidate with its assigned id

        Raises:
            DuplicateException: If the email is already registered
        """
        candidate = Candidate(**candidate_data)
        self.session.add(candidate)
        await self.session.commit()
        await self.session.refresh(candidate)

        logger.info(f"Created candidate: {candidate.id}", extra={"candidate_id": candidate.id})
        return candidate

    @storage_operation
    async def update(self, candidate_id: int, update_data: Dict[str, Any]) -> Candidate:
        """
        Update candidate in place

        Args:
            candidate_id: Candidate id
            update_data: Dictionary with fields to update

        Returns:
            Updated candidate

        Raises:
            NotFoundException: If no candidate has this id
        """
        result = await self.session.execute(
            select(Candidate).where(Candidate.id == candidate_id)
        )
        candidate = result.scalar_one_or_none()

        if not candidate:
            raise NotFoundException(STORAGE_ERROR_MESSAGES[StorageErrorCode.NOT_FOUND])

        for key, value in update_data.items():
            if hasattr(candidate, key):
                setattr(candidate, key, value)

        await self.session.commit()
        await self.session.refresh(candidate)

        logger.info(f"Updated candidate: {candidate_id}", extra={"candidate_id": candidate_id})
        return candidate

    @storage_operation
    async def get_by_id(self, candidate_id: int) -> Optional[Candidate]:
        """
        Get candidate by id with its dependent records loaded

        Args:
            candidate_id: Candidate id

        Returns:
            Candidate if found, None otherwise
        """
        result = await self.session.execute(
            select(Candidate)
            .where(Candidate.id == candidate_id)
            .options(
                selectinload(Candidate.educations),
                selectinload(Candidate.work_experiences),
                selectinload(Candidate.resumes),
            )
            .execution_options(populate_existing=True)
        )
        candidate = result.scalar_one_or_none()

        if candidate:
            logger.debug(f"Found candidate: {candidate_id}")
        else:
            logger.debug(f"Candidate not found: {candidate_id}")

        return candidate

    @storage_operation
    async def get_by_email(self, email: str) -> Optional[Candidate]:
        """
        Get candidate by email

        Args:
            email: Candidate email

        Returns:
            Candidate if found, None otherwise
        """
        result = await self.session.execute(
            select(Candidate).where(Candidate.email == email)
        )
        return result.scalar_one_or_none()
