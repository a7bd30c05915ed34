"""Repositories for records owned by a candidate"""

from typing import Any, Dict, List, Type

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.database import Base
from backend.app.core.logging import get_logger
from backend.app.models.education import Education
from backend.app.models.resume import Resume
from backend.app.models.work_experience import WorkExperience
from backend.app.repositories.errors import storage_operation

logger = get_logger(__name__)


class DependentRepository:
    """Create and list rows that carry a candidate_id foreign key"""

    model: Type[Base]

    def __init__(self, session: AsyncSession):
        self.session = session

    @storage_operation
    async def create(self, data: Dict[str, Any]) -> Any:
        """
        Persist one record

        Args:
            data: Column values, candidate_id included

        Returns:
            Created record
        """
        record = self.model(**data)
        self.session.add(record)
        await self.session.commit()
        await self.session.refresh(record)

        logger.info(
            f"Created {self.model.__name__}: {record.id}",
            extra={"candidate_id": record.candidate_id}
        )
        return record

    @storage_operation
    async def list_by_candidate(self, candidate_id: int) -> List[Any]:
        """Records owned by a candidate, in creation order"""
        result = await self.session.execute(
            select(self.model)
            .where(self.model.candidate_id == candidate_id)
            .order_by(self.model.id)
        )
        return list(result.scalars().all())


class EducationRepository(DependentRepository):
    """Repository for education entries"""
    model = Education


class WorkExperienceRepository(DependentRepository):
    """Repository for work experience entries"""
    model = WorkExperience


class ResumeRepository(DependentRepository):
    """Repository for resume references"""
    model = Resume
