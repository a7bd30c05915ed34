"""Candidate service orchestrating candidate and dependent record writes"""

from datetime import date
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from backend.app.repositories.candidate_repository import CandidateRepository
from backend.app.repositories.dependent_repository import (
    EducationRepository,
    ResumeRepository,
    WorkExperienceRepository,
)
from backend.app.schemas.candidate import (
    CandidateAggregate,
    EducationRecord,
    ResumeRecord,
    WorkExperienceRecord,
)
from backend.app.services.candidate_validator import (
    as_entry_list,
    as_mapping,
    has_cv,
    validate_candidate_data,
)
from backend.app.core.exceptions import NotFoundException, StorageException
from backend.app.core.logging import get_logger
from backend.app.repositories.errors import STORAGE_ERROR_MESSAGES, StorageErrorCode

logger = get_logger(__name__)

# Submission key -> candidate column
CANDIDATE_FIELDS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "email": "email",
    "phone": "phone",
    "address": "address",
}


def _to_date(value: Any) -> Optional[date]:
    """
    Parse a submitted YYYY-MM-DD date

    Edits reach this without validation, so an unparseable value surfaces
    as a StorageException carrying the parser's message.
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError) as e:
        raise StorageException(str(e)) from e


def candidate_fields(data: Mapping[str, Any], partial: bool = False) -> Dict[str, Any]:
    """
    Candidate column values from a submission

    Empty optional values are stored as None. With partial set, keys missing
    from the submission are left out so an update keeps their stored values.
    """
    return {
        column: data.get(key) or None
        for key, column in CANDIDATE_FIELDS.items()
        if not partial or key in data
    }


def education_fields(education: Any, candidate_id: int) -> Dict[str, Any]:
    education = as_mapping(education)
    return {
        "institution": education.get("institution"),
        "title": education.get("title"),
        "start_date": _to_date(education.get("startDate")),
        "end_date": _to_date(education.get("endDate")),
        "candidate_id": candidate_id,
    }


def work_experience_fields(experience: Any, candidate_id: int) -> Dict[str, Any]:
    experience = as_mapping(experience)
    return {
        "company": experience.get("company"),
        "position": experience.get("position"),
        "description": experience.get("description") or None,
        "start_date": _to_date(experience.get("startDate")),
        "end_date": _to_date(experience.get("endDate")),
        "candidate_id": candidate_id,
    }


def resume_fields(cv: Any, candidate_id: int) -> Dict[str, Any]:
    cv = as_mapping(cv)
    return {
        "file_path": cv.get("filePath"),
        "file_type": cv.get("fileType"),
        "candidate_id": candidate_id,
    }


class CandidateService:
    """Service for saving candidates together with their dependent records"""

    def __init__(
        self,
        candidate_repository: CandidateRepository,
        education_repository: EducationRepository,
        work_experience_repository: WorkExperienceRepository,
        resume_repository: ResumeRepository
    ):
        """
        Initialize candidate service

        Args:
            candidate_repository: Candidate repository
            education_repository: Education repository
            work_experience_repository: Work experience repository
            resume_repository: Resume repository
        """
        self.candidate_repo = candidate_repository
        self.education_repo = education_repository
        self.work_experience_repo = work_experience_repository
        self.resume_repo = resume_repository

    async def add_candidate(self, candidate_data: Mapping[str, Any]) -> CandidateAggregate:
        """
        Validate and persist a candidate submission

        Workflow:
        1. Validate the submission
        2. Create the candidate, or update it when the submission has an id
        3. Create each education entry
        4. Create each work experience entry
        5. Create the resume reference

        Every record is written on its own. A failure stops the sequence
        and propagates; records written before it are kept.

        Args:
            candidate_data: Submission with camelCase keys

        Returns:
            Candidate with the dependent records that were saved

        Raises:
            ValidationException: If the submission is invalid
            StorageException: If a write fails
        """
        validate_candidate_data(candidate_data)

        candidate_id = candidate_data.get("id")
        if candidate_id:
            candidate = await self.candidate_repo.update(
                candidate_id, candidate_fields(candidate_data, partial=True)
            )
        else:
            candidate = await self.candidate_repo.create(candidate_fields(candidate_data))

        aggregate = CandidateAggregate(**candidate.to_dict())
        logger.info(
            f"Saving dependent records for candidate: {aggregate.id}",
            extra={"candidate_id": aggregate.id}
        )

        steps: List[Callable[[Mapping[str, Any], CandidateAggregate], Awaitable[None]]] = [
            self._save_educations,
            self._save_work_experiences,
            self._save_resume,
        ]
        for step in steps:
            try:
                await step(candidate_data, aggregate)
            except Exception as e:
                logger.error(
                    f"Saving candidate {aggregate.id} stopped at {step.__name__}: {e}",
                    extra={"candidate_id": aggregate.id}
                )
                raise

        return aggregate

    async def _save_educations(
        self,
        candidate_data: Mapping[str, Any],
        aggregate: CandidateAggregate
    ) -> None:
        for education in as_entry_list(candidate_data.get("educations")):
            record = await self.education_repo.create(education_fields(education, aggregate.id))
            aggregate.educations.append(EducationRecord.model_validate(record))

    async def _save_work_experiences(
        self,
        candidate_data: Mapping[str, Any],
        aggregate: CandidateAggregate
    ) -> None:
        for experience in as_entry_list(candidate_data.get("workExperiences")):
            record = await self.work_experience_repo.create(
                work_experience_fields(experience, aggregate.id)
            )
            aggregate.work_experiences.append(WorkExperienceRecord.model_validate(record))

    async def _save_resume(
        self,
        candidate_data: Mapping[str, Any],
        aggregate: CandidateAggregate
    ) -> None:
        cv = candidate_data.get("cv")
        if not has_cv(cv):
            return
        record = await self.resume_repo.create(resume_fields(cv, aggregate.id))
        aggregate.resumes.append(ResumeRecord.model_validate(record))

    async def get_candidate(self, candidate_id: int) -> CandidateAggregate:
        """
        Get a candidate with all its dependent records

        Args:
            candidate_id: Candidate id

        Returns:
            Candidate aggregate

        Raises:
            NotFoundException: If the candidate does not exist
        """
        candidate = await self.candidate_repo.get_by_id(candidate_id)

        if not candidate:
            raise NotFoundException(STORAGE_ERROR_MESSAGES[StorageErrorCode.NOT_FOUND])

        return CandidateAggregate.model_validate(candidate)
