"""Data access layer"""

from backend.app.repositories.candidate_repository import CandidateRepository
from backend.app.repositories.dependent_repository import (
    EducationRepository,
    ResumeRepository,
    WorkExperienceRepository,
)

__all__ = [
    'CandidateRepository',
    'EducationRepository',
    'WorkExperienceRepository',
    'ResumeRepository',
]
