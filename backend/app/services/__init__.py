"""Business logic services"""

from backend.app.services.candidate_service import CandidateService
from backend.app.services.candidate_validator import validate_candidate_data

__all__ = ['CandidateService', 'validate_candidate_data']
