"""Database models"""

from backend.app.models.base import TimestampMixin
from backend.app.models.candidate import Candidate
from backend.app.models.education import Education
from backend.app.models.work_experience import WorkExperience
from backend.app.models.resume import Resume

__all__ = [
    "TimestampMixin",
    "Candidate",
    "Education",
    "WorkExperience",
    "Resume",
]
