"""Work experience model"""

from sqlalchemy import Column, String, Integer, Date, ForeignKey
from sqlalchemy.orm import relationship
from backend.app.core.database import Base


class WorkExperience(Base):
    """Work experience entry owned by a candidate"""

    __tablename__ = "work_experiences"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company = Column(String(100), nullable=False)
    position = Column(String(100), nullable=False)
    description = Column(String(200), nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    candidate_id = Column(Integer, ForeignKey("candidates.id"), nullable=False, index=True)

    candidate = relationship("Candidate", back_populates="work_experiences")

    def __repr__(self):
        return f"<WorkExperience(id={self.id}, candidate_id={self.candidate_id}, company={self.company})>"
