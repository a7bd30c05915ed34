"""Education model"""

from sqlalchemy import Column, String, Integer, Date, ForeignKey
from sqlalchemy.orm import relationship
from backend.app.core.database import Base


class Education(Base):
    """Education entry owned by a candidate"""

    __tablename__ = "educations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    institution = Column(String(100), nullable=False)
    title = Column(String(250), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)  # None while ongoing
    candidate_id = Column(Integer, ForeignKey("candidates.id"), nullable=False, index=True)

    candidate = relationship("Candidate", back_populates="educations")

    def __repr__(self):
        return f"<Education(id={self.id}, candidate_id={self.candidate_id}, institution={self.institution})>"
