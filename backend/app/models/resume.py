"""Resume metadata model"""

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from backend.app.core.database import Base


class Resume(Base):
    """Reference to an uploaded resume file; the binary itself lives elsewhere"""

    __tablename__ = "resumes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    file_path = Column(String(500), nullable=False)
    file_type = Column(String(50), nullable=False)
    upload_date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    candidate_id = Column(Integer, ForeignKey("candidates.id"), nullable=False, index=True)

    candidate = relationship("Candidate", back_populates="resumes")

    def __repr__(self):
        return f"<Resume(id={self.id}, candidate_id={self.candidate_id}, file_type={self.file_type})>"
