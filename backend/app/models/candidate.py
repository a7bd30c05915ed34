"""Candidate model"""

from typing import Any, Dict

from sqlalchemy import Column, String, Integer
from sqlalchemy.orm import relationship
from backend.app.core.database import Base
from backend.app.models.base import TimestampMixin


class Candidate(Base, TimestampMixin):
    """Candidate model owning education, work experience and resume records"""

    __tablename__ = "candidates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    phone = Column(String(15), nullable=True)
    address = Column(String(100), nullable=True)

    # Relationships
    educations = relationship(
        "Education",
        back_populates="candidate",
        cascade="all, delete-orphan",
        order_by="Education.id"
    )
    work_experiences = relationship(
        "WorkExperience",
        back_populates="candidate",
        cascade="all, delete-orphan",
        order_by="WorkExperience.id"
    )
    resumes = relationship(
        "Resume",
        back_populates="candidate",
        cascade="all, delete-orphan",
        order_by="Resume.id"
    )

    def to_dict(self) -> Dict[str, Any]:
        """Column values only; never touches the relationship collections"""
        return {column.name: getattr(self, column.name) for column in self.__table__.columns}

    def __repr__(self):
        return f"<Candidate(id={self.id}, email={self.email})>"
