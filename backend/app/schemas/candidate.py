"""Candidate schemas"""

from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel


class CVInput(BaseModel):
    """Resume metadata supplied with a submission"""
    file_path: str = Field(..., alias="filePath", min_length=1)
    file_type: str = Field(..., alias="fileType", min_length=1)

    # No coercion: numbers or None in either field are rejected
    model_config = ConfigDict(strict=True, populate_by_name=True)


class RecordSchema(BaseModel):
    """Base for persisted records exposed with camelCase keys"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )


class EducationRecord(RecordSchema):
    """Saved education entry"""
    id: int
    institution: str
    title: str
    start_date: date
    end_date: Optional[date] = None
    candidate_id: int


class WorkExperienceRecord(RecordSchema):
    """Saved work experience entry"""
    id: int
    company: str
    position: str
    description: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    candidate_id: int


class ResumeRecord(RecordSchema):
    """Saved resume reference"""
    id: int
    file_path: str
    file_type: str
    upload_date: Optional[datetime] = None
    candidate_id: int


class CandidateAggregate(RecordSchema):
    """Candidate with the dependent records attached to it"""
    id: int
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    educations: List[EducationRecord] = Field(default_factory=list)
    work_experiences: List[WorkExperienceRecord] = Field(default_factory=list)
    resumes: List[ResumeRecord] = Field(default_factory=list)


class CandidateCreateResponse(BaseModel):
    """Response for candidate creation"""
    message: str = "Candidate added successfully"
    data: CandidateAggregate
