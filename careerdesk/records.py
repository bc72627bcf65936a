"""
CareerDesk records — typed rows of the backend tables shown in list screens.

The backend owns persistence; these models only describe what a table row
looks like once fetched, so list screens can declare columns against real
field names. ``model_dump()`` output is what the table view receives.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import ClassVar, Optional

from pydantic import BaseModel, Field


class JobStatus(str, Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"
    ARCHIVED = "ARCHIVED"


class JobType(str, Enum):
    FULL_TIME = "FULL-TIME"
    PART_TIME = "PART-TIME"
    CONTRACT = "CONTRACT"
    INTERNSHIP = "INTERNSHIP"


class ApplicationStatus(str, Enum):
    APPLIED = "APPLIED"
    SHARED_WITH_COMPANY = "SHARED_WITH_COMPANY"
    SHORTLISTED = "SHORTLISTED"
    REJECTED = "REJECTED"
    INTERVIEW_SCHEDULED = "INTERVIEW_SCHEDULED"
    INTERVIEW_COMPLETED = "INTERVIEW_COMPLETED"
    SELECTED = "SELECTED"
    WITHDRAWN = "WITHDRAWN"


class SessionStatus(str, Enum):
    PENDING = "PENDING"
    SCHEDULED = "SCHEDULED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class ResourceType(str, Enum):
    PDF = "PDF"
    VIDEO = "VIDEO"
    IMAGE = "IMAGE"
    DOCUMENT = "DOCUMENT"
    LINK = "LINK"
    OTHER = "OTHER"


class Company(BaseModel):
    """Hiring company."""

    table_name: ClassVar[str] = "companies"
    key_field: ClassVar[str] = "company_id"

    company_id: str
    name: str = Field(max_length=200)
    description: Optional[str] = None
    website_url: Optional[str] = None
    created_at: datetime


class Job(BaseModel):
    """
    Job posting, flattened with its company name for list display.

    ``company_name`` is joined in by the backend query; it is not a column
    of the jobs table itself.
    """

    table_name: ClassVar[str] = "jobs"
    key_field: ClassVar[str] = "job_id"

    job_id: str
    title: str = Field(max_length=200)
    description: str = ""
    job_type: JobType
    location: str = ""
    salary: Optional[str] = None
    status: JobStatus = JobStatus.OPEN
    company_id: Optional[str] = None
    company_name: str = ""
    applicant_count: int = Field(default=0, ge=0)
    created_at: datetime


class Application(BaseModel):
    """A candidate's application to a job."""

    table_name: ClassVar[str] = "applications"
    key_field: ClassVar[str] = "application_id"

    application_id: str
    candidate_id: str
    candidate_name: str = ""
    job_id: str
    job_title: str = ""
    status: ApplicationStatus = ApplicationStatus.APPLIED
    application_date: datetime
    cover_letter: Optional[str] = None
    resume_url: Optional[str] = None


class Mentor(BaseModel):
    """Career mentor profile."""

    table_name: ClassVar[str] = "career_mentors"
    key_field: ClassVar[str] = "mentor_id"

    mentor_id: str
    user_id: str
    full_name: str = ""
    domain: str = ""
    experience_years: int = Field(default=0, ge=0)
    bio: str = ""
    created_at: datetime


class MentorshipSession(BaseModel):
    """A booked mentorship session between a mentor and a mentee."""

    table_name: ClassVar[str] = "mentorship_sessions"
    key_field: ClassVar[str] = "session_id"

    session_id: str
    mentor_id: str
    mentor_name: str = ""
    user_id: str
    mentee_name: str = ""
    session_type: str = ""
    status: SessionStatus = SessionStatus.PENDING
    scheduled_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    session_duration_minutes: Optional[int] = None
    session_rating: Optional[int] = Field(default=None, ge=1, le=5)
    created_at: datetime


class FreeResource(BaseModel):
    """Free learning resource (file or link)."""

    table_name: ClassVar[str] = "free_resources"
    key_field: ClassVar[str] = "resource_id"

    resource_id: str
    title: str = Field(max_length=200)
    description: str = ""
    resource_type: ResourceType = ResourceType.OTHER
    resource_url: str = ""
    created_by_name: str = ""
    created_at: datetime


RECORD_MODELS = {
    "jobs": Job,
    "companies": Company,
    "applications": Application,
    "mentors": Mentor,
    "mentorship_sessions": MentorshipSession,
    "free_resources": FreeResource,
}
