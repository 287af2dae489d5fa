from datetime import datetime

from pydantic import EmailStr, Field

from mentorlink.models.base import CamelModel
from mentorlink.models.tags import FieldOption, OpportunityOption


# ── Request / response schemas ──────────────────────────────────────────


class StudentCreate(CamelModel):
    """Everything a student submits at registration, resume already stored."""
    name: str = Field(min_length=2)
    email: EmailStr
    phone: str = Field(min_length=10)
    resume_url: str
    interests: list[FieldOption] = Field(min_length=1)
    opportunity_types: list[OpportunityOption] = Field(min_length=1)


class Student(StudentCreate):
    """Full student record as stored."""
    id: str
    created_at: datetime
