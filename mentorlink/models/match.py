from datetime import datetime
from typing import Optional

from pydantic import Field

from mentorlink.models.base import CamelModel
from mentorlink.models.professional import Professional
from mentorlink.models.student import Student


class Match(CamelModel):
    """A scored pairing of one student and one professional."""
    id: str
    student_id: str
    professional_id: str
    score: int = Field(ge=0, le=100)
    created_at: datetime


class StudentMatch(Match):
    """A student's match joined with the professional it points at."""
    professional: Optional[Professional] = None


class ProfessionalMatch(Match):
    """A professional's match joined with the student it points at."""
    student: Optional[Student] = None


class OptionsResponse(CamelModel):
    field_options: list[str]
    opportunity_types: list[str]
