from datetime import datetime

from pydantic import EmailStr, Field

from mentorlink.models.base import CamelModel
from mentorlink.models.tags import FieldOption, OpportunityOption


# ── Request / response schemas ──────────────────────────────────────────


class ProfessionalCreate(CamelModel):
    """Body of POST /api/professionals/register."""
    name: str = Field(min_length=2)
    email: EmailStr
    phone: str = Field(min_length=10)
    title: str = Field(min_length=2)
    company: str = Field(min_length=2)
    expertise: list[FieldOption] = Field(min_length=1)
    available_opportunities: list[OpportunityOption] = Field(min_length=1)
    bio: str = Field(min_length=50)


class Professional(ProfessionalCreate):
    """Full professional record as stored."""
    id: str
    created_at: datetime
