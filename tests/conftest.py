"""
Pytest configuration and shared fixtures.
"""

import asyncio
from itertools import count

import pytest
from fastapi.testclient import TestClient

from mentorlink.app import app, get_app_settings
from mentorlink.config import Settings
from mentorlink.db import get_db
from mentorlink.models.professional import Professional, ProfessionalCreate
from mentorlink.models.student import Student, StudentCreate
from mentorlink.storage.memory import MemoryStorage

_ids = count(1)

BIO = "Fifteen years in the industry and happy to help students find their footing."


def student_data(interests, opportunity_types, name="Alice Student") -> StudentCreate:
    n = next(_ids)
    return StudentCreate(
        name=name,
        email=f"student{n}@example.com",
        phone="4025550100",
        resume_url=f"/uploads/resume-{n}.pdf",
        interests=interests,
        opportunity_types=opportunity_types,
    )


def professional_data(expertise, opportunities, name="Pat Professional") -> ProfessionalCreate:
    n = next(_ids)
    return ProfessionalCreate(
        name=name,
        email=f"pro{n}@example.com",
        phone="4025550199",
        title="Senior Analyst",
        company="Acme Corp",
        expertise=expertise,
        available_opportunities=opportunities,
        bio=BIO,
    )


def professional_payload(expertise, opportunities, email="pro@example.com") -> dict:
    """JSON body for POST /api/professionals/register."""
    return {
        "name": "Pat Professional",
        "email": email,
        "phone": "4025550199",
        "title": "Senior Analyst",
        "company": "Acme Corp",
        "expertise": expertise,
        "availableOpportunities": opportunities,
        "bio": BIO,
    }


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def add_student(storage):
    """Insert a student straight into storage, bypassing match generation."""
    def _add(interests, opportunity_types, **kwargs) -> Student:
        return asyncio.run(storage.create_student(student_data(interests, opportunity_types, **kwargs)))
    return _add


@pytest.fixture
def add_professional(storage):
    """Insert a professional straight into storage, bypassing match generation."""
    def _add(expertise, opportunities, **kwargs) -> Professional:
        return asyncio.run(storage.create_professional(professional_data(expertise, opportunities, **kwargs)))
    return _add


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def client(storage, upload_dir):
    """TestClient wired to a fresh in-memory store and a temporary upload dir."""
    app.dependency_overrides[get_db] = lambda: storage
    app.dependency_overrides[get_app_settings] = lambda: Settings(
        upload_dir=upload_dir,
        max_resume_bytes=1024,
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def pro_payload():
    return professional_payload
