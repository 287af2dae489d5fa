from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from mentorlink.models.match import Match
from mentorlink.models.professional import Professional, ProfessionalCreate
from mentorlink.models.student import Student, StudentCreate
from mentorlink.storage.base import DuplicateRecordError, Storage


class MemoryStorage(Storage):
    """Process-local storage. Dicts keep insertion order, so listings do too."""

    name = "memory"

    def __init__(self):
        self.students: dict[str, Student] = {}
        self.professionals: dict[str, Professional] = {}
        self.matches: dict[str, Match] = {}

    # ── Students ─────────────────────────────────────────────────────────

    async def create_student(self, data: StudentCreate) -> Student:
        if any(s.email == data.email for s in self.students.values()):
            raise DuplicateRecordError(f"Student with email {data.email} already exists")

        student = Student(
            id=str(uuid4()),
            created_at=datetime.now(timezone.utc),
            **data.model_dump(),
        )
        self.students[student.id] = student
        return student

    async def get_student(self, student_id: str) -> Optional[Student]:
        return self.students.get(student_id)

    async def get_all_students(self) -> list[Student]:
        return list(self.students.values())

    # ── Professionals ────────────────────────────────────────────────────

    async def create_professional(self, data: ProfessionalCreate) -> Professional:
        if any(p.email == data.email for p in self.professionals.values()):
            raise DuplicateRecordError(f"Professional with email {data.email} already exists")

        professional = Professional(
            id=str(uuid4()),
            created_at=datetime.now(timezone.utc),
            **data.model_dump(),
        )
        self.professionals[professional.id] = professional
        return professional

    async def get_professional(self, professional_id: str) -> Optional[Professional]:
        return self.professionals.get(professional_id)

    async def get_all_professionals(self) -> list[Professional]:
        return list(self.professionals.values())

    # ── Matches ──────────────────────────────────────────────────────────

    async def create_match(self, student_id: str, professional_id: str, score: int) -> Match:
        match = Match(
            id=str(uuid4()),
            student_id=student_id,
            professional_id=professional_id,
            score=score,
            created_at=datetime.now(timezone.utc),
        )
        self.matches[match.id] = match
        return match

    async def get_matches_for_student(self, student_id: str) -> list[Match]:
        return [m for m in self.matches.values() if m.student_id == student_id]

    async def get_matches_for_professional(self, professional_id: str) -> list[Match]:
        return [m for m in self.matches.values() if m.professional_id == professional_id]
