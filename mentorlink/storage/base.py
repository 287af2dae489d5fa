from abc import ABC, abstractmethod
from typing import Optional

from mentorlink.models.match import Match
from mentorlink.models.professional import Professional, ProfessionalCreate
from mentorlink.models.student import Student, StudentCreate


class StorageError(Exception):
    """Base class for persistence failures."""


class DuplicateRecordError(StorageError):
    """A student or professional with the same email already exists."""


class Storage(ABC):
    """Keyed store for students, professionals and matches.

    The matching code only talks to this interface, so any backing that
    implements it (in-process dicts, MongoDB) can be swapped in.
    """

    name: str = "abstract"

    async def connect(self) -> None:
        pass

    async def close(self) -> None:
        pass

    # ── Students ─────────────────────────────────────────────────────────

    @abstractmethod
    async def create_student(self, data: StudentCreate) -> Student: ...

    @abstractmethod
    async def get_student(self, student_id: str) -> Optional[Student]: ...

    @abstractmethod
    async def get_all_students(self) -> list[Student]: ...

    # ── Professionals ────────────────────────────────────────────────────

    @abstractmethod
    async def create_professional(self, data: ProfessionalCreate) -> Professional: ...

    @abstractmethod
    async def get_professional(self, professional_id: str) -> Optional[Professional]: ...

    @abstractmethod
    async def get_all_professionals(self) -> list[Professional]: ...

    # ── Matches ──────────────────────────────────────────────────────────

    @abstractmethod
    async def create_match(self, student_id: str, professional_id: str, score: int) -> Match: ...

    @abstractmethod
    async def get_matches_for_student(self, student_id: str) -> list[Match]: ...

    @abstractmethod
    async def get_matches_for_professional(self, professional_id: str) -> list[Match]: ...
