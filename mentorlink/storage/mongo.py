from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError

from mentorlink.logger import get_logger
from mentorlink.models.match import Match
from mentorlink.models.professional import Professional, ProfessionalCreate
from mentorlink.models.student import Student, StudentCreate
from mentorlink.storage.base import DuplicateRecordError, Storage

logger = get_logger(__name__)


class MongoStorage(Storage):
    """MongoDB-backed storage using motor.

    Documents are keyed by our own ``id`` field; Mongo's ``_id`` is always
    projected away. There is no unique index on the (student_id,
    professional_id) pair of ``matches``.
    """

    name = "mongo"

    def __init__(self, mongo_url: str, database: str):
        self.mongo_url = mongo_url
        self.database_name = database
        self.client: AsyncIOMotorClient | None = None
        self._db: AsyncIOMotorDatabase | None = None

    async def connect(self) -> None:
        self.client = AsyncIOMotorClient(self.mongo_url)
        self._db = self.client[self.database_name]

        for collection in ("students", "professionals"):
            await self._db[collection].create_index([("id", ASCENDING)], unique=True)
            await self._db[collection].create_index([("email", ASCENDING)], unique=True)
        await self._db.matches.create_index([("id", ASCENDING)], unique=True)
        await self._db.matches.create_index([("student_id", ASCENDING)])
        await self._db.matches.create_index([("professional_id", ASCENDING)])

        logger.info("Connected to MongoDB database %s", self.database_name)

    async def close(self) -> None:
        if self.client:
            self.client.close()
            self.client = None
            self._db = None

    @property
    def db(self) -> AsyncIOMotorDatabase:
        assert self._db is not None, "Database not connected. Call connect() first."
        return self._db

    async def _insert(self, collection: str, doc: dict) -> dict:
        try:
            await self.db[collection].insert_one(doc)
        except DuplicateKeyError as e:
            raise DuplicateRecordError(str(e)) from e
        doc.pop("_id", None)
        return doc

    # ── Students ─────────────────────────────────────────────────────────

    async def create_student(self, data: StudentCreate) -> Student:
        doc = {
            "id": str(uuid4()),
            "created_at": datetime.now(timezone.utc),
            **data.model_dump(),
        }
        return Student(**await self._insert("students", doc))

    async def get_student(self, student_id: str) -> Optional[Student]:
        doc = await self.db.students.find_one({"id": student_id}, {"_id": 0})
        if doc is None:
            return None
        return Student(**doc)

    async def get_all_students(self) -> list[Student]:
        cursor = self.db.students.find({}, {"_id": 0})
        docs = await cursor.to_list(length=None)
        return [Student(**doc) for doc in docs]

    # ── Professionals ────────────────────────────────────────────────────

    async def create_professional(self, data: ProfessionalCreate) -> Professional:
        doc = {
            "id": str(uuid4()),
            "created_at": datetime.now(timezone.utc),
            **data.model_dump(),
        }
        return Professional(**await self._insert("professionals", doc))

    async def get_professional(self, professional_id: str) -> Optional[Professional]:
        doc = await self.db.professionals.find_one({"id": professional_id}, {"_id": 0})
        if doc is None:
            return None
        return Professional(**doc)

    async def get_all_professionals(self) -> list[Professional]:
        cursor = self.db.professionals.find({}, {"_id": 0})
        docs = await cursor.to_list(length=None)
        return [Professional(**doc) for doc in docs]

    # ── Matches ──────────────────────────────────────────────────────────

    async def create_match(self, student_id: str, professional_id: str, score: int) -> Match:
        doc = {
            "id": str(uuid4()),
            "student_id": student_id,
            "professional_id": professional_id,
            "score": score,
            "created_at": datetime.now(timezone.utc),
        }
        return Match(**await self._insert("matches", doc))

    async def get_matches_for_student(self, student_id: str) -> list[Match]:
        cursor = self.db.matches.find({"student_id": student_id}, {"_id": 0})
        docs = await cursor.to_list(length=None)
        return [Match(**doc) for doc in docs]

    async def get_matches_for_professional(self, professional_id: str) -> list[Match]:
        cursor = self.db.matches.find({"professional_id": professional_id}, {"_id": 0})
        docs = await cursor.to_list(length=None)
        return [Match(**doc) for doc in docs]
