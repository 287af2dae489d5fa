from mentorlink.config import Settings, get_settings
from mentorlink.storage.base import Storage
from mentorlink.storage.memory import MemoryStorage

storage: Storage | None = None


def build_storage(settings: Settings) -> Storage:
    if settings.storage == "mongo":
        # Imported lazily so the memory backend never needs motor at runtime
        from mentorlink.storage.mongo import MongoStorage

        return MongoStorage(settings.mongo_url, settings.mongo_database)
    return MemoryStorage()


async def connect_db(settings: Settings | None = None) -> Storage:
    global storage
    storage = build_storage(settings or get_settings())
    await storage.connect()
    return storage


async def close_db() -> None:
    global storage
    if storage:
        await storage.close()
        storage = None


def get_db() -> Storage:
    assert storage is not None, "Database not connected. Call connect_db() first."
    return storage
