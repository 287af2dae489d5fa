from mentorlink.storage.base import DuplicateRecordError, Storage, StorageError
from mentorlink.storage.memory import MemoryStorage

__all__ = ["DuplicateRecordError", "MemoryStorage", "Storage", "StorageError"]
