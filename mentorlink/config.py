import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

STORAGE_BACKENDS = ("memory", "mongo")


def _split_origins(raw: str) -> list[str]:
    return [o.strip() for o in raw.split(",") if o.strip()]


@dataclass
class Settings:
    storage: str = "memory"
    mongo_url: str = "mongodb://localhost:27017"
    mongo_database: str = "mentorlink"
    upload_dir: Path = Path("uploads")
    max_resume_bytes: int = 10 * 1024 * 1024
    log_level: str = "INFO"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


def get_settings() -> Settings:
    """Read settings from the environment (``.env`` is loaded on import)."""
    storage = os.getenv("MENTORLINK_STORAGE", "memory").strip().lower()
    if storage not in STORAGE_BACKENDS:
        raise ValueError(
            f"Unknown MENTORLINK_STORAGE {storage!r}, expected one of {STORAGE_BACKENDS}"
        )

    return Settings(
        storage=storage,
        mongo_url=os.getenv("MONGODB_URL", "mongodb://localhost:27017"),
        mongo_database=os.getenv("MONGODB_DATABASE", "mentorlink"),
        upload_dir=Path(os.getenv("UPLOAD_DIR", "uploads")),
        max_resume_bytes=int(os.getenv("MAX_RESUME_BYTES", str(10 * 1024 * 1024))),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "*")),
    )
