import random
import time
from pathlib import Path

from mentorlink.logger import get_logger

logger = get_logger(__name__)

ALLOWED_EXTENSIONS = (".pdf", ".doc", ".docx")
UPLOAD_URL_PREFIX = "/uploads"


class ResumeUploadError(ValueError):
    """Uploaded resume was rejected."""


def check_extension(filename: str) -> str:
    """Return the lowercased extension, or raise if it is not allowed."""
    ext = Path(filename).suffix.lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise ResumeUploadError("Invalid file type. Only PDF, DOC, and DOCX are allowed.")
    return ext


def make_stored_name(ext: str) -> str:
    """Unique on-disk name: ``resume-<epoch ms>-<random>`` plus the extension."""
    millis = int(time.time() * 1000)
    suffix = random.randint(0, 999_999_999)
    return f"resume-{millis}-{suffix}{ext}"


def save_resume(data: bytes, filename: str, upload_dir: Path, max_bytes: int) -> str:
    """Write an uploaded resume to ``upload_dir`` and return its public URL."""
    if not filename:
        raise ResumeUploadError("Resume file is required")
    ext = check_extension(filename)
    if not data:
        raise ResumeUploadError("Resume file is empty")
    if len(data) > max_bytes:
        raise ResumeUploadError(f"File too large. Maximum size is {max_bytes // (1024 * 1024)} MB.")

    upload_dir.mkdir(parents=True, exist_ok=True)
    stored_name = make_stored_name(ext)
    (upload_dir / stored_name).write_bytes(data)

    logger.info("Saved resume %s as %s (%d bytes)", filename, stored_name, len(data))
    return f"{UPLOAD_URL_PREFIX}/{stored_name}"


async def read_upload(upload, max_bytes: int, chunk_size: int = 64 * 1024) -> bytes:
    """Read an ``UploadFile`` in chunks, giving up as soon as it passes ``max_bytes``."""
    chunks = []
    total = 0
    while True:
        chunk = await upload.read(chunk_size)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            raise ResumeUploadError(f"File too large. Maximum size is {max_bytes // (1024 * 1024)} MB.")
        chunks.append(chunk)
    return b"".join(chunks)


def stored_path(resume_url: str, upload_dir: Path) -> Path | None:
    """Map a public ``/uploads/<name>`` URL or bare name to a file in ``upload_dir``."""
    name = resume_url.rsplit("/", 1)[-1]
    # Only plain names inside the upload dir are served
    if not name or name != Path(name).name or name.startswith("."):
        return None
    path = upload_dir / name
    if not path.is_file():
        return None
    return path


def discard_resume(resume_url: str, upload_dir: Path) -> None:
    """Remove a stored resume whose registration did not go through."""
    path = stored_path(resume_url, upload_dir)
    if path is not None:
        path.unlink()
        logger.info("Discarded resume %s", path.name)
