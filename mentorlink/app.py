import json
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from mentorlink.config import Settings, get_settings
from mentorlink.db import close_db, connect_db, get_db
from mentorlink.logger import configure_logging, get_logger
from mentorlink.models.match import OptionsResponse, ProfessionalMatch, StudentMatch
from mentorlink.models.professional import Professional, ProfessionalCreate
from mentorlink.models.student import Student, StudentCreate
from mentorlink.models.tags import FIELD_OPTIONS, OPPORTUNITY_OPTIONS
from mentorlink.services.matching import (
    generate_matches_for_professional,
    generate_matches_for_student,
    get_professional_matches,
    get_student_matches,
)
from mentorlink.services.resume_upload import (
    ResumeUploadError,
    check_extension,
    discard_resume,
    read_upload,
    save_resume,
    stored_path,
)
from mentorlink.storage.base import DuplicateRecordError, Storage

settings = get_settings()
logger = get_logger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    storage = await connect_db(settings)
    logger.info("MentorLink started with %s storage", storage.name)
    yield
    await close_db()


app = FastAPI(title="MentorLink API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

def get_app_settings() -> Settings:
    return settings


# ── Error shape ─────────────────────────────────────────────────────────


def _validation_message(errors) -> str:
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"message": _validation_message(exc.errors())})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})


# ── Meta endpoints ──────────────────────────────────────────────────────


@app.get("/api/health")
async def health(storage: Storage = Depends(get_db)):
    return {"status": "ok", "storage": storage.name}


@app.get("/api/options", response_model=OptionsResponse)
async def read_options():
    return OptionsResponse(
        field_options=list(FIELD_OPTIONS),
        opportunity_types=list(OPPORTUNITY_OPTIONS),
    )


# ── Student endpoints ──────────────────────────────────────────────────


def _parse_tag_list(raw: str, field_name: str) -> list:
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        raise HTTPException(status_code=400, detail=f"{field_name} must be a JSON array")
    if not isinstance(value, list):
        raise HTTPException(status_code=400, detail=f"{field_name} must be a JSON array")
    return value


@app.post("/api/students/register", response_model=Student)
async def register_student(
    name: str = Form(...),
    email: str = Form(...),
    phone: str = Form(...),
    interests: str = Form(...),
    opportunity_types: str = Form(..., alias="opportunityTypes"),
    resume: UploadFile | None = File(None),
    storage: Storage = Depends(get_db),
    app_settings: Settings = Depends(get_app_settings),
):
    if resume is None or not resume.filename:
        raise HTTPException(status_code=400, detail="Resume file is required")

    try:
        check_extension(resume.filename)
        # Validate the profile before anything touches the disk
        data = StudentCreate(
            name=name,
            email=email,
            phone=phone,
            resume_url="",
            interests=_parse_tag_list(interests, "interests"),
            opportunity_types=_parse_tag_list(opportunity_types, "opportunityTypes"),
        )
        resume_url = save_resume(
            await read_upload(resume, app_settings.max_resume_bytes),
            resume.filename,
            app_settings.upload_dir,
            app_settings.max_resume_bytes,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=_validation_message(e.errors()))
    except ResumeUploadError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        student = await storage.create_student(data.model_copy(update={"resume_url": resume_url}))
    except DuplicateRecordError as e:
        discard_resume(resume_url, app_settings.upload_dir)
        raise HTTPException(status_code=400, detail=str(e))

    logger.info("Registered student %s", student.id)

    try:
        await generate_matches_for_student(storage, student.id)
    except Exception:
        logger.exception("Match generation failed for student %s", student.id)

    return student


@app.get("/api/students/{student_id}", response_model=Student)
async def read_student(student_id: str, storage: Storage = Depends(get_db)):
    student = await storage.get_student(student_id)
    if student is None:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


@app.get("/api/students/{student_id}/matches", response_model=list[StudentMatch])
async def list_student_matches(student_id: str, storage: Storage = Depends(get_db)):
    return await get_student_matches(storage, student_id)


# ── Professional endpoints ─────────────────────────────────────────────


@app.post("/api/professionals/register", response_model=Professional)
async def register_professional(body: ProfessionalCreate, storage: Storage = Depends(get_db)):
    try:
        professional = await storage.create_professional(body)
    except DuplicateRecordError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info("Registered professional %s", professional.id)

    try:
        await generate_matches_for_professional(storage, professional.id)
    except Exception:
        logger.exception("Match generation failed for professional %s", professional.id)

    return professional


@app.get("/api/professionals/{professional_id}", response_model=Professional)
async def read_professional(professional_id: str, storage: Storage = Depends(get_db)):
    professional = await storage.get_professional(professional_id)
    if professional is None:
        raise HTTPException(status_code=404, detail="Professional not found")
    return professional


@app.get("/api/professionals/{professional_id}/matches", response_model=list[ProfessionalMatch])
async def list_professional_matches(professional_id: str, storage: Storage = Depends(get_db)):
    return await get_professional_matches(storage, professional_id)


# ── Uploaded resumes ───────────────────────────────────────────────────


@app.get("/uploads/{filename}")
async def read_resume(filename: str, app_settings: Settings = Depends(get_app_settings)):
    path = stored_path(filename, app_settings.upload_dir)
    if path is None:
        raise HTTPException(status_code=404, detail="File not found")
    return FileResponse(path)
