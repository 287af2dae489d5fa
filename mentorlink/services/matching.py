from mentorlink.logger import get_logger
from mentorlink.models.match import Match, ProfessionalMatch, StudentMatch
from mentorlink.models.professional import Professional
from mentorlink.models.student import Student
from mentorlink.services.scoring import calculate_match_score
from mentorlink.storage.base import Storage

logger = get_logger(__name__)


def score_pair(student: Student, professional: Professional) -> int:
    return calculate_match_score(
        student.interests,
        professional.expertise,
        student.opportunity_types,
        professional.available_opportunities,
    )


# ── Generation ───────────────────────────────────────────────────────────


async def generate_matches_for_student(storage: Storage, student_id: str) -> list[Match]:
    """Score a newly registered student against every professional.

    A match is stored for each pair scoring above zero. No existence check is
    made, so running this twice for the same student stores every match
    twice. Storage errors propagate and stop the loop.
    """
    student = await storage.get_student(student_id)
    if student is None:
        logger.debug("Student %s not found, skipping match generation", student_id)
        return []

    professionals = await storage.get_all_professionals()

    created: list[Match] = []
    for professional in professionals:
        score = score_pair(student, professional)
        if score > 0:
            created.append(await storage.create_match(student.id, professional.id, score))

    logger.info(
        "Generated %d matches for student %s out of %d professionals",
        len(created), student.id, len(professionals),
    )
    return created


async def generate_matches_for_professional(storage: Storage, professional_id: str) -> list[Match]:
    """Score a newly registered professional against every student.

    Before storing a match the student's existing matches are checked for
    this professional. The check and the insert are separate calls.
    """
    professional = await storage.get_professional(professional_id)
    if professional is None:
        logger.debug("Professional %s not found, skipping match generation", professional_id)
        return []

    students = await storage.get_all_students()

    created: list[Match] = []
    for student in students:
        score = score_pair(student, professional)
        if score <= 0:
            continue

        existing = await storage.get_matches_for_student(student.id)
        if any(m.professional_id == professional.id for m in existing):
            logger.debug("Student %s already matched with %s", student.id, professional.id)
            continue

        created.append(await storage.create_match(student.id, professional.id, score))

    logger.info(
        "Generated %d matches for professional %s out of %d students",
        len(created), professional.id, len(students),
    )
    return created


# ── Retrieval ────────────────────────────────────────────────────────────


async def get_student_matches(storage: Storage, student_id: str) -> list[StudentMatch]:
    """A student's matches with their professionals, best score first."""
    matches = await storage.get_matches_for_student(student_id)

    results = [
        StudentMatch(
            **m.model_dump(),
            professional=await storage.get_professional(m.professional_id),
        )
        for m in matches
    ]

    results.sort(key=lambda m: m.score, reverse=True)
    return results


async def get_professional_matches(storage: Storage, professional_id: str) -> list[ProfessionalMatch]:
    """A professional's matches with their students, best score first."""
    matches = await storage.get_matches_for_professional(professional_id)

    results = [
        ProfessionalMatch(
            **m.model_dump(),
            student=await storage.get_student(m.student_id),
        )
        for m in matches
    ]

    results.sort(key=lambda m: m.score, reverse=True)
    return results
