import math
from collections.abc import Collection

# ── Weights ──────────────────────────────────────────────────────────────

INTEREST_WEIGHT = 60
OPPORTUNITY_WEIGHT = 40


def _overlap(a: Collection[str], b: Collection[str]) -> int:
    """Number of distinct tags present in both collections."""
    return len(set(a) & set(b))


def _sub_score(a: Collection[str], b: Collection[str], weight: int) -> float:
    # Denominator is the larger list, duplicates included
    total = max(len(a), len(b))
    if total == 0:
        return 0.0
    return _overlap(a, b) / total * weight


def calculate_match_score(
    student_interests: Collection[str],
    professional_expertise: Collection[str],
    student_opportunity_types: Collection[str],
    professional_opportunities: Collection[str],
) -> int:
    """Compatibility of a student and a professional, 0 to 100.

    Interest/expertise overlap carries 60 points and opportunity-type overlap
    40. Each overlap is divided by the size of the longer of its two lists.
    Halves round up.
    """
    score = _sub_score(student_interests, professional_expertise, INTEREST_WEIGHT) + _sub_score(
        student_opportunity_types, professional_opportunities, OPPORTUNITY_WEIGHT
    )
    return int(math.floor(score + 0.5))
