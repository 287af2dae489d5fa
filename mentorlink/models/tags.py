from typing import Literal, get_args

# ── Vocabularies ─────────────────────────────────────────────────────────

FieldOption = Literal[
    "Software Engineering",
    "Data Science",
    "Product Management",
    "Marketing",
    "Finance",
    "Consulting",
    "Healthcare",
    "Education",
    "Design",
    "Sales",
    "Operations",
    "Human Resources",
    "Legal",
    "Research",
    "Entrepreneurship",
]

OpportunityOption = Literal[
    "Mentoring",
    "Internship",
    "Job Shadowing",
]

FIELD_OPTIONS: tuple[str, ...] = get_args(FieldOption)
OPPORTUNITY_OPTIONS: tuple[str, ...] = get_args(OpportunityOption)
