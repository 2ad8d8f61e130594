"""Custom validators and types."""

import re
from typing import Annotated

from pydantic import AfterValidator, Field

from app.models.rate import STUDENT_RANGES

# YYYY-YYYY where the second year directly follows the first
ACADEMIC_YEAR_PATTERN = re.compile(r"^(\d{4})-(\d{4})$")


def validate_academic_year(value: str) -> str:
    """
    Validate an academic year label.

    Accepts: 2025-2026
    Rejects: 2025, 2025/2026, 2025-2027
    """
    match = ACADEMIC_YEAR_PATTERN.match(value)
    if not match:
        raise ValueError("Invalid academic year. Use format: YYYY-YYYY (e.g., 2025-2026)")

    start_year, end_year = (int(part) for part in match.groups())
    if end_year != start_year + 1:
        raise ValueError("Invalid academic year. End year must directly follow start year")

    return value


def validate_student_range(value: str) -> str:
    """Validate a class size band label such as '40-49' or '100+'."""
    if value not in STUDENT_RANGES:
        raise ValueError(
            f"Invalid student range. Use one of: {', '.join(STUDENT_RANGES)}"
        )
    return value


# Annotated type for academic year validation
AcademicYear = Annotated[
    str,
    Field(min_length=9, max_length=9, examples=["2025-2026"]),
    AfterValidator(validate_academic_year),
]

StudentRange = Annotated[
    str,
    Field(examples=["40-49"]),
    AfterValidator(validate_student_range),
]
