"""Class coefficient resolution and per-class payroll calculation.

Both functions are pure: they take already-loaded entities and numbers and
never touch the database.

    class_coefficient = (student_band - standard_band) * 0.1
    converted_periods = total_periods * subject_coefficient * (1 + class_coefficient)
    class_salary      = converted_periods * hourly_rate * teacher_coefficient

Amounts are kept as unrounded Decimals. Rounding happens only when a report
is shaped for display (see ``round_periods`` and ``round_salary``).
"""

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from app.models.course import CourseClass, Subject
from app.models.rate import STUDENT_RANGES

logger = logging.getLogger(__name__)

BAND_STEP = Decimal("0.1")


def to_decimal(value: Decimal | int | float) -> Decimal:
    """Convert a numeric column value to Decimal without float artifacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def student_range_index(student_count: int) -> int:
    """Return the band index of a class with ``student_count`` students, or -1."""
    if student_count < 20:
        return 0
    if student_count >= 100:
        return len(STUDENT_RANGES) - 1

    range_start = student_count // 10 * 10
    label = f"{range_start}-{range_start + 9}"
    return STUDENT_RANGES.index(label) if label in STUDENT_RANGES else -1


def resolve_class_coefficient(student_count: int, standard_range: str) -> Decimal:
    """
    Convert a class size into a pay adjustment.

    Each band between the class size and the year's standard range moves the
    coefficient by 0.1. Unknown labels resolve to a neutral 0.
    """
    student_index = student_range_index(student_count)
    standard_index = STUDENT_RANGES.index(standard_range) if standard_range in STUDENT_RANGES else -1

    if student_index == -1 or standard_index == -1:
        logger.warning(
            "Unresolvable class size band (students=%s, standard=%r), using 0",
            student_count,
            standard_range,
        )
        return Decimal("0")

    return (student_index - standard_index) * BAND_STEP


@dataclass(frozen=True)
class ClassPayroll:
    """Unrounded payroll figures of one assigned course class."""

    class_coefficient: Decimal
    converted_periods: Decimal
    class_salary: Decimal


def compute_class_payroll(
    subject: Subject,
    course_class: CourseClass,
    teacher_coefficient: Decimal,
    hourly_rate: Decimal,
    standard_range: str,
) -> ClassPayroll:
    """Compute converted periods and salary for one (teacher, course class) pair."""
    class_coefficient = resolve_class_coefficient(course_class.student_count, standard_range)
    converted_periods = (
        subject.total_periods * to_decimal(subject.coefficient) * (1 + class_coefficient)
    )
    class_salary = converted_periods * to_decimal(hourly_rate) * to_decimal(teacher_coefficient)

    return ClassPayroll(
        class_coefficient=class_coefficient,
        converted_periods=converted_periods,
        class_salary=class_salary,
    )


def round_periods(value: Decimal, places: int = 1) -> Decimal:
    """Round converted periods for display (1 place in summaries, 2 per class)."""
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def round_salary(value: Decimal) -> Decimal:
    """Round an amount to whole currency units for display."""
    return value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
