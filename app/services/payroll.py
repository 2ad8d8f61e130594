"""Payroll service - single teacher payroll calculation."""

import logging
from datetime import datetime, timezone
from uuid import UUID

from app.core.exceptions import InvalidRequestError, NotFoundError
from app.schemas.payroll import PayrollResult
from app.schemas.report import SemesterInfo
from app.services.aggregation import PayrollTotals, price_assignment
from app.services.calculator import round_salary
from app.services.lookup import load_teacher_coefficients, load_year_configuration
from app.services.repository import PayrollRepository
from app.services.report import (
    class_line,
    coefficients_used,
    get_semester_or_404,
    get_teacher_or_404,
    teacher_info,
)

logger = logging.getLogger(__name__)


async def calculate_single_payroll(
    repo: PayrollRepository,
    academic_year: str,
    semester_id: UUID,
    teacher_id: UUID,
) -> PayrollResult:
    """
    Per-class payroll breakdown of one teacher in one semester.

    Class lines show converted periods to 2 decimal places and whole salary
    amounts. The total is rounded from the unrounded sum.
    """
    teacher = await get_teacher_or_404(repo, teacher_id)
    semester = await get_semester_or_404(repo, semester_id)
    if semester.academic_year != academic_year:
        raise InvalidRequestError("Semester does not belong to the selected academic year")

    config = await load_year_configuration(repo, academic_year)
    coefficients = await load_teacher_coefficients(repo, academic_year)

    assignments = await repo.list_assignments([semester.id], teacher_ids=[teacher.id])
    if not assignments:
        raise NotFoundError("No teaching assignments for this teacher in the selected semester")

    # resolved only once it prices a class
    coefficient = coefficients.resolve(teacher.degree_id)

    totals = PayrollTotals()
    lines = []
    for assignment in assignments:
        priced = price_assignment(assignment, config, coefficient)
        totals.add_class(assignment.course_class.subject.total_periods, priced.payroll)
        lines.append(class_line(priced))

    logger.info(
        "Calculated payroll for teacher %s in semester %s: %d classes",
        teacher.code,
        semester.id,
        len(assignments),
    )

    return PayrollResult(
        teacher=teacher_info(teacher),
        semester=SemesterInfo.model_validate(semester),
        coefficients=coefficients_used(config, coefficient),
        classes=lines,
        total_salary=round_salary(totals.total_salary),
        calculated_at=datetime.now(timezone.utc),
    )


async def get_academic_years(repo: PayrollRepository) -> list[str]:
    """Academic years that have at least one semester."""
    return await repo.list_academic_years()
