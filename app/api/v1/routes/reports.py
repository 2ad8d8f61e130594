"""Report API routes."""

from uuid import UUID

from fastapi import APIRouter, Query

from app.core.deps import AcademicYearPath, PayrollRepo
from app.schemas.report import (
    DepartmentReport,
    InstitutionReport,
    TeacherSemesterReport,
    TeacherYearlyReport,
)
from app.services import report as report_service

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get(
    "/teacher/{teacher_id}/academic-year/{academic_year}",
    response_model=TeacherYearlyReport,
)
async def get_teacher_yearly_report(
    repo: PayrollRepo,
    teacher_id: UUID,
    academic_year: AcademicYearPath,
) -> TeacherYearlyReport:
    """
    Get a teacher's payroll for an academic year.

    Every semester of the year is listed, including semesters without
    classes.
    """
    return await report_service.calculate_teacher_yearly_report(repo, teacher_id, academic_year)


@router.get(
    "/teacher/{teacher_id}/semester/{semester_id}",
    response_model=TeacherSemesterReport,
)
async def get_teacher_semester_report(
    repo: PayrollRepo,
    teacher_id: UUID,
    semester_id: UUID,
) -> TeacherSemesterReport:
    """Get a teacher's payroll for one semester, class by class."""
    return await report_service.calculate_teacher_semester_report(repo, teacher_id, semester_id)


@router.get(
    "/department/{department_id}/academic-year/{academic_year}",
    response_model=DepartmentReport,
)
async def get_department_report(
    repo: PayrollRepo,
    department_id: UUID,
    academic_year: AcademicYearPath,
    semester_id: UUID | None = Query(None, description="Restrict to one semester"),
) -> DepartmentReport:
    """
    Get the payroll of every teacher in a department.

    Teachers without classes are listed with zero totals.
    """
    return await report_service.calculate_department_report(
        repo,
        department_id,
        academic_year,
        semester_id=semester_id,
    )


@router.get(
    "/institution/academic-year/{academic_year}",
    response_model=InstitutionReport,
)
async def get_institution_report(
    repo: PayrollRepo,
    academic_year: AcademicYearPath,
    semester_id: UUID | None = Query(None, description="Restrict to one semester"),
) -> InstitutionReport:
    """Get the payroll of every department."""
    return await report_service.calculate_institution_report(
        repo,
        academic_year,
        semester_id=semester_id,
    )
