"""Report service - payroll reports per teacher, department and institution."""

import logging
from uuid import UUID

from app.core.exceptions import InvalidRequestError, NotFoundError
from app.models.academic import Department, Teacher
from app.models.course import Semester
from app.schemas.report import (
    ClassPayrollLine,
    CoefficientsUsed,
    DegreeInfo,
    DepartmentInfo,
    DepartmentLine,
    DepartmentReport,
    InstitutionReport,
    ReportSummary,
    SemesterInfo,
    SemesterLine,
    TeacherInfo,
    TeacherLine,
    TeacherSemesterReport,
    TeacherYearlyReport,
)
from app.services.aggregation import (
    DepartmentTotals,
    PayrollTotals,
    PricedAssignment,
    SemesterTotals,
    TeacherTotals,
    aggregate_by_department,
    aggregate_by_teacher,
    aggregate_teacher_semesters,
    combine,
    price_assignment,
)
from app.services.calculator import round_periods, round_salary, to_decimal
from app.services.lookup import (
    TeacherCoefficientValue,
    YearConfiguration,
    load_teacher_coefficients,
    load_year_configuration,
)
from app.services.repository import PayrollRepository

logger = logging.getLogger(__name__)


# ============== Shaping ==============


def summarize(totals: PayrollTotals) -> ReportSummary:
    return ReportSummary(
        total_classes=totals.class_count,
        total_periods=totals.total_periods,
        total_converted_periods=round_periods(totals.total_converted_periods),
        total_salary=round_salary(totals.total_salary),
    )


def coefficients_used(
    config: YearConfiguration,
    teacher_coefficient: TeacherCoefficientValue | None = None,
) -> CoefficientsUsed:
    used = CoefficientsUsed(
        hourly_rate=config.rate_per_hour,
        standard_student_range=config.standard_student_range,
    )
    if teacher_coefficient is not None:
        used.teacher_coefficient = teacher_coefficient.value
        used.teacher_coefficient_is_default = teacher_coefficient.is_default
    return used


def class_line(priced: PricedAssignment) -> ClassPayrollLine:
    """Shape one priced class, converted periods to 2 decimal places."""
    course_class = priced.assignment.course_class
    subject = course_class.subject
    return ClassPayrollLine(
        course_class_id=course_class.id,
        course_class_code=course_class.code,
        course_class_name=course_class.name,
        subject_name=subject.name,
        total_periods=subject.total_periods,
        student_count=course_class.student_count,
        subject_coefficient=to_decimal(subject.coefficient),
        class_coefficient=priced.payroll.class_coefficient,
        converted_periods=round_periods(priced.payroll.converted_periods, 2),
        class_salary=round_salary(priced.payroll.class_salary),
    )


def semester_line(item: SemesterTotals) -> SemesterLine:
    return SemesterLine(
        semester_id=item.semester.id,
        semester_name=item.semester.name,
        term_number=item.semester.term_number,
        is_supplementary=item.semester.is_supplementary,
        class_count=item.totals.class_count,
        total_periods=item.totals.total_periods,
        total_converted_periods=round_periods(item.totals.total_converted_periods),
        total_salary=round_salary(item.totals.total_salary),
    )


def teacher_line(item: TeacherTotals) -> TeacherLine:
    return TeacherLine(
        teacher_id=item.teacher.id,
        teacher_name=item.teacher.full_name,
        teacher_code=item.teacher.code,
        degree=DegreeInfo.model_validate(item.teacher.degree),
        teacher_coefficient=item.coefficient.value,
        teacher_coefficient_is_default=item.coefficient.is_default,
        class_count=item.totals.class_count,
        total_periods=item.totals.total_periods,
        total_converted_periods=round_periods(item.totals.total_converted_periods),
        total_salary=round_salary(item.totals.total_salary),
    )


def department_line(item: DepartmentTotals) -> DepartmentLine:
    return DepartmentLine(
        department_id=item.department.id,
        department_name=item.department.full_name,
        department_short_name=item.department.short_name,
        class_count=item.totals.class_count,
        total_periods=item.totals.total_periods,
        total_converted_periods=round_periods(item.totals.total_converted_periods),
        total_salary=round_salary(item.totals.total_salary),
    )


def teacher_info(teacher: Teacher) -> TeacherInfo:
    return TeacherInfo.model_validate(teacher)


# ============== Lookups ==============


async def get_teacher_or_404(repo: PayrollRepository, teacher_id: UUID) -> Teacher:
    teacher = await repo.get_teacher(teacher_id)
    if teacher is None:
        raise NotFoundError("Teacher not found")
    return teacher


async def get_semester_or_404(repo: PayrollRepository, semester_id: UUID) -> Semester:
    semester = await repo.get_semester(semester_id)
    if semester is None:
        raise NotFoundError("Semester not found")
    return semester


async def resolve_semester_filter(
    repo: PayrollRepository,
    academic_year: str,
    semester_id: UUID | None,
) -> tuple[Semester | None, list[UUID]]:
    """Return the requested semester (if any) and the semester ids to include."""
    if semester_id is None:
        semesters = await repo.list_semesters(academic_year)
        return None, [semester.id for semester in semesters]

    semester = await get_semester_or_404(repo, semester_id)
    if semester.academic_year != academic_year:
        raise InvalidRequestError("Semester does not belong to the selected academic year")
    return semester, [semester.id]


# ============== Reports ==============


async def calculate_teacher_semester_report(
    repo: PayrollRepository,
    teacher_id: UUID,
    semester_id: UUID,
) -> TeacherSemesterReport:
    """Payroll of a teacher in one semester, with a line per class."""
    teacher = await get_teacher_or_404(repo, teacher_id)
    semester = await get_semester_or_404(repo, semester_id)

    config = await load_year_configuration(repo, semester.academic_year)
    coefficients = await load_teacher_coefficients(repo, semester.academic_year)

    assignments = await repo.list_assignments([semester.id], teacher_ids=[teacher.id])
    coefficient = coefficients.resolve(teacher.degree_id, applied=bool(assignments))

    totals = PayrollTotals()
    lines = []
    for assignment in assignments:
        priced = price_assignment(assignment, config, coefficient)
        totals.add_class(assignment.course_class.subject.total_periods, priced.payroll)
        lines.append(class_line(priced))

    return TeacherSemesterReport(
        teacher=teacher_info(teacher),
        semester=SemesterInfo.model_validate(semester),
        coefficients=coefficients_used(config, coefficient),
        classes=lines,
        summary=summarize(totals),
    )


async def calculate_teacher_yearly_report(
    repo: PayrollRepository,
    teacher_id: UUID,
    academic_year: str,
) -> TeacherYearlyReport:
    """Payroll of a teacher over every semester of an academic year."""
    teacher = await get_teacher_or_404(repo, teacher_id)

    semesters = await repo.list_semesters(academic_year)
    if not semesters:
        raise NotFoundError(f"No semesters found for academic year {academic_year}")

    config = await load_year_configuration(repo, academic_year)
    coefficients = await load_teacher_coefficients(repo, academic_year)

    assignments = await repo.list_assignments(
        [semester.id for semester in semesters],
        teacher_ids=[teacher.id],
    )
    coefficient = coefficients.resolve(teacher.degree_id, applied=bool(assignments))
    semester_totals = aggregate_teacher_semesters(semesters, assignments, config, coefficients)

    logger.info(
        "Computed yearly payroll for teacher %s in %s: %d classes",
        teacher.code,
        academic_year,
        len(assignments),
    )

    return TeacherYearlyReport(
        teacher=teacher_info(teacher),
        academic_year=academic_year,
        coefficients=coefficients_used(config, coefficient),
        semesters=[semester_line(item) for item in semester_totals],
        summary=summarize(combine(item.totals for item in semester_totals)),
    )


async def calculate_department_report(
    repo: PayrollRepository,
    department_id: UUID,
    academic_year: str,
    semester_id: UUID | None = None,
) -> DepartmentReport:
    """
    Payroll of every teacher in a department.

    Teachers without assignments are listed with zero totals. Without
    ``semester_id`` the report covers every semester of the year.
    """
    department = await repo.get_department(department_id)
    if department is None:
        raise NotFoundError("Department not found")

    teachers = await repo.list_department_teachers(department.id)
    if not teachers:
        raise NotFoundError("No teachers in this department")

    config = await load_year_configuration(repo, academic_year)
    semester, semester_ids = await resolve_semester_filter(repo, academic_year, semester_id)
    coefficients = await load_teacher_coefficients(repo, academic_year)

    assignments = await repo.list_assignments(
        semester_ids,
        teacher_ids=[teacher.id for teacher in teachers],
    )
    teacher_totals = aggregate_by_teacher(teachers, assignments, config, coefficients)

    logger.info(
        "Computed department payroll for %s in %s: %d teachers, %d classes",
        department.short_name,
        academic_year,
        len(teachers),
        len(assignments),
    )

    return DepartmentReport(
        department=DepartmentInfo.model_validate(department),
        academic_year=academic_year,
        semester=SemesterInfo.model_validate(semester) if semester else None,
        coefficients=coefficients_used(config),
        teachers=[teacher_line(item) for item in teacher_totals],
        summary=summarize(combine(item.totals for item in teacher_totals)),
    )


async def calculate_institution_report(
    repo: PayrollRepository,
    academic_year: str,
    semester_id: UUID | None = None,
) -> InstitutionReport:
    """Payroll of every department, including departments without assignments."""
    departments: list[Department] = await repo.list_departments()
    if not departments:
        raise NotFoundError("No departments found")

    config = await load_year_configuration(repo, academic_year)
    semester, semester_ids = await resolve_semester_filter(repo, academic_year, semester_id)
    coefficients = await load_teacher_coefficients(repo, academic_year)

    assignments = await repo.list_assignments(semester_ids)
    department_totals = aggregate_by_department(departments, assignments, config, coefficients)

    logger.info(
        "Computed institution payroll for %s: %d departments, %d classes",
        academic_year,
        len(departments),
        len(assignments),
    )

    return InstitutionReport(
        academic_year=academic_year,
        semester=SemesterInfo.model_validate(semester) if semester else None,
        coefficients=coefficients_used(config),
        departments=[department_line(item) for item in department_totals],
        summary=summarize(combine(item.totals for item in department_totals)),
    )
