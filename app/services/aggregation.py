"""Roll per-class payroll up to semesters, teachers and departments.

Every level is built from ``compute_class_payroll`` and sums unrounded
values. Groups are emitted in the order of the entities passed in, and an
entity without assignments still yields a zero total.
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from uuid import UUID

from app.models.academic import Department, Teacher
from app.models.course import Semester, TeacherAssignment
from app.services.calculator import ClassPayroll, compute_class_payroll
from app.services.lookup import (
    TeacherCoefficientTable,
    TeacherCoefficientValue,
    YearConfiguration,
)


@dataclass
class PayrollTotals:
    """Running totals of a group of assigned classes."""

    class_count: int = 0
    total_periods: int = 0
    total_converted_periods: Decimal = field(default_factory=lambda: Decimal("0"))
    total_salary: Decimal = field(default_factory=lambda: Decimal("0"))

    def add_class(self, total_periods: int, payroll: ClassPayroll) -> None:
        self.class_count += 1
        self.total_periods += total_periods
        self.total_converted_periods += payroll.converted_periods
        self.total_salary += payroll.class_salary

    def add(self, other: "PayrollTotals") -> None:
        self.class_count += other.class_count
        self.total_periods += other.total_periods
        self.total_converted_periods += other.total_converted_periods
        self.total_salary += other.total_salary


@dataclass(frozen=True)
class PricedAssignment:
    """An assignment together with its computed payroll."""

    assignment: TeacherAssignment
    payroll: ClassPayroll


@dataclass(frozen=True)
class SemesterTotals:
    semester: Semester
    totals: PayrollTotals


@dataclass(frozen=True)
class TeacherTotals:
    teacher: Teacher
    coefficient: TeacherCoefficientValue
    totals: PayrollTotals


@dataclass(frozen=True)
class DepartmentTotals:
    department: Department
    totals: PayrollTotals


def price_assignment(
    assignment: TeacherAssignment,
    config: YearConfiguration,
    coefficient: TeacherCoefficientValue,
) -> PricedAssignment:
    """Compute the payroll of one assignment."""
    course_class = assignment.course_class
    payroll = compute_class_payroll(
        subject=course_class.subject,
        course_class=course_class,
        teacher_coefficient=coefficient.value,
        hourly_rate=config.rate_per_hour,
        standard_range=config.standard_student_range,
    )
    return PricedAssignment(assignment=assignment, payroll=payroll)


def sum_assignments(
    assignments: Iterable[TeacherAssignment],
    config: YearConfiguration,
    coefficients: TeacherCoefficientTable,
) -> PayrollTotals:
    """Sum assignments that may belong to different teachers."""
    totals = PayrollTotals()
    for assignment in assignments:
        coefficient = coefficients.resolve(assignment.teacher.degree_id)
        priced = price_assignment(assignment, config, coefficient)
        totals.add_class(assignment.course_class.subject.total_periods, priced.payroll)
    return totals


def combine(totals: Iterable[PayrollTotals]) -> PayrollTotals:
    """Sum several groups into one."""
    combined = PayrollTotals()
    for item in totals:
        combined.add(item)
    return combined


def aggregate_teacher_semesters(
    semesters: Sequence[Semester],
    assignments: Sequence[TeacherAssignment],
    config: YearConfiguration,
    coefficients: TeacherCoefficientTable,
) -> list[SemesterTotals]:
    """Teacher-semester totals for every semester, in the given order."""
    by_semester: dict[UUID, list[TeacherAssignment]] = defaultdict(list)
    for assignment in assignments:
        by_semester[assignment.course_class.semester_id].append(assignment)

    return [
        SemesterTotals(
            semester=semester,
            totals=sum_assignments(by_semester.get(semester.id, []), config, coefficients),
        )
        for semester in semesters
    ]


def aggregate_by_teacher(
    teachers: Sequence[Teacher],
    assignments: Sequence[TeacherAssignment],
    config: YearConfiguration,
    coefficients: TeacherCoefficientTable,
) -> list[TeacherTotals]:
    """Per-teacher totals, including teachers without assignments."""
    by_teacher: dict[UUID, list[TeacherAssignment]] = defaultdict(list)
    for assignment in assignments:
        by_teacher[assignment.teacher_id].append(assignment)

    results = []
    for teacher in teachers:
        teacher_assignments = by_teacher.get(teacher.id, [])
        coefficient = coefficients.resolve(teacher.degree_id, applied=bool(teacher_assignments))
        totals = PayrollTotals()
        for assignment in teacher_assignments:
            priced = price_assignment(assignment, config, coefficient)
            totals.add_class(assignment.course_class.subject.total_periods, priced.payroll)
        results.append(TeacherTotals(teacher=teacher, coefficient=coefficient, totals=totals))
    return results


def aggregate_by_department(
    departments: Sequence[Department],
    assignments: Sequence[TeacherAssignment],
    config: YearConfiguration,
    coefficients: TeacherCoefficientTable,
) -> list[DepartmentTotals]:
    """Per-department totals, including departments without assignments."""
    by_department: dict[UUID, list[TeacherAssignment]] = defaultdict(list)
    for assignment in assignments:
        by_department[assignment.teacher.department_id].append(assignment)

    return [
        DepartmentTotals(
            department=department,
            totals=sum_assignments(by_department.get(department.id, []), config, coefficients),
        )
        for department in departments
    ]
