"""Read access used by the payroll engine.

The engine never talks to the database directly. It receives a
``PayrollRepository`` per request; the API wires in
``SQLAlchemyPayrollRepository`` around the request's session and tests can
pass an in-memory implementation.
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.academic import Department, Teacher
from app.models.course import CourseClass, Semester, TeacherAssignment
from app.models.rate import ClassCoefficient, HourlyRate, TeacherCoefficient


@runtime_checkable
class PayrollRepository(Protocol):
    """
    Protocol for loading the entities a payroll computation reads.

    Ordering is part of the contract: list methods return rows in the order
    reports display them.
    """

    async def get_teacher(self, teacher_id: UUID) -> Teacher | None:
        """Return the teacher with degree and department loaded."""
        ...

    async def get_department(self, department_id: UUID) -> Department | None: ...

    async def get_semester(self, semester_id: UUID) -> Semester | None: ...

    async def list_semesters(self, academic_year: str) -> list[Semester]:
        """Semesters of a year, by term number then supplementary flag."""
        ...

    async def list_departments(self) -> list[Department]:
        """All departments by full name."""
        ...

    async def list_department_teachers(self, department_id: UUID) -> list[Teacher]:
        """Teachers of a department by full name, with degree loaded."""
        ...

    async def get_hourly_rate(self, academic_year: str) -> HourlyRate | None: ...

    async def get_class_coefficient(self, academic_year: str) -> ClassCoefficient | None: ...

    async def list_teacher_coefficients(self, academic_year: str) -> list[TeacherCoefficient]: ...

    async def list_assignments(
        self,
        semester_ids: Sequence[UUID],
        teacher_ids: Sequence[UUID] | None = None,
    ) -> list[TeacherAssignment]:
        """
        Assignments whose course class belongs to one of ``semester_ids``.

        Each assignment has its teacher and its course class (with subject
        and semester) loaded. ``teacher_ids=None`` means every teacher.
        """
        ...

    async def list_academic_years(self) -> list[str]:
        """Distinct academic years that have semesters, ascending."""
        ...


class SQLAlchemyPayrollRepository:
    """PayrollRepository backed by an async SQLAlchemy session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_teacher(self, teacher_id: UUID) -> Teacher | None:
        result = await self.db.execute(
            select(Teacher)
            .options(selectinload(Teacher.degree), selectinload(Teacher.department))
            .where(Teacher.id == teacher_id)
        )
        return result.scalar_one_or_none()

    async def get_department(self, department_id: UUID) -> Department | None:
        result = await self.db.execute(
            select(Department).where(Department.id == department_id)
        )
        return result.scalar_one_or_none()

    async def get_semester(self, semester_id: UUID) -> Semester | None:
        result = await self.db.execute(
            select(Semester).where(Semester.id == semester_id)
        )
        return result.scalar_one_or_none()

    async def list_semesters(self, academic_year: str) -> list[Semester]:
        result = await self.db.execute(
            select(Semester)
            .where(Semester.academic_year == academic_year)
            .order_by(Semester.term_number.asc(), Semester.is_supplementary.asc())
        )
        return list(result.scalars().all())

    async def list_departments(self) -> list[Department]:
        result = await self.db.execute(
            select(Department).order_by(Department.full_name.asc())
        )
        return list(result.scalars().all())

    async def list_department_teachers(self, department_id: UUID) -> list[Teacher]:
        result = await self.db.execute(
            select(Teacher)
            .options(selectinload(Teacher.degree))
            .where(Teacher.department_id == department_id)
            .order_by(Teacher.full_name.asc())
        )
        return list(result.scalars().all())

    async def get_hourly_rate(self, academic_year: str) -> HourlyRate | None:
        result = await self.db.execute(
            select(HourlyRate).where(HourlyRate.academic_year == academic_year)
        )
        return result.scalar_one_or_none()

    async def get_class_coefficient(self, academic_year: str) -> ClassCoefficient | None:
        result = await self.db.execute(
            select(ClassCoefficient).where(ClassCoefficient.academic_year == academic_year)
        )
        return result.scalar_one_or_none()

    async def list_teacher_coefficients(self, academic_year: str) -> list[TeacherCoefficient]:
        result = await self.db.execute(
            select(TeacherCoefficient).where(TeacherCoefficient.academic_year == academic_year)
        )
        return list(result.scalars().all())

    async def list_assignments(
        self,
        semester_ids: Sequence[UUID],
        teacher_ids: Sequence[UUID] | None = None,
    ) -> list[TeacherAssignment]:
        if not semester_ids or (teacher_ids is not None and not teacher_ids):
            return []

        query = (
            select(TeacherAssignment)
            .join(TeacherAssignment.course_class)
            .options(
                selectinload(TeacherAssignment.teacher),
                selectinload(TeacherAssignment.course_class).selectinload(CourseClass.subject),
                selectinload(TeacherAssignment.course_class).selectinload(CourseClass.semester),
            )
            .where(CourseClass.semester_id.in_(semester_ids))
        )
        if teacher_ids is not None:
            query = query.where(TeacherAssignment.teacher_id.in_(teacher_ids))

        result = await self.db.execute(query.order_by(CourseClass.code.asc()))
        return list(result.scalars().all())

    async def list_academic_years(self) -> list[str]:
        result = await self.db.execute(
            select(Semester.academic_year)
            .distinct()
            .order_by(Semester.academic_year.asc())
        )
        return list(result.scalars().all())
