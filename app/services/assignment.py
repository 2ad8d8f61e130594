"""Assignment service - teaching assignments and teacher workload."""

import logging
from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.academic import Teacher
from app.models.course import CourseClass, Semester, Subject, TeacherAssignment
from app.schemas.assignment import (
    AssignmentCreate,
    AssignmentUpdate,
    BulkAssignmentResult,
    ReplacedAssignment,
    TeacherWorkload,
    WorkloadLine,
    WorkloadSummary,
)
from app.schemas.report import SemesterInfo, TeacherInfo

logger = logging.getLogger(__name__)

DETAIL_OPTIONS = (
    selectinload(TeacherAssignment.teacher).selectinload(Teacher.degree),
    selectinload(TeacherAssignment.teacher).selectinload(Teacher.department),
    selectinload(TeacherAssignment.course_class).selectinload(CourseClass.subject),
    selectinload(TeacherAssignment.course_class).selectinload(CourseClass.semester),
)


async def get_teacher_by_id(db: AsyncSession, teacher_id: UUID) -> Teacher | None:
    """Get teacher by ID with degree and department loaded."""
    result = await db.execute(
        select(Teacher)
        .options(selectinload(Teacher.degree), selectinload(Teacher.department))
        .where(Teacher.id == teacher_id)
    )
    return result.scalar_one_or_none()


async def get_course_class_by_id(db: AsyncSession, course_class_id: UUID) -> CourseClass | None:
    """Get course class by ID."""
    result = await db.execute(select(CourseClass).where(CourseClass.id == course_class_id))
    return result.scalar_one_or_none()


async def get_course_classes_by_ids(
    db: AsyncSession,
    course_class_ids: Sequence[UUID],
) -> list[CourseClass]:
    """Get the course classes with the given IDs, ordered by code."""
    result = await db.execute(
        select(CourseClass)
        .where(CourseClass.id.in_(course_class_ids))
        .order_by(CourseClass.code)
    )
    return list(result.scalars().all())


async def get_assignment_by_id(db: AsyncSession, assignment_id: UUID) -> TeacherAssignment | None:
    """Get assignment by ID."""
    result = await db.execute(
        select(TeacherAssignment).where(TeacherAssignment.id == assignment_id)
    )
    return result.scalar_one_or_none()


async def get_assignment_detail(
    db: AsyncSession,
    assignment_id: UUID,
) -> TeacherAssignment | None:
    """Get assignment by ID with its teacher and course class loaded."""
    result = await db.execute(
        select(TeacherAssignment)
        .options(*DETAIL_OPTIONS)
        .where(TeacherAssignment.id == assignment_id)
    )
    return result.scalar_one_or_none()


async def get_assignments(
    db: AsyncSession,
    *,
    teacher_id: UUID | None = None,
    course_class_id: UUID | None = None,
    semester_id: UUID | None = None,
    subject_id: UUID | None = None,
    department_id: UUID | None = None,
    search: str | None = None,
    skip: int = 0,
    limit: int = 20,
) -> tuple[list[TeacherAssignment], int]:
    """
    Get assignments with optional filters.

    ``department_id`` filters on the department owning the subject. ``search``
    matches course class code or name, subject name and, unless a teacher is
    given, the teacher's name.
    """
    query = (
        select(TeacherAssignment)
        .join(TeacherAssignment.course_class)
        .join(CourseClass.subject)
        .join(TeacherAssignment.teacher)
        .options(*DETAIL_OPTIONS)
    )
    count_query = (
        select(func.count(TeacherAssignment.id))
        .join(TeacherAssignment.course_class)
        .join(CourseClass.subject)
        .join(TeacherAssignment.teacher)
    )

    filters = []
    if teacher_id:
        filters.append(TeacherAssignment.teacher_id == teacher_id)
    if course_class_id:
        filters.append(TeacherAssignment.course_class_id == course_class_id)
    if semester_id:
        filters.append(CourseClass.semester_id == semester_id)
    if subject_id:
        filters.append(CourseClass.subject_id == subject_id)
    if department_id:
        filters.append(Subject.department_id == department_id)

    if search:
        search_filter = (
            CourseClass.code.ilike(f"%{search}%")
            | CourseClass.name.ilike(f"%{search}%")
            | Subject.name.ilike(f"%{search}%")
        )
        if not teacher_id:
            search_filter = search_filter | Teacher.full_name.ilike(f"%{search}%")
        filters.append(search_filter)

    if filters:
        query = query.where(*filters)
        count_query = count_query.where(*filters)

    query = query.order_by(CourseClass.code).offset(skip).limit(limit)

    result = await db.execute(query)
    assignments = list(result.scalars().all())

    count_result = await db.execute(count_query)
    total = count_result.scalar() or 0

    return assignments, total


async def get_assignment_by_course_class(
    db: AsyncSession,
    course_class_id: UUID,
) -> TeacherAssignment | None:
    """Get the assignment of a course class, if it is already assigned."""
    result = await db.execute(
        select(TeacherAssignment).where(TeacherAssignment.course_class_id == course_class_id)
    )
    return result.scalar_one_or_none()


async def create_assignment(
    db: AsyncSession,
    assignment_data: AssignmentCreate,
) -> TeacherAssignment:
    """Assign a teacher to a course class."""
    assignment = TeacherAssignment(
        teacher_id=assignment_data.teacher_id,
        course_class_id=assignment_data.course_class_id,
    )
    db.add(assignment)
    await db.commit()
    await db.refresh(assignment)
    return assignment


async def update_assignment(
    db: AsyncSession,
    assignment: TeacherAssignment,
    assignment_data: AssignmentUpdate,
) -> TeacherAssignment:
    """Update an assignment's teacher or course class."""
    update_data = assignment_data.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(assignment, field, value)

    await db.commit()
    await db.refresh(assignment)
    return assignment


async def bulk_assign(
    db: AsyncSession,
    teacher: Teacher,
    course_classes: Sequence[CourseClass],
) -> BulkAssignmentResult:
    """
    Assign one teacher to several course classes.

    Unassigned classes get a new assignment. Classes taught by another teacher
    are reassigned and reported in ``replaced``. Classes the teacher already
    teaches are left untouched.
    """
    result = await db.execute(
        select(TeacherAssignment)
        .options(selectinload(TeacherAssignment.teacher))
        .where(TeacherAssignment.course_class_id.in_([c.id for c in course_classes]))
    )
    existing = {assignment.course_class_id: assignment for assignment in result.scalars().all()}

    created_count = 0
    replaced = []
    for course_class in course_classes:
        current = existing.get(course_class.id)
        if current is None:
            db.add(TeacherAssignment(teacher_id=teacher.id, course_class_id=course_class.id))
            created_count += 1
        elif current.teacher_id != teacher.id:
            replaced.append(
                ReplacedAssignment(
                    course_class_id=course_class.id,
                    course_class_name=course_class.name,
                    previous_teacher_name=current.teacher.full_name,
                )
            )
            current.teacher = teacher

    await db.commit()

    logger.info(
        "Bulk assigned teacher %s: %d new, %d reassigned",
        teacher.code,
        created_count,
        len(replaced),
    )

    return BulkAssignmentResult(
        teacher_name=teacher.full_name,
        total_processed=created_count + len(replaced),
        created_count=created_count,
        updated_count=len(replaced),
        replaced=replaced,
    )


async def delete_assignment(db: AsyncSession, assignment: TeacherAssignment) -> None:
    """Delete an assignment."""
    await db.delete(assignment)
    await db.commit()


async def get_unassigned_classes(
    db: AsyncSession,
    *,
    semester_id: UUID | None = None,
    subject_id: UUID | None = None,
    department_id: UUID | None = None,
) -> list[CourseClass]:
    """Get course classes without a teacher, latest semester first."""
    query = (
        select(CourseClass)
        .join(CourseClass.subject)
        .join(CourseClass.semester)
        .options(selectinload(CourseClass.subject), selectinload(CourseClass.semester))
        .where(~CourseClass.assignments.any())
    )
    if semester_id:
        query = query.where(CourseClass.semester_id == semester_id)
    if subject_id:
        query = query.where(CourseClass.subject_id == subject_id)
    if department_id:
        query = query.where(Subject.department_id == department_id)

    query = query.order_by(
        Semester.academic_year.desc(),
        Semester.term_number.desc(),
        Semester.is_supplementary.desc(),
        Subject.name,
        CourseClass.code,
    )
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_teacher_workload(
    db: AsyncSession,
    teacher: Teacher,
    semester_id: UUID | None = None,
) -> TeacherWorkload:
    """
    Get the teaching load of a teacher.

    Totals cover classes, enrolled students, subject credits and nominal
    periods. Restricted to one semester when ``semester_id`` is given.
    """
    query = (
        select(TeacherAssignment)
        .join(TeacherAssignment.course_class)
        .options(
            selectinload(TeacherAssignment.course_class).selectinload(CourseClass.subject),
            selectinload(TeacherAssignment.course_class).selectinload(CourseClass.semester),
        )
        .where(TeacherAssignment.teacher_id == teacher.id)
    )
    if semester_id:
        query = query.where(CourseClass.semester_id == semester_id)

    result = await db.execute(query.order_by(CourseClass.code.asc()))
    assignments = list(result.scalars().all())

    lines = []
    for assignment in assignments:
        course_class = assignment.course_class
        lines.append(
            WorkloadLine(
                assignment_id=assignment.id,
                course_class_id=course_class.id,
                course_class_code=course_class.code,
                course_class_name=course_class.name,
                subject_code=course_class.subject.code,
                subject_name=course_class.subject.name,
                credits=course_class.subject.credits,
                total_periods=course_class.subject.total_periods,
                student_count=course_class.student_count,
                semester=SemesterInfo.model_validate(course_class.semester),
            )
        )

    summary = WorkloadSummary(
        total_classes=len(lines),
        total_students=sum(line.student_count for line in lines),
        total_credits=sum(line.credits for line in lines),
        total_periods=sum(line.total_periods for line in lines),
    )

    return TeacherWorkload(
        teacher=TeacherInfo.model_validate(teacher),
        semester_id=semester_id,
        summary=summary,
        assignments=lines,
    )
