"""Teaching Assignment API routes."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import DbSession
from app.models.academic import Teacher
from app.models.course import CourseClass, TeacherAssignment
from app.schemas.assignment import (
    AssignmentCreate,
    AssignmentDetail,
    AssignmentListResponse,
    AssignmentResponse,
    AssignmentUpdate,
    BulkAssignmentCreate,
    BulkAssignmentResult,
    CourseClassInfo,
    TeacherWorkload,
    UnassignedClassListResponse,
)
from app.services import assignment as assignment_service

router = APIRouter(prefix="/assignments", tags=["Assignments"])


# ============== Helper Functions ==============


async def get_teacher_or_404(db: AsyncSession, teacher_id: UUID) -> Teacher:
    teacher = await assignment_service.get_teacher_by_id(db, teacher_id)
    if not teacher:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Teacher not found",
        )
    return teacher


async def get_course_class_or_404(db: AsyncSession, course_class_id: UUID) -> CourseClass:
    course_class = await assignment_service.get_course_class_by_id(db, course_class_id)
    if not course_class:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Course class not found",
        )
    return course_class


async def get_assignment_or_404(db: AsyncSession, assignment_id: UUID) -> TeacherAssignment:
    assignment = await assignment_service.get_assignment_by_id(db, assignment_id)
    if not assignment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Assignment not found",
        )
    return assignment


@router.get("", response_model=AssignmentListResponse)
async def list_assignments(
    db: DbSession,
    teacher_id: UUID | None = Query(None, description="Filter by teacher ID"),
    course_class_id: UUID | None = Query(None, description="Filter by course class ID"),
    semester_id: UUID | None = Query(None, description="Filter by semester ID"),
    subject_id: UUID | None = Query(None, description="Filter by subject ID"),
    department_id: UUID | None = Query(None, description="Filter by subject department ID"),
    search: str | None = Query(None, description="Search by class, subject or teacher name"),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(20, ge=1, le=100, description="Max number of records"),
) -> AssignmentListResponse:
    """List assignments with their teacher and course class, ordered by class code."""
    assignments, total = await assignment_service.get_assignments(
        db,
        teacher_id=teacher_id,
        course_class_id=course_class_id,
        semester_id=semester_id,
        subject_id=subject_id,
        department_id=department_id,
        search=search,
        skip=skip,
        limit=limit,
    )

    return AssignmentListResponse(
        items=[AssignmentDetail.model_validate(a) for a in assignments],
        total=total,
        skip=skip,
        limit=limit,
    )


@router.get("/unassigned-classes", response_model=UnassignedClassListResponse)
async def list_unassigned_classes(
    db: DbSession,
    semester_id: UUID | None = Query(None, description="Filter by semester ID"),
    subject_id: UUID | None = Query(None, description="Filter by subject ID"),
    department_id: UUID | None = Query(None, description="Filter by subject department ID"),
) -> UnassignedClassListResponse:
    """List course classes that still need a teacher."""
    course_classes = await assignment_service.get_unassigned_classes(
        db,
        semester_id=semester_id,
        subject_id=subject_id,
        department_id=department_id,
    )

    return UnassignedClassListResponse(
        items=[CourseClassInfo.model_validate(c) for c in course_classes],
        total=len(course_classes),
    )


@router.post("", response_model=AssignmentResponse, status_code=status.HTTP_201_CREATED)
async def create_assignment(
    db: DbSession,
    assignment_data: AssignmentCreate,
) -> AssignmentResponse:
    """
    Assign a teacher to a course class.

    A course class is taught by exactly one teacher.
    """
    await get_teacher_or_404(db, assignment_data.teacher_id)
    course_class = await get_course_class_or_404(db, assignment_data.course_class_id)

    if await assignment_service.get_assignment_by_course_class(db, course_class.id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Course class is already assigned to a teacher",
        )

    assignment = await assignment_service.create_assignment(db, assignment_data)
    return AssignmentResponse.model_validate(assignment)


@router.post("/bulk", response_model=BulkAssignmentResult)
async def bulk_assign(
    db: DbSession,
    bulk_data: BulkAssignmentCreate,
) -> BulkAssignmentResult:
    """
    Assign one teacher to several course classes.

    Classes already taught by another teacher are reassigned to this one.
    """
    teacher = await get_teacher_or_404(db, bulk_data.teacher_id)

    course_class_ids = list(dict.fromkeys(bulk_data.course_class_ids))
    course_classes = await assignment_service.get_course_classes_by_ids(db, course_class_ids)
    if len(course_classes) != len(course_class_ids):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="One or more course classes not found",
        )

    return await assignment_service.bulk_assign(db, teacher, course_classes)


@router.get("/{assignment_id}", response_model=AssignmentDetail)
async def get_assignment(db: DbSession, assignment_id: UUID) -> AssignmentDetail:
    """Get an assignment with its teacher and course class."""
    assignment = await assignment_service.get_assignment_detail(db, assignment_id)
    if not assignment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Assignment not found",
        )

    return AssignmentDetail.model_validate(assignment)


@router.patch("/{assignment_id}", response_model=AssignmentResponse)
async def update_assignment(
    db: DbSession,
    assignment_id: UUID,
    assignment_data: AssignmentUpdate,
) -> AssignmentResponse:
    """Reassign a course class to another teacher, or move the assignment to another class."""
    assignment = await get_assignment_or_404(db, assignment_id)

    if assignment_data.teacher_id:
        await get_teacher_or_404(db, assignment_data.teacher_id)

    if (
        assignment_data.course_class_id
        and assignment_data.course_class_id != assignment.course_class_id
    ):
        course_class = await get_course_class_or_404(db, assignment_data.course_class_id)
        if await assignment_service.get_assignment_by_course_class(db, course_class.id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Course class is already assigned to a teacher",
            )

    assignment = await assignment_service.update_assignment(db, assignment, assignment_data)
    return AssignmentResponse.model_validate(assignment)


@router.delete("/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_assignment(db: DbSession, assignment_id: UUID) -> None:
    """Delete an assignment."""
    assignment = await get_assignment_or_404(db, assignment_id)
    await assignment_service.delete_assignment(db, assignment)


@router.get("/teachers/{teacher_id}/workload", response_model=TeacherWorkload)
async def get_teacher_workload(
    db: DbSession,
    teacher_id: UUID,
    semester_id: UUID | None = Query(None, description="Restrict to one semester"),
) -> TeacherWorkload:
    """Get a teacher's classes with student, credit and period totals."""
    teacher = await get_teacher_or_404(db, teacher_id)
    return await assignment_service.get_teacher_workload(db, teacher, semester_id=semester_id)
