"""Teaching assignment and workload schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from app.schemas.report import SemesterInfo, TeacherInfo

MAX_BULK_ASSIGNMENTS = 50


class AssignmentCreate(BaseModel):
    """Schema for assigning a teacher to a course class."""

    teacher_id: UUID
    course_class_id: UUID


class AssignmentUpdate(BaseModel):
    """Schema for reassigning a class or moving an assignment to another class."""

    teacher_id: UUID | None = None
    course_class_id: UUID | None = None


class BulkAssignmentCreate(BaseModel):
    """Assign one teacher to several course classes at once."""

    teacher_id: UUID
    course_class_ids: list[UUID] = Field(..., min_length=1, max_length=MAX_BULK_ASSIGNMENTS)


class AssignmentResponse(BaseModel):
    """Assignment response schema."""

    id: UUID
    teacher_id: UUID
    course_class_id: UUID
    created_at: datetime

    model_config = {"from_attributes": True}


# ============== Detail ==============


class SubjectInfo(BaseModel):
    """Subject of a course class."""

    id: UUID
    code: str
    name: str
    credits: int
    total_periods: int
    department_id: UUID | None = None

    model_config = {"from_attributes": True}


class CourseClassInfo(BaseModel):
    """Course class with its subject and semester."""

    id: UUID
    code: str
    name: str
    student_count: int
    subject: SubjectInfo
    semester: SemesterInfo

    model_config = {"from_attributes": True}


class AssignmentDetail(BaseModel):
    """Assignment with its teacher and course class."""

    id: UUID
    teacher: TeacherInfo
    course_class: CourseClassInfo
    created_at: datetime

    model_config = {"from_attributes": True}


class AssignmentListResponse(BaseModel):
    """Paginated list of assignments."""

    items: list[AssignmentDetail]
    total: int
    skip: int
    limit: int


class UnassignedClassListResponse(BaseModel):
    """Course classes that no teacher is assigned to."""

    items: list[CourseClassInfo]
    total: int


class ReplacedAssignment(BaseModel):
    """A course class taken over from another teacher by a bulk assignment."""

    course_class_id: UUID
    course_class_name: str
    previous_teacher_name: str


class BulkAssignmentResult(BaseModel):
    """Outcome of a bulk assignment."""

    teacher_name: str
    total_processed: int
    created_count: int
    updated_count: int
    replaced: list[ReplacedAssignment]


# ============== Workload ==============


class WorkloadLine(BaseModel):
    """One assigned course class of a teacher."""

    assignment_id: UUID
    course_class_id: UUID
    course_class_code: str
    course_class_name: str
    subject_code: str
    subject_name: str
    credits: int
    total_periods: int
    student_count: int
    semester: SemesterInfo


class WorkloadSummary(BaseModel):
    total_classes: int
    total_students: int
    total_credits: int
    total_periods: int


class TeacherWorkload(BaseModel):
    """Teaching load of a teacher, optionally restricted to one semester."""

    teacher: TeacherInfo
    semester_id: UUID | None
    summary: WorkloadSummary
    assignments: list[WorkloadLine]
