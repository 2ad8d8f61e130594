"""Payroll calculation schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel

from app.schemas.report import ClassPayrollLine, CoefficientsUsed, SemesterInfo, TeacherInfo
from app.schemas.validators import AcademicYear


class PayrollCalculateRequest(BaseModel):
    """Schema for calculating one teacher's payroll in a semester."""

    academic_year: AcademicYear
    semester_id: UUID
    teacher_id: UUID


class PayrollResult(BaseModel):
    """Per-class payroll breakdown of a teacher in a semester."""

    teacher: TeacherInfo
    semester: SemesterInfo
    coefficients: CoefficientsUsed
    classes: list[ClassPayrollLine]
    total_salary: Decimal
    calculated_at: datetime


class AcademicYearListResponse(BaseModel):
    """Academic years that have semesters."""

    items: list[str]
