"""Pydantic schemas."""

from app.schemas.payroll import (
    AcademicYearListResponse,
    PayrollCalculateRequest,
    PayrollResult,
)
from app.schemas.report import (
    DepartmentReport,
    InstitutionReport,
    TeacherSemesterReport,
    TeacherYearlyReport,
)

__all__ = [
    # Payroll
    "AcademicYearListResponse",
    "PayrollCalculateRequest",
    "PayrollResult",
    # Reports
    "DepartmentReport",
    "InstitutionReport",
    "TeacherSemesterReport",
    "TeacherYearlyReport",
]
