"""Report schemas."""

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field


# ============== Shared ==============


class DegreeInfo(BaseModel):
    """Degree of a teacher."""

    id: UUID
    full_name: str
    short_name: str

    model_config = {"from_attributes": True}


class DepartmentInfo(BaseModel):
    """Department of a teacher or report."""

    id: UUID
    full_name: str
    short_name: str

    model_config = {"from_attributes": True}


class TeacherInfo(BaseModel):
    """Teacher a report is about."""

    id: UUID
    code: str
    full_name: str
    degree: DegreeInfo
    department: DepartmentInfo | None = None

    model_config = {"from_attributes": True}


class SemesterInfo(BaseModel):
    """Semester a report is restricted to."""

    id: UUID
    academic_year: str
    term_number: int
    is_supplementary: bool
    name: str

    model_config = {"from_attributes": True}


class CoefficientsUsed(BaseModel):
    """Configuration values a report was computed with."""

    hourly_rate: Decimal
    standard_student_range: str
    teacher_coefficient: Decimal | None = Field(
        None, description="Only set on single-teacher reports"
    )
    teacher_coefficient_is_default: bool | None = Field(
        None, description="True when no coefficient is configured for the degree"
    )


class ReportSummary(BaseModel):
    """Totals of a report, rounded for display."""

    total_classes: int
    total_periods: int
    total_converted_periods: Decimal = Field(description="Rounded to 1 decimal place")
    total_salary: Decimal = Field(description="Rounded to whole currency units")


# ============== Line Items ==============


class ClassPayrollLine(BaseModel):
    """Payroll of one assigned course class."""

    course_class_id: UUID
    course_class_code: str
    course_class_name: str
    subject_name: str
    total_periods: int
    student_count: int
    subject_coefficient: Decimal
    class_coefficient: Decimal
    converted_periods: Decimal
    class_salary: Decimal


class SemesterLine(BaseModel):
    """Totals of one semester in a teacher's year."""

    semester_id: UUID
    semester_name: str
    term_number: int
    is_supplementary: bool
    class_count: int
    total_periods: int
    total_converted_periods: Decimal
    total_salary: Decimal


class TeacherLine(BaseModel):
    """Totals of one teacher in a department."""

    teacher_id: UUID
    teacher_name: str
    teacher_code: str
    degree: DegreeInfo
    teacher_coefficient: Decimal
    teacher_coefficient_is_default: bool
    class_count: int
    total_periods: int
    total_converted_periods: Decimal
    total_salary: Decimal


class DepartmentLine(BaseModel):
    """Totals of one department in the institution."""

    department_id: UUID
    department_name: str
    department_short_name: str
    class_count: int
    total_periods: int
    total_converted_periods: Decimal
    total_salary: Decimal


# ============== Reports ==============


class TeacherSemesterReport(BaseModel):
    """Payroll of a teacher in one semester."""

    teacher: TeacherInfo
    semester: SemesterInfo
    coefficients: CoefficientsUsed
    classes: list[ClassPayrollLine]
    summary: ReportSummary


class TeacherYearlyReport(BaseModel):
    """Payroll of a teacher over an academic year."""

    teacher: TeacherInfo
    academic_year: str
    coefficients: CoefficientsUsed
    semesters: list[SemesterLine]
    summary: ReportSummary


class DepartmentReport(BaseModel):
    """Payroll of every teacher in a department."""

    department: DepartmentInfo
    academic_year: str
    semester: SemesterInfo | None
    coefficients: CoefficientsUsed
    teachers: list[TeacherLine]
    summary: ReportSummary


class InstitutionReport(BaseModel):
    """Payroll of every department."""

    academic_year: str
    semester: SemesterInfo | None
    coefficients: CoefficientsUsed
    departments: list[DepartmentLine]
    summary: ReportSummary
