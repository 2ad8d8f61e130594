"""Class coefficient schemas."""

from uuid import UUID

from pydantic import BaseModel

from app.schemas.validators import AcademicYear, StudentRange


class ClassCoefficientCreate(BaseModel):
    """Schema for setting the standard student range of an academic year."""

    academic_year: AcademicYear
    standard_student_range: StudentRange


class ClassCoefficientUpdate(BaseModel):
    """Schema for updating a class coefficient."""

    academic_year: AcademicYear | None = None
    standard_student_range: StudentRange | None = None


class ClassCoefficientUpsert(BaseModel):
    """Schema for creating or replacing the class coefficient of a year."""

    standard_student_range: StudentRange


class ClassCoefficientResponse(BaseModel):
    """
    Class coefficient response schema.

    ``id`` is None and ``is_default`` is True when the academic year has no
    stored record.
    """

    id: UUID | None
    academic_year: str
    standard_student_range: str
    is_default: bool = False

    model_config = {"from_attributes": True}


class ClassCoefficientListResponse(BaseModel):
    """List of class coefficients, newest academic year first."""

    items: list[ClassCoefficientResponse]
    total: int


class StudentRangeListResponse(BaseModel):
    """Valid class size bands, smallest first."""

    items: list[str]
    default: str
