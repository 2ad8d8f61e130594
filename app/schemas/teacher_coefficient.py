"""Teacher coefficient schemas."""

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from app.schemas.report import DegreeInfo
from app.schemas.validators import AcademicYear

MIN_TEACHER_COEFFICIENT = Decimal("0.1")
MAX_TEACHER_COEFFICIENT = Decimal("5.0")


class TeacherCoefficientCreate(BaseModel):
    """Schema for setting the coefficient of a degree in an academic year."""

    academic_year: AcademicYear
    degree_id: UUID
    coefficient: Decimal = Field(..., ge=MIN_TEACHER_COEFFICIENT, le=MAX_TEACHER_COEFFICIENT)


class TeacherCoefficientUpdate(BaseModel):
    """Schema for updating a teacher coefficient."""

    coefficient: Decimal = Field(..., ge=MIN_TEACHER_COEFFICIENT, le=MAX_TEACHER_COEFFICIENT)


class TeacherCoefficientBatchItem(BaseModel):
    degree_id: UUID
    coefficient: Decimal = Field(..., ge=MIN_TEACHER_COEFFICIENT, le=MAX_TEACHER_COEFFICIENT)


class TeacherCoefficientBatchUpsert(BaseModel):
    """Schema for setting several degree coefficients of one year at once."""

    academic_year: AcademicYear
    coefficients: list[TeacherCoefficientBatchItem] = Field(..., min_length=1)


class TeacherCoefficientResponse(BaseModel):
    """
    Teacher coefficient response schema.

    Rows of degrees without a stored record have ``id`` None and
    ``is_default`` True.
    """

    id: UUID | None
    academic_year: str
    degree_id: UUID
    degree: DegreeInfo
    coefficient: Decimal
    is_default: bool = False

    model_config = {"from_attributes": True}


class TeacherCoefficientListResponse(BaseModel):
    """List of teacher coefficients."""

    items: list[TeacherCoefficientResponse]
    total: int
