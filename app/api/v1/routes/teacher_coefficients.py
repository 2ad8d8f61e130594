"""Teacher Coefficient API routes."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import AcademicYearPath, DbSession
from app.models.rate import TeacherCoefficient
from app.schemas.teacher_coefficient import (
    TeacherCoefficientBatchUpsert,
    TeacherCoefficientCreate,
    TeacherCoefficientListResponse,
    TeacherCoefficientResponse,
    TeacherCoefficientUpdate,
)
from app.schemas.validators import validate_academic_year
from app.services import teacher_coefficient as coefficient_service

router = APIRouter(prefix="/teacher-coefficients", tags=["Teacher Coefficients"])


# ============== Helper Functions ==============


async def get_teacher_coefficient_or_404(
    db: AsyncSession,
    coefficient_id: UUID,
) -> TeacherCoefficient:
    teacher_coefficient = await coefficient_service.get_teacher_coefficient_by_id(
        db, coefficient_id
    )
    if not teacher_coefficient:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Teacher coefficient not found",
        )
    return teacher_coefficient


# ============== Endpoints ==============


@router.get("", response_model=TeacherCoefficientListResponse)
async def list_teacher_coefficients(
    db: DbSession,
    academic_year: str | None = Query(None, description="Filter by academic year"),
) -> TeacherCoefficientListResponse:
    """List stored teacher coefficients, newest academic year first."""
    if academic_year:
        try:
            validate_academic_year(academic_year)
        except ValueError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(e),
            )

    coefficients, total = await coefficient_service.get_teacher_coefficients(
        db, academic_year=academic_year
    )
    return TeacherCoefficientListResponse(
        items=[TeacherCoefficientResponse.model_validate(c) for c in coefficients],
        total=total,
    )


@router.post("", response_model=TeacherCoefficientResponse, status_code=status.HTTP_201_CREATED)
async def create_teacher_coefficient(
    db: DbSession,
    coefficient_data: TeacherCoefficientCreate,
) -> TeacherCoefficientResponse:
    """Set the coefficient of a degree in an academic year."""
    degree = await coefficient_service.get_degree_by_id(db, coefficient_data.degree_id)
    if not degree:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Degree not found",
        )

    if await coefficient_service.get_teacher_coefficient(
        db, coefficient_data.academic_year, coefficient_data.degree_id
    ):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Coefficient for {degree.full_name} in {coefficient_data.academic_year} already exists",
        )

    teacher_coefficient = await coefficient_service.create_teacher_coefficient(
        db, coefficient_data
    )
    return TeacherCoefficientResponse.model_validate(teacher_coefficient)


@router.patch("/batch", response_model=TeacherCoefficientListResponse)
async def upsert_teacher_coefficients(
    db: DbSession,
    batch_data: TeacherCoefficientBatchUpsert,
) -> TeacherCoefficientListResponse:
    """
    Create or replace several degree coefficients of one academic year.

    Returns every stored coefficient of that year.
    """
    for item in batch_data.coefficients:
        if not await coefficient_service.get_degree_by_id(db, item.degree_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Degree {item.degree_id} not found",
            )

    coefficients = await coefficient_service.upsert_teacher_coefficients(db, batch_data)
    return TeacherCoefficientListResponse(
        items=[TeacherCoefficientResponse.model_validate(c) for c in coefficients],
        total=len(coefficients),
    )


@router.get("/academic-year/{academic_year}", response_model=TeacherCoefficientListResponse)
async def get_teacher_coefficients_by_year(
    db: DbSession,
    academic_year: AcademicYearPath,
) -> TeacherCoefficientListResponse:
    """
    Get the coefficient of every degree for an academic year.

    Degrees without a stored coefficient are returned with the default
    value, ``id`` null and ``is_default`` true.
    """
    rows = await coefficient_service.get_teacher_coefficients_by_year(db, academic_year)
    return TeacherCoefficientListResponse(items=rows, total=len(rows))


@router.get("/{coefficient_id}", response_model=TeacherCoefficientResponse)
async def get_teacher_coefficient(
    db: DbSession,
    coefficient_id: UUID,
) -> TeacherCoefficientResponse:
    """Get a teacher coefficient by ID."""
    teacher_coefficient = await get_teacher_coefficient_or_404(db, coefficient_id)
    return TeacherCoefficientResponse.model_validate(teacher_coefficient)


@router.patch("/{coefficient_id}", response_model=TeacherCoefficientResponse)
async def update_teacher_coefficient(
    db: DbSession,
    coefficient_id: UUID,
    coefficient_data: TeacherCoefficientUpdate,
) -> TeacherCoefficientResponse:
    """Update a teacher coefficient."""
    teacher_coefficient = await get_teacher_coefficient_or_404(db, coefficient_id)
    teacher_coefficient = await coefficient_service.update_teacher_coefficient(
        db, teacher_coefficient, coefficient_data
    )
    return TeacherCoefficientResponse.model_validate(teacher_coefficient)


@router.delete("/{coefficient_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_teacher_coefficient(db: DbSession, coefficient_id: UUID) -> None:
    """Delete a teacher coefficient."""
    teacher_coefficient = await get_teacher_coefficient_or_404(db, coefficient_id)
    await coefficient_service.delete_teacher_coefficient(db, teacher_coefficient)
