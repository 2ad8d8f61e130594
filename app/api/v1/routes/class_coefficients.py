"""Class Coefficient API routes."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import AcademicYearPath, DbSession
from app.models.rate import DEFAULT_STANDARD_STUDENT_RANGE, STUDENT_RANGES, ClassCoefficient
from app.schemas.class_coefficient import (
    ClassCoefficientCreate,
    ClassCoefficientListResponse,
    ClassCoefficientResponse,
    ClassCoefficientUpdate,
    ClassCoefficientUpsert,
    StudentRangeListResponse,
)
from app.services import class_coefficient as class_coefficient_service

router = APIRouter(prefix="/class-coefficients", tags=["Class Coefficients"])


# ============== Helper Functions ==============


async def get_class_coefficient_or_404(db: AsyncSession, coefficient_id: UUID) -> ClassCoefficient:
    class_coefficient = await class_coefficient_service.get_class_coefficient_by_id(
        db, coefficient_id
    )
    if not class_coefficient:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Class coefficient not found",
        )
    return class_coefficient


# ============== Endpoints ==============


@router.get("", response_model=ClassCoefficientListResponse)
async def list_class_coefficients(db: DbSession) -> ClassCoefficientListResponse:
    """List class coefficients, newest academic year first."""
    class_coefficients, total = await class_coefficient_service.get_class_coefficients(db)
    return ClassCoefficientListResponse(
        items=[ClassCoefficientResponse.model_validate(c) for c in class_coefficients],
        total=total,
    )


@router.get("/ranges", response_model=StudentRangeListResponse)
async def list_student_ranges() -> StudentRangeListResponse:
    """List the class size bands a standard student range can take."""
    return StudentRangeListResponse(
        items=list(STUDENT_RANGES),
        default=DEFAULT_STANDARD_STUDENT_RANGE,
    )


@router.post("", response_model=ClassCoefficientResponse, status_code=status.HTTP_201_CREATED)
async def create_class_coefficient(
    db: DbSession,
    coefficient_data: ClassCoefficientCreate,
) -> ClassCoefficientResponse:
    """Set the standard student range of an academic year."""
    if await class_coefficient_service.get_class_coefficient_by_year(
        db, coefficient_data.academic_year
    ):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Class coefficient for academic year {coefficient_data.academic_year} already exists",
        )

    class_coefficient = await class_coefficient_service.create_class_coefficient(
        db, coefficient_data
    )
    return ClassCoefficientResponse.model_validate(class_coefficient)


@router.get("/academic-year/{academic_year}", response_model=ClassCoefficientResponse)
async def get_class_coefficient_by_year(
    db: DbSession,
    academic_year: AcademicYearPath,
) -> ClassCoefficientResponse:
    """
    Get the class coefficient of an academic year.

    Years without a record return the default range with ``id`` null.
    """
    return await class_coefficient_service.get_effective_class_coefficient(db, academic_year)


@router.patch("/academic-year/{academic_year}", response_model=ClassCoefficientResponse)
async def upsert_class_coefficient(
    db: DbSession,
    academic_year: AcademicYearPath,
    coefficient_data: ClassCoefficientUpsert,
) -> ClassCoefficientResponse:
    """Create or replace the class coefficient of an academic year."""
    class_coefficient = await class_coefficient_service.upsert_class_coefficient(
        db, academic_year, coefficient_data.standard_student_range
    )
    return ClassCoefficientResponse.model_validate(class_coefficient)


@router.get("/{coefficient_id}", response_model=ClassCoefficientResponse)
async def get_class_coefficient(db: DbSession, coefficient_id: UUID) -> ClassCoefficientResponse:
    """Get a class coefficient by ID."""
    class_coefficient = await get_class_coefficient_or_404(db, coefficient_id)
    return ClassCoefficientResponse.model_validate(class_coefficient)


@router.patch("/{coefficient_id}", response_model=ClassCoefficientResponse)
async def update_class_coefficient(
    db: DbSession,
    coefficient_id: UUID,
    coefficient_data: ClassCoefficientUpdate,
) -> ClassCoefficientResponse:
    """Update a class coefficient."""
    class_coefficient = await get_class_coefficient_or_404(db, coefficient_id)

    if (
        coefficient_data.academic_year
        and coefficient_data.academic_year != class_coefficient.academic_year
        and await class_coefficient_service.get_class_coefficient_by_year(
            db, coefficient_data.academic_year
        )
    ):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Class coefficient for academic year {coefficient_data.academic_year} already exists",
        )

    class_coefficient = await class_coefficient_service.update_class_coefficient(
        db, class_coefficient, coefficient_data
    )
    return ClassCoefficientResponse.model_validate(class_coefficient)


@router.delete("/{coefficient_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_class_coefficient(db: DbSession, coefficient_id: UUID) -> None:
    """Delete a class coefficient."""
    class_coefficient = await get_class_coefficient_or_404(db, coefficient_id)
    await class_coefficient_service.delete_class_coefficient(db, class_coefficient)
