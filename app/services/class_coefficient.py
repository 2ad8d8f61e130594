"""Class coefficient service - standard student range per academic year."""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.rate import DEFAULT_STANDARD_STUDENT_RANGE, ClassCoefficient
from app.schemas.class_coefficient import (
    ClassCoefficientCreate,
    ClassCoefficientResponse,
    ClassCoefficientUpdate,
)


async def get_class_coefficient_by_id(
    db: AsyncSession,
    coefficient_id: UUID,
) -> ClassCoefficient | None:
    """Get class coefficient by ID."""
    result = await db.execute(
        select(ClassCoefficient).where(ClassCoefficient.id == coefficient_id)
    )
    return result.scalar_one_or_none()


async def get_class_coefficient_by_year(
    db: AsyncSession,
    academic_year: str,
) -> ClassCoefficient | None:
    """Get the stored class coefficient of an academic year."""
    result = await db.execute(
        select(ClassCoefficient).where(ClassCoefficient.academic_year == academic_year)
    )
    return result.scalar_one_or_none()


async def get_effective_class_coefficient(
    db: AsyncSession,
    academic_year: str,
) -> ClassCoefficientResponse:
    """
    Get the class coefficient of a year for display.

    Years without a record get a virtual one with the default standard range.
    Payroll computations never use this fallback.
    """
    class_coefficient = await get_class_coefficient_by_year(db, academic_year)
    if class_coefficient:
        return ClassCoefficientResponse.model_validate(class_coefficient)

    return ClassCoefficientResponse(
        id=None,
        academic_year=academic_year,
        standard_student_range=DEFAULT_STANDARD_STUDENT_RANGE,
        is_default=True,
    )


async def get_class_coefficients(db: AsyncSession) -> tuple[list[ClassCoefficient], int]:
    """Get all class coefficients, newest academic year first."""
    total_result = await db.execute(select(func.count()).select_from(ClassCoefficient))
    total = total_result.scalar() or 0

    result = await db.execute(
        select(ClassCoefficient).order_by(ClassCoefficient.academic_year.desc())
    )
    return list(result.scalars().all()), total


async def create_class_coefficient(
    db: AsyncSession,
    coefficient_data: ClassCoefficientCreate,
) -> ClassCoefficient:
    """Create the class coefficient of an academic year."""
    class_coefficient = ClassCoefficient(
        academic_year=coefficient_data.academic_year,
        standard_student_range=coefficient_data.standard_student_range,
    )
    db.add(class_coefficient)
    await db.commit()
    await db.refresh(class_coefficient)
    return class_coefficient


async def upsert_class_coefficient(
    db: AsyncSession,
    academic_year: str,
    standard_student_range: str,
) -> ClassCoefficient:
    """Create or replace the class coefficient of an academic year."""
    class_coefficient = await get_class_coefficient_by_year(db, academic_year)
    if class_coefficient:
        class_coefficient.standard_student_range = standard_student_range
    else:
        class_coefficient = ClassCoefficient(
            academic_year=academic_year,
            standard_student_range=standard_student_range,
        )
        db.add(class_coefficient)

    await db.commit()
    await db.refresh(class_coefficient)
    return class_coefficient


async def update_class_coefficient(
    db: AsyncSession,
    class_coefficient: ClassCoefficient,
    coefficient_data: ClassCoefficientUpdate,
) -> ClassCoefficient:
    """Update a class coefficient."""
    update_data = coefficient_data.model_dump(exclude_unset=True, exclude_none=True)

    for field, value in update_data.items():
        setattr(class_coefficient, field, value)

    await db.commit()
    await db.refresh(class_coefficient)
    return class_coefficient


async def delete_class_coefficient(db: AsyncSession, class_coefficient: ClassCoefficient) -> None:
    """Delete a class coefficient."""
    await db.delete(class_coefficient)
    await db.commit()
