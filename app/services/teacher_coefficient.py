"""Teacher coefficient service - pay multiplier per degree and academic year."""

import logging
from decimal import Decimal
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.config import settings
from app.models.academic import Degree
from app.models.rate import TeacherCoefficient
from app.schemas.report import DegreeInfo
from app.schemas.teacher_coefficient import (
    TeacherCoefficientBatchUpsert,
    TeacherCoefficientCreate,
    TeacherCoefficientResponse,
    TeacherCoefficientUpdate,
)

logger = logging.getLogger(__name__)

# Suggested starting values when seeding a new academic year
SUGGESTED_COEFFICIENTS = {
    "bachelor": Decimal("1.3"),
    "master": Decimal("1.5"),
    "doctor": Decimal("1.7"),
    "associate professor": Decimal("2.0"),
    "professor": Decimal("2.5"),
}


def suggested_coefficient(degree_name: str) -> Decimal:
    """Return the suggested coefficient for a degree name, 1.0 if unknown."""
    return SUGGESTED_COEFFICIENTS.get(degree_name.strip().lower(), Decimal("1.0"))


async def get_degree_by_id(db: AsyncSession, degree_id: UUID) -> Degree | None:
    """Get degree by ID."""
    result = await db.execute(select(Degree).where(Degree.id == degree_id))
    return result.scalar_one_or_none()


async def get_degrees(db: AsyncSession) -> list[Degree]:
    """Get all degrees by full name."""
    result = await db.execute(select(Degree).order_by(Degree.full_name.asc()))
    return list(result.scalars().all())


async def get_teacher_coefficient_by_id(
    db: AsyncSession,
    coefficient_id: UUID,
) -> TeacherCoefficient | None:
    """Get teacher coefficient by ID with its degree loaded."""
    result = await db.execute(
        select(TeacherCoefficient)
        .options(selectinload(TeacherCoefficient.degree))
        .where(TeacherCoefficient.id == coefficient_id)
    )
    return result.scalar_one_or_none()


async def get_teacher_coefficient(
    db: AsyncSession,
    academic_year: str,
    degree_id: UUID,
) -> TeacherCoefficient | None:
    """Get the coefficient of a degree in an academic year."""
    result = await db.execute(
        select(TeacherCoefficient)
        .options(selectinload(TeacherCoefficient.degree))
        .where(
            TeacherCoefficient.academic_year == academic_year,
            TeacherCoefficient.degree_id == degree_id,
        )
    )
    return result.scalar_one_or_none()


async def get_teacher_coefficients(
    db: AsyncSession,
    academic_year: str | None = None,
) -> tuple[list[TeacherCoefficient], int]:
    """Get stored teacher coefficients, newest year first, then by degree name."""
    query = (
        select(TeacherCoefficient)
        .join(TeacherCoefficient.degree)
        .options(selectinload(TeacherCoefficient.degree))
        .execution_options(populate_existing=True)
    )
    count_query = select(func.count()).select_from(TeacherCoefficient)

    if academic_year:
        query = query.where(TeacherCoefficient.academic_year == academic_year)
        count_query = count_query.where(TeacherCoefficient.academic_year == academic_year)

    total_result = await db.execute(count_query)
    total = total_result.scalar() or 0

    query = query.order_by(TeacherCoefficient.academic_year.desc(), Degree.full_name.asc())
    result = await db.execute(query)
    return list(result.scalars().all()), total


async def get_teacher_coefficients_by_year(
    db: AsyncSession,
    academic_year: str,
) -> list[TeacherCoefficientResponse]:
    """
    One row per degree for an academic year.

    Degrees without a stored record get a virtual row carrying the default
    coefficient, so the full table can be edited in one go.
    """
    degrees = await get_degrees(db)
    stored, _ = await get_teacher_coefficients(db, academic_year=academic_year)
    by_degree = {coefficient.degree_id: coefficient for coefficient in stored}

    rows = []
    for degree in degrees:
        coefficient = by_degree.get(degree.id)
        if coefficient:
            rows.append(TeacherCoefficientResponse.model_validate(coefficient))
            continue

        rows.append(
            TeacherCoefficientResponse(
                id=None,
                academic_year=academic_year,
                degree_id=degree.id,
                degree=DegreeInfo.model_validate(degree),
                coefficient=settings.DEFAULT_TEACHER_COEFFICIENT,
                is_default=True,
            )
        )
    return rows


async def create_teacher_coefficient(
    db: AsyncSession,
    coefficient_data: TeacherCoefficientCreate,
) -> TeacherCoefficient:
    """Create the coefficient of a degree in an academic year."""
    teacher_coefficient = TeacherCoefficient(
        academic_year=coefficient_data.academic_year,
        degree_id=coefficient_data.degree_id,
        coefficient=coefficient_data.coefficient,
    )
    db.add(teacher_coefficient)
    await db.commit()
    await db.refresh(teacher_coefficient, attribute_names=["degree"])
    return teacher_coefficient


async def upsert_teacher_coefficients(
    db: AsyncSession,
    batch_data: TeacherCoefficientBatchUpsert,
) -> list[TeacherCoefficient]:
    """Create or replace several degree coefficients of one academic year."""
    academic_year = batch_data.academic_year

    for item in batch_data.coefficients:
        teacher_coefficient = await get_teacher_coefficient(db, academic_year, item.degree_id)
        if teacher_coefficient:
            teacher_coefficient.coefficient = item.coefficient
        else:
            db.add(
                TeacherCoefficient(
                    academic_year=academic_year,
                    degree_id=item.degree_id,
                    coefficient=item.coefficient,
                )
            )

    await db.commit()

    coefficients, _ = await get_teacher_coefficients(db, academic_year=academic_year)
    return coefficients


async def update_teacher_coefficient(
    db: AsyncSession,
    teacher_coefficient: TeacherCoefficient,
    coefficient_data: TeacherCoefficientUpdate,
) -> TeacherCoefficient:
    """Update a teacher coefficient."""
    teacher_coefficient.coefficient = coefficient_data.coefficient
    await db.commit()
    await db.refresh(teacher_coefficient, attribute_names=["degree"])
    return teacher_coefficient


async def delete_teacher_coefficient(
    db: AsyncSession,
    teacher_coefficient: TeacherCoefficient,
) -> None:
    """Delete a teacher coefficient."""
    await db.delete(teacher_coefficient)
    await db.commit()


async def seed_teacher_coefficients(db: AsyncSession, academic_year: str) -> list[TeacherCoefficient]:
    """
    Create suggested coefficients for every degree without one in a year.

    Existing records are left untouched. Returns the created records.
    """
    degrees = await get_degrees(db)
    stored, _ = await get_teacher_coefficients(db, academic_year=academic_year)
    configured = {coefficient.degree_id for coefficient in stored}

    created = []
    for degree in degrees:
        if degree.id in configured:
            continue
        teacher_coefficient = TeacherCoefficient(
            academic_year=academic_year,
            degree_id=degree.id,
            coefficient=suggested_coefficient(degree.full_name),
        )
        db.add(teacher_coefficient)
        created.append(teacher_coefficient)

    await db.commit()
    logger.info("Seeded %d teacher coefficients for %s", len(created), academic_year)
    return created
