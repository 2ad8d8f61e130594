"""Hourly rate service - one rate per academic year."""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.rate import HourlyRate
from app.schemas.hourly_rate import HourlyRateCreate, HourlyRateUpdate


async def get_hourly_rate_by_id(db: AsyncSession, rate_id: UUID) -> HourlyRate | None:
    """Get hourly rate by ID."""
    result = await db.execute(select(HourlyRate).where(HourlyRate.id == rate_id))
    return result.scalar_one_or_none()


async def get_hourly_rate_by_year(db: AsyncSession, academic_year: str) -> HourlyRate | None:
    """Get the hourly rate of an academic year."""
    result = await db.execute(
        select(HourlyRate).where(HourlyRate.academic_year == academic_year)
    )
    return result.scalar_one_or_none()


async def get_hourly_rates(db: AsyncSession) -> tuple[list[HourlyRate], int]:
    """Get all hourly rates, newest academic year first."""
    total_result = await db.execute(select(func.count()).select_from(HourlyRate))
    total = total_result.scalar() or 0

    result = await db.execute(select(HourlyRate).order_by(HourlyRate.academic_year.desc()))
    return list(result.scalars().all()), total


async def create_hourly_rate(db: AsyncSession, rate_data: HourlyRateCreate) -> HourlyRate:
    """Create the hourly rate of an academic year."""
    hourly_rate = HourlyRate(
        academic_year=rate_data.academic_year,
        rate_per_hour=rate_data.rate_per_hour,
    )
    db.add(hourly_rate)
    await db.commit()
    await db.refresh(hourly_rate)
    return hourly_rate


async def update_hourly_rate(
    db: AsyncSession,
    hourly_rate: HourlyRate,
    rate_data: HourlyRateUpdate,
) -> HourlyRate:
    """Update an hourly rate."""
    update_data = rate_data.model_dump(exclude_unset=True, exclude_none=True)

    for field, value in update_data.items():
        setattr(hourly_rate, field, value)

    await db.commit()
    await db.refresh(hourly_rate)
    return hourly_rate


async def delete_hourly_rate(db: AsyncSession, hourly_rate: HourlyRate) -> None:
    """Delete an hourly rate."""
    await db.delete(hourly_rate)
    await db.commit()
