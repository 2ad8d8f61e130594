"""Hourly Rate API routes."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import AcademicYearPath, DbSession
from app.models.rate import HourlyRate
from app.schemas.hourly_rate import (
    HourlyRateCreate,
    HourlyRateListResponse,
    HourlyRateResponse,
    HourlyRateUpdate,
)
from app.services import hourly_rate as hourly_rate_service

router = APIRouter(prefix="/hourly-rates", tags=["Hourly Rates"])


# ============== Helper Functions ==============


async def get_hourly_rate_or_404(db: AsyncSession, rate_id: UUID) -> HourlyRate:
    hourly_rate = await hourly_rate_service.get_hourly_rate_by_id(db, rate_id)
    if not hourly_rate:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Hourly rate not found",
        )
    return hourly_rate


# ============== Endpoints ==============


@router.get("", response_model=HourlyRateListResponse)
async def list_hourly_rates(db: DbSession) -> HourlyRateListResponse:
    """List hourly rates, newest academic year first."""
    hourly_rates, total = await hourly_rate_service.get_hourly_rates(db)
    return HourlyRateListResponse(
        items=[HourlyRateResponse.model_validate(r) for r in hourly_rates],
        total=total,
    )


@router.post("", response_model=HourlyRateResponse, status_code=status.HTTP_201_CREATED)
async def create_hourly_rate(
    db: DbSession,
    rate_data: HourlyRateCreate,
) -> HourlyRateResponse:
    """
    Set the hourly rate of an academic year.

    An academic year has at most one hourly rate.
    """
    if await hourly_rate_service.get_hourly_rate_by_year(db, rate_data.academic_year):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Hourly rate for academic year {rate_data.academic_year} already exists",
        )

    hourly_rate = await hourly_rate_service.create_hourly_rate(db, rate_data)
    return HourlyRateResponse.model_validate(hourly_rate)


@router.get("/academic-year/{academic_year}", response_model=HourlyRateResponse)
async def get_hourly_rate_by_year(
    db: DbSession,
    academic_year: AcademicYearPath,
) -> HourlyRateResponse:
    """Get the hourly rate of an academic year."""
    hourly_rate = await hourly_rate_service.get_hourly_rate_by_year(db, academic_year)
    if not hourly_rate:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No hourly rate for academic year {academic_year}",
        )
    return HourlyRateResponse.model_validate(hourly_rate)


@router.get("/{rate_id}", response_model=HourlyRateResponse)
async def get_hourly_rate(db: DbSession, rate_id: UUID) -> HourlyRateResponse:
    """Get an hourly rate by ID."""
    hourly_rate = await get_hourly_rate_or_404(db, rate_id)
    return HourlyRateResponse.model_validate(hourly_rate)


@router.patch("/{rate_id}", response_model=HourlyRateResponse)
async def update_hourly_rate(
    db: DbSession,
    rate_id: UUID,
    rate_data: HourlyRateUpdate,
) -> HourlyRateResponse:
    """Update an hourly rate."""
    hourly_rate = await get_hourly_rate_or_404(db, rate_id)

    # Moving to another year must not collide with that year's rate
    if rate_data.academic_year and rate_data.academic_year != hourly_rate.academic_year:
        if await hourly_rate_service.get_hourly_rate_by_year(db, rate_data.academic_year):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Hourly rate for academic year {rate_data.academic_year} already exists",
            )

    hourly_rate = await hourly_rate_service.update_hourly_rate(db, hourly_rate, rate_data)
    return HourlyRateResponse.model_validate(hourly_rate)


@router.delete("/{rate_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_hourly_rate(db: DbSession, rate_id: UUID) -> None:
    """Delete an hourly rate."""
    hourly_rate = await get_hourly_rate_or_404(db, rate_id)
    await hourly_rate_service.delete_hourly_rate(db, hourly_rate)
