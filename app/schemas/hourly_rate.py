"""Hourly rate schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from app.schemas.validators import AcademicYear

MIN_RATE_PER_HOUR = Decimal("1000")
MAX_RATE_PER_HOUR = Decimal("1000000")


class HourlyRateCreate(BaseModel):
    """Schema for setting the hourly rate of an academic year."""

    academic_year: AcademicYear
    rate_per_hour: Decimal = Field(..., ge=MIN_RATE_PER_HOUR, le=MAX_RATE_PER_HOUR)


class HourlyRateUpdate(BaseModel):
    """Schema for updating an hourly rate."""

    academic_year: AcademicYear | None = None
    rate_per_hour: Decimal | None = Field(None, ge=MIN_RATE_PER_HOUR, le=MAX_RATE_PER_HOUR)


class HourlyRateResponse(BaseModel):
    """Hourly rate response schema."""

    id: UUID
    academic_year: str
    rate_per_hour: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class HourlyRateListResponse(BaseModel):
    """List of hourly rates, newest academic year first."""

    items: list[HourlyRateResponse]
    total: int
