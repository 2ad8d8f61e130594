"""Dependencies for FastAPI routes."""

from typing import Annotated

from fastapi import Depends, HTTPException, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.schemas.validators import validate_academic_year
from app.services.repository import PayrollRepository, SQLAlchemyPayrollRepository


async def get_payroll_repository(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PayrollRepository:
    """Wrap the request's session in the repository the payroll engine reads from."""
    return SQLAlchemyPayrollRepository(db)


def get_academic_year(
    academic_year: str = Path(..., description="Academic year, e.g. 2025-2026"),
) -> str:
    """Validate an academic year path parameter."""
    try:
        return validate_academic_year(academic_year)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


# Common dependency aliases
DbSession = Annotated[AsyncSession, Depends(get_db)]
PayrollRepo = Annotated[PayrollRepository, Depends(get_payroll_repository)]
AcademicYearPath = Annotated[str, Depends(get_academic_year)]
