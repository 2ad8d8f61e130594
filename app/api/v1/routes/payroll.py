"""Payroll API routes."""

from fastapi import APIRouter

from app.core.deps import PayrollRepo
from app.schemas.payroll import AcademicYearListResponse, PayrollCalculateRequest, PayrollResult
from app.services import payroll as payroll_service

router = APIRouter(prefix="/payroll", tags=["Payroll"])


@router.post("/calculate", response_model=PayrollResult)
async def calculate_payroll(
    repo: PayrollRepo,
    request_data: PayrollCalculateRequest,
) -> PayrollResult:
    """
    Calculate a teacher's payroll for one semester.

    Returns one line per assigned class (converted periods to 2 decimal
    places, salary in whole units) and the total salary.
    """
    return await payroll_service.calculate_single_payroll(
        repo,
        academic_year=request_data.academic_year,
        semester_id=request_data.semester_id,
        teacher_id=request_data.teacher_id,
    )


@router.get("/academic-years", response_model=AcademicYearListResponse)
async def list_academic_years(repo: PayrollRepo) -> AcademicYearListResponse:
    """List academic years that have semesters."""
    academic_years = await payroll_service.get_academic_years(repo)
    return AcademicYearListResponse(items=academic_years)
