"""API v1 router aggregating all route modules."""

from fastapi import APIRouter

from app.api.v1.routes import (
    assignments,
    class_coefficients,
    hourly_rates,
    payroll,
    reports,
    teacher_coefficients,
)

api_router = APIRouter()

api_router.include_router(payroll.router)
api_router.include_router(reports.router)
api_router.include_router(hourly_rates.router)
api_router.include_router(class_coefficients.router)
api_router.include_router(teacher_coefficients.router)
api_router.include_router(assignments.router)
