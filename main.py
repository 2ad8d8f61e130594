"""Teaching Payroll - FastAPI Application."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.v1.router import api_router
from app.core.config import settings
from app.core.exceptions import ConfigurationMissingError, PayrollError
from app.core.logging import configure_logging

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
)


@app.exception_handler(PayrollError)
async def payroll_error_handler(request: Request, exc: PayrollError) -> JSONResponse:
    """Translate payroll errors into JSON responses."""
    logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)

    content = {"detail": exc.message}
    if isinstance(exc, ConfigurationMissingError):
        content["missing"] = exc.kind
        content["academic_year"] = exc.academic_year
    return JSONResponse(status_code=exc.status_code, content=content)


# Include API routes
app.include_router(api_router, prefix=settings.API_V1_PREFIX)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}
