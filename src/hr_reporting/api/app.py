"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hr_reporting.api.routes import (
    attendance_router,
    health_router,
    payroll_router,
    submissions_router,
)
from hr_reporting.config import get_settings
from hr_reporting.database import create_schema, dispose_db, init_db
from hr_reporting.reporting.date_range import EmployeeNotFoundError, InvalidPeriodError
from hr_reporting.services import (
    AttendanceNotFoundError,
    AttendanceValidationError,
    AttendanceWindowError,
    DuplicateAttendanceError,
    InvalidTransitionError,
    NotAuthorizedError,
    PaymentValidationError,
    PayrollNotFoundError,
    SubmissionNotFoundError,
    SubmissionValidationError,
)

logger = logging.getLogger(__name__)

# Domain errors and the status they map to
ERROR_STATUS: dict[type[Exception], int] = {
    InvalidPeriodError: status.HTTP_400_BAD_REQUEST,
    InvalidTransitionError: status.HTTP_400_BAD_REQUEST,
    AttendanceWindowError: status.HTTP_400_BAD_REQUEST,
    DuplicateAttendanceError: status.HTTP_400_BAD_REQUEST,
    AttendanceValidationError: status.HTTP_400_BAD_REQUEST,
    SubmissionValidationError: status.HTTP_400_BAD_REQUEST,
    PaymentValidationError: status.HTTP_400_BAD_REQUEST,
    AttendanceNotFoundError: status.HTTP_404_NOT_FOUND,
    SubmissionNotFoundError: status.HTTP_404_NOT_FOUND,
    PayrollNotFoundError: status.HTTP_404_NOT_FOUND,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    init_db()
    if get_settings().create_schema:
        await create_schema()
    yield
    # Shutdown
    await dispose_db()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="HR Reporting API",
        description="Attendance, submission and payroll reporting",
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    async def domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Map a domain error to its status code."""
        return JSONResponse(
            status_code=ERROR_STATUS[type(exc)],
            content={"detail": str(exc)},
        )

    for error_class in ERROR_STATUS:
        app.add_exception_handler(error_class, domain_error_handler)

    @app.exception_handler(NotAuthorizedError)
    async def not_authorized_handler(
        request: Request, exc: NotAuthorizedError
    ) -> JSONResponse:
        """Handle ownership failures."""
        return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})

    @app.exception_handler(EmployeeNotFoundError)
    async def employee_not_found_handler(
        request: Request, exc: EmployeeNotFoundError
    ) -> JSONResponse:
        """A missing employee or join date is reported as a server error."""
        logger.error("Employee join date not found for %s", exc.employee_id)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc)},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": str(exc) or "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            },
        )

    # Include routers
    app.include_router(health_router)
    app.include_router(attendance_router, prefix="/api")
    app.include_router(submissions_router, prefix="/api")
    app.include_router(payroll_router, prefix="/api")

    return app


# Default app instance for uvicorn
app = create_app()
