"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rollbook import __version__
from rollbook.api.dependencies import (
    close_student_service,
    close_student_store,
    init_student_service,
    init_student_store,
)
from rollbook.api.models import APIResponse
from rollbook.api.routes import health, students
from rollbook.config import Settings
from rollbook.records import RecordStoreError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    store = init_student_store(app.state.db_path)
    init_student_service(store, retention_years=app.state.retention_years)
    logger.info(
        "Student service ready (db=%s, retention=%s years)",
        app.state.db_path,
        app.state.retention_years,
    )

    yield
    # Shutdown
    close_student_service()
    close_student_store()


def create_app(db_path: str | None = None, retention_years: int | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        db_path: SQLite database path. Defaults to ROLLBOOK_DB_PATH.
        retention_years: Years an inactive student is kept before it may be
            deleted. Defaults to ROLLBOOK_RETENTION_YEARS.
    """
    if db_path is None or retention_years is None:
        settings = Settings.from_env()
        if db_path is None:
            db_path = settings.db_path
        if retention_years is None:
            retention_years = settings.retention_years

    app = FastAPI(
        title="Rollbook API",
        description="REST API for Rollbook - Student record lifecycle management",
        version=__version__,
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.db_path = db_path
    app.state.retention_years = retention_years

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=APIResponse[None](
                data=None, error=_format_validation_errors(exc)
            ).model_dump(),
        )

    @app.exception_handler(RecordStoreError)
    async def record_store_error_handler(
        _request: Request, exc: RecordStoreError
    ) -> JSONResponse:
        logger.error("Record store failure: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=APIResponse[None](data=None, error="Internal server error").model_dump(),
        )

    # Include routers
    app.include_router(health.router)
    app.include_router(students.router, prefix="/api/v1")

    return app
