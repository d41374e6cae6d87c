from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import IntegrityError

from fintrack import __version__
from fintrack.api.middleware.error_handler import (
    handle_generic_error,
    handle_integrity_error,
    handle_tracker_error,
    handle_validation_error,
)
from fintrack.api.middleware.logging import RequestLoggingMiddleware
from fintrack.api.v1 import router as v1_router
from fintrack.api.v1.health import router as health_router
from fintrack.config import settings
from fintrack.core.exceptions import FinanceTrackerError
from fintrack.db.session import create_tables
from fintrack.utils.logger import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    if settings.db_auto_create:
        await create_tables()
    yield
    # Shutdown


def create_app() -> FastAPI:
    setup_logging(settings.log_level, json_format=settings.log_json)

    app = FastAPI(
        title="fintrack API",
        description="Personal income and expense tracker",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Add request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # The browser client sends the session cookie cross-origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers (order matters - most specific first)
    app.add_exception_handler(FinanceTrackerError, handle_tracker_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(Exception, handle_generic_error)

    # Register routers
    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()
