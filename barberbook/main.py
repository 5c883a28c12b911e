"""
FastAPI application for the barbershop booking service
"""
import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from contextlib import asynccontextmanager

from barberbook import __version__
from barberbook.api.v1.router import api_v1_router
from barberbook.config.database import create_tables
from barberbook.config.settings import get_settings
from barberbook.core.exceptions import BookingError, StoreUnavailableError
from barberbook.core.middleware import correlation_id_middleware, request_logging_middleware
from barberbook.core.monitoring import health_router
from barberbook.utils.my_logging import setup_logging

logger = logging.getLogger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    setup_logging()
    create_tables()
    logger.info(f"{settings.APP_NAME} starting up (slot conflict mode: {settings.SLOT_CONFLICT_MODE})")

    yield

    logger.info(f"{settings.APP_NAME} shutting down")


async def booking_error_handler(request: Request, exc: BookingError):
    """Map booking errors to their HTTP status with a detail message"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": type(exc).__name__},
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    """Database faults outside the appointment store surface as StoreUnavailableError"""
    logger.error(f"{request.method} {request.url.path}: database error: {exc}", exc_info=exc)
    return await booking_error_handler(request, StoreUnavailableError())


def create_app(use_lifespan: bool = True) -> FastAPI:
    """Create and configure FastAPI application"""

    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        description="Appointment booking for a single-location barbershop",
        version=__version__,
        lifespan=lifespan if use_lifespan else None,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "PUT"],
        allow_headers=["*"],
    )

    # Registered in reverse: correlation id runs first
    app.middleware("http")(request_logging_middleware)
    app.middleware("http")(correlation_id_middleware)

    app.add_exception_handler(BookingError, booking_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)

    app.include_router(health_router, prefix="/health", tags=["monitoring"])
    app.include_router(api_v1_router, prefix="/api/v1")

    @app.get("/")
    async def root():
        return {
            "service": f"{settings.APP_NAME} API",
            "business": settings.BUSINESS_NAME,
            "version": __version__,
            "status": "running",
            "endpoints": {
                "api": "/api/v1/",
                "health": "/health",
                "docs": "/docs" if settings.DEBUG else "disabled"
            }
        }

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "barberbook.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info"
    )
