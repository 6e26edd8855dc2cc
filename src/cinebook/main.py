"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cinebook.api.errors import register_exception_handlers
from cinebook.api.routes import bookings, health, screenings, seats
from cinebook.config import settings
from cinebook.database import engine

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info(f"Cinebook API starting (timezone={settings.timezone})")

    yield

    # Shutdown: release pooled connections
    await engine.dispose()
    logger.info("Database engine disposed")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Cinebook API",
        description="Cinema ticketing: screenings and seat-level bookings",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(screenings.router, prefix="/api", tags=["screenings"])
    app.include_router(bookings.router, prefix="/api", tags=["bookings"])
    app.include_router(seats.router, prefix="/api", tags=["seats"])
    return app


app = create_app()
