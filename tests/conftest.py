"""Shared test fixtures."""

import pytest
from fastapi import FastAPI

from cinebook.api.errors import register_exception_handlers
from cinebook.api.routes import bookings, health, screenings, seats


@pytest.fixture
def test_app() -> FastAPI:
    """FastAPI app without the production lifespan, for API tests."""
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(health.router)
    app.include_router(screenings.router, prefix="/api")
    app.include_router(bookings.router, prefix="/api")
    app.include_router(seats.router, prefix="/api")
    return app
