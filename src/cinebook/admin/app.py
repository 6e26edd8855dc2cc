"""Admin FastAPI application."""

from fastapi import FastAPI
from sqladmin import Admin

from cinebook.admin.auth import AdminAuth
from cinebook.admin.views import (
    BookingAdmin,
    HallAdmin,
    MovieAdmin,
    ScreeningAdmin,
    SeatReservationAdmin,
    TheaterAdmin,
)
from cinebook.config import settings
from cinebook.database import engine


def create_admin_app() -> FastAPI:
    app = FastAPI(title="Cinebook Admin")
    auth = AdminAuth(secret_key=settings.admin_secret_key)
    admin = Admin(app, engine, authentication_backend=auth, title="Cinebook Admin")
    for view in [
        MovieAdmin,
        TheaterAdmin,
        HallAdmin,
        ScreeningAdmin,
        BookingAdmin,
        SeatReservationAdmin,
    ]:
        admin.add_view(view)
    return app


admin_app = create_admin_app()
