"""Unit tests for the back-office views and login."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from cinebook.admin.auth import AdminAuth
from cinebook.admin.views import HallAdmin
from cinebook.config import settings
from cinebook.exceptions import BadRequestError
from cinebook.models.hall import Hall


def make_request(form: dict) -> MagicMock:
    request = MagicMock()
    request.form = AsyncMock(return_value=form)
    request.session = {}
    return request


class TestHallAdmin:
    async def test_layout_gaps_are_stored_as_null(self) -> None:
        data = {"theater_id": "t", "hall_id": "h", "seats_layout": [["A1", 0, "A2"], ["", "B1", None]]}

        await HallAdmin().on_model_change(data, Hall(), True, MagicMock())

        assert data["seats_layout"] == [["A1", None, "A2"], [None, "B1", None]]

    async def test_duplicate_seat_ids_are_rejected(self) -> None:
        data = {"seats_layout": [["A1", "A1"]]}
        with pytest.raises(BadRequestError):
            await HallAdmin().on_model_change(data, Hall(), True, MagicMock())


class TestAdminAuth:
    @pytest.fixture(autouse=True)
    def credentials(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings, "admin_username", "boxoffice")
        monkeypatch.setattr(settings, "admin_password", "s3cret")

    async def test_login_with_configured_credentials(self) -> None:
        auth = AdminAuth(secret_key="test")
        request = make_request({"username": "boxoffice", "password": "s3cret"})

        assert await auth.login(request) is True
        assert await auth.authenticate(request) is True

    async def test_login_with_wrong_password(self) -> None:
        auth = AdminAuth(secret_key="test")
        request = make_request({"username": "boxoffice", "password": "nope"})

        assert await auth.login(request) is False
        assert await auth.authenticate(request) is False

    async def test_logout_clears_session(self) -> None:
        auth = AdminAuth(secret_key="test")
        request = make_request({})
        request.session["authenticated"] = True

        await auth.logout(request)

        assert request.session == {}
