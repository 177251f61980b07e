"""
Core functionality tests.
"""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from pydantic import ValidationError

from bookshelf.core.auth import RequestContext, create_access_token, decode_access_token
from bookshelf.core.events import EventSystem, ReadingEvent, publish_mutation
from bookshelf.core.exceptions import NotFound, ReadNumberConflict, Unauthorized
from bookshelf.core.settings import get_settings, settings
from bookshelf.utils.date_utils import as_utc, last_months, month_end, shift_months

from .conftest import USER_ID


class TestSettings:
    """Test application settings."""

    def test_testing_settings_selected(self):
        assert settings.is_testing
        assert settings.DATABASE_URL == "sqlite:///:memory:"

    def test_settings_pagination(self):
        assert settings.MAX_PAGE_SIZE >= settings.DEFAULT_PAGE_SIZE > 0

    def test_production_requires_secrets(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("SUPABASE_JWT_SECRET", raising=False)
        monkeypatch.chdir("/")

        with pytest.raises(ValidationError):
            get_settings()


class TestAuth:
    """Test access token handling."""

    def test_round_trip(self):
        ctx = decode_access_token(create_access_token(USER_ID))
        assert ctx == RequestContext(user_id=USER_ID)

    def test_expired_token(self):
        token = create_access_token(USER_ID, expires_delta=timedelta(minutes=-1))
        with pytest.raises(Unauthorized):
            decode_access_token(token)

    def test_wrong_audience(self):
        token = jwt.encode(
            {"sub": USER_ID, "aud": "anon"},
            settings.SUPABASE_JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )
        with pytest.raises(Unauthorized):
            decode_access_token(token)

    def test_wrong_secret(self):
        token = jwt.encode(
            {"sub": USER_ID, "aud": settings.JWT_AUDIENCE},
            "some-other-secret",
            algorithm=settings.JWT_ALGORITHM,
        )
        with pytest.raises(Unauthorized):
            decode_access_token(token)

    def test_missing_subject(self):
        token = jwt.encode(
            {"aud": settings.JWT_AUDIENCE},
            settings.SUPABASE_JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )
        with pytest.raises(Unauthorized):
            decode_access_token(token)

    def test_context_needs_user(self):
        with pytest.raises(Unauthorized):
            RequestContext(user_id="")


class TestExceptions:
    def test_response_shape(self):
        exc = NotFound("Nothing here", params={"id": "x"})
        assert exc.status_code == 404
        assert exc.to_response() == {
            "success": False,
            "message": "Nothing here",
            "code": "not_found",
            "params": {"id": "x"},
        }

    def test_conflict_is_transient(self):
        exc = ReadNumberConflict("ub-1", 3)
        assert exc.status_code == 409
        assert exc.code == "read_number_conflict"


class TestEvents:
    def teardown_method(self):
        EventSystem.clear()

    def test_failing_subscriber_does_not_raise(self):
        received = []

        def broken(**kwargs):
            raise RuntimeError("boom")

        EventSystem.subscribe(ReadingEvent.STATUS_CHANGED, broken)
        EventSystem.subscribe(ReadingEvent.STATUS_CHANGED, lambda **kw: received.append(kw))

        count = EventSystem.publish(ReadingEvent.STATUS_CHANGED, book_id="b")

        assert count == 1
        assert received == [{"book_id": "b"}]

    def test_publish_mutation_sends_keys(self):
        received = []
        EventSystem.subscribe("queries.invalidated", lambda **kw: received.append(kw))

        publish_mutation(ReadingEvent.PROGRESSED, "u", [("books",)], book_id="b")

        assert received == [{"user_id": "u", "keys": [("books",)]}]

    def test_unsubscribe(self):
        def callback(**kwargs):
            pass

        EventSystem.subscribe("x", callback)
        assert EventSystem.unsubscribe("x", callback) is True
        assert EventSystem.unsubscribe("x", callback) is False


class TestDateUtils:
    def test_shift_months_across_years(self):
        assert shift_months(2024, 1, -1) == (2023, 12)
        assert shift_months(2023, 12, 1) == (2024, 1)
        assert shift_months(2024, 3, -14) == (2023, 1)

    def test_month_end_leap_year(self):
        assert month_end(2024, 2).day == 29
        assert month_end(2024, 2).hour == 23

    def test_last_months(self):
        months = last_months(datetime(2024, 2, 15, tzinfo=timezone.utc), 3)
        assert months == [(2023, 12), (2024, 1), (2024, 2)]

    def test_as_utc(self):
        assert as_utc(None) is None
        assert as_utc(datetime(2024, 1, 1)).tzinfo == timezone.utc


class TestHealth:
    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_library_over_async_client(self, async_client, auth_headers, test_book):
        response = await async_client.get("/api/v1/books/", headers=auth_headers)

        assert response.status_code == 200
        assert [b["id"] for b in response.json()["data"]] == [test_book.id]
