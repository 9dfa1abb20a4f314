"""Tests for DELETE /api/v1/sessions and the service-level routes."""

from datetime import timedelta

import pytest

from tabsession.core.modules.session.models import SessionToken


@pytest.fixture
async def user(services):
    return await services.user.create_user("leaving", "leaving@example.com")


@pytest.fixture
async def session(services, user, clock):
    return await services.session.create_session(user.id, clock())


class TestLogout:
    async def test_logout_expires_session_and_clears_cookie(self, client, services, session, clock, parse_set_cookies):
        at = clock.advance(timedelta(hours=2))

        response = await client.delete("/api/v1/sessions", headers={"cookie": f"session_id={session.token}"})

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == str(session.id)
        assert body["expires_at"] == at.isoformat().replace("+00:00", "Z")

        cookie = parse_set_cookies(response)["session_id"]
        assert cookie.value == "invalid"
        assert cookie["max-age"] == "-1"
        assert cookie["httponly"] is True

        stored = await services.session.find_by_token(SessionToken(session.token))
        assert stored.expires_at == at
        assert stored.created_at == session.created_at

    async def test_session_unusable_after_logout(self, client, session, parse_set_cookies):
        headers = {"cookie": f"session_id={session.token}"}
        await client.delete("/api/v1/sessions", headers=headers)

        response = await client.get("/api/v1/user", headers=headers)

        assert response.status_code == 401
        assert parse_set_cookies(response)["session_id"].value == "invalid"

    async def test_logout_does_not_renew(self, client, services, session, clock):
        clock.advance(timedelta(days=12))
        await client.delete("/api/v1/sessions", headers={"cookie": f"session_id={session.token}"})

        stored = await services.session.find_by_token(SessionToken(session.token))
        assert stored.expires_at == clock()

    async def test_logout_anonymous(self, client):
        response = await client.delete("/api/v1/sessions")
        assert response.status_code == 403
        assert response.json()["error_location_code"] == "MODEL:AUTHORIZATION:CAN_REQUEST:FEATURE_NOT_FOUND"


class TestServiceRoutes:
    async def test_health(self, client):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    async def test_openapi_declares_session_cookie(self, client):
        schema = (await client.get("/openapi.json")).json()
        assert schema["components"]["securitySchemes"]["SessionCookie"]["name"] == "session_id"
        assert schema["paths"]["/health"]["get"]["security"] == []
        assert "/api/v1/user" in schema["paths"]
