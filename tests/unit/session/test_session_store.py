"""Tests for SessionService persistence."""

from datetime import timedelta
from uuid import uuid4

from tabsession.core.modules.session.models import SessionToken


class TestCreateAndFind:
    async def test_create_session_persists_record(self, services, clock, database):
        user_id = uuid4()
        session = await services.session.create_session(user_id, clock())

        assert session.user_id == user_id
        assert session.created_at == session.updated_at == clock()
        assert session.expires_at == clock() + timedelta(days=30)
        assert len(database.get_collection("sessions").documents) == 1

    async def test_find_by_token(self, services, clock):
        session = await services.session.create_session(uuid4(), clock())
        assert await services.session.find_by_token(SessionToken(session.token)) == session

    async def test_find_by_unknown_token(self, services):
        assert await services.session.find_by_token(SessionToken("a" * 96)) is None

    async def test_find_by_token_returns_expired_sessions(self, services, clock):
        """Test that expired rows stay readable; nothing is deleted on read."""
        session = await services.session.create_session(uuid4(), clock())
        clock.advance(timedelta(days=31))
        assert await services.session.find_by_token(SessionToken(session.token)) == session

    async def test_find_active_by_token_hides_expired_sessions(self, services, clock):
        session = await services.session.create_session(uuid4(), clock())
        token = SessionToken(session.token)
        assert await services.session.find_active_by_token(token, clock()) == session

        clock.advance(timedelta(days=30))
        assert await services.session.find_active_by_token(token, clock()) is None


class TestRenew:
    async def test_renew_extends_expiry_and_keeps_identity(self, services, clock):
        session = await services.session.create_session(uuid4(), clock())
        at = clock.advance(timedelta(days=9))

        renewed = await services.session.renew(session, at)

        assert renewed.id == session.id
        assert renewed.token == session.token
        assert renewed.created_at == session.created_at
        assert renewed.updated_at == at
        assert renewed.expires_at == at + timedelta(days=30)
        assert renewed.expires_at > session.expires_at
        assert await services.session.find_by_token(SessionToken(session.token)) == renewed


class TestExpireAndPurge:
    async def test_expire_sets_expiry_to_now(self, services, clock):
        session = await services.session.create_session(uuid4(), clock())
        at = clock.advance(timedelta(hours=1))

        expired = await services.session.expire(session, at)

        assert expired.expires_at == at
        assert expired.updated_at == at
        assert services.session.policy.evaluate(expired, at).value == "expired"

    async def test_delete_expired_only_removes_expired(self, services, clock, database):
        old = await services.session.create_session(uuid4(), clock())
        clock.advance(timedelta(days=20))
        fresh = await services.session.create_session(uuid4(), clock())
        clock.advance(timedelta(days=10))

        deleted = await services.session.delete_expired(clock())

        assert deleted == 1
        assert await services.session.find_by_token(SessionToken(old.token)) is None
        assert await services.session.find_by_token(SessionToken(fresh.token)) == fresh
