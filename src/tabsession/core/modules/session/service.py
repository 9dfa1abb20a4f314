from datetime import datetime
from typing import Any
from uuid import UUID

import structlog
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from tabsession.core.core import Service
from tabsession.core.modules.session.models import Session, SessionToken
from tabsession.core.modules.session.policy import SessionPolicy
from tabsession.errors import NotFoundError

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Persistence of sessions; expiry is decided by the caller, never swept here."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("sessions")

    @property
    def policy(self) -> SessionPolicy:
        return SessionPolicy.from_config(self.core.config)

    async def on_start(self) -> None:
        """Create indexes on startup."""
        # Unique index for token (for authentication lookups)
        await self._collection.create_index([("token", 1)], unique=True)
        # Single index for user_id (for finding sessions by user)
        await self._collection.create_index([("user_id", 1)])
        # Range index for purging expired sessions
        await self._collection.create_index([("expires_at", 1)])

    async def create_session(self, user_id: UUID, at: datetime) -> Session:
        session = Session.start(user_id, at, self.policy.lifetime)
        await self._collection.insert_one(session.to_mongo())
        logger.info("session_created", session_id=str(session.id), user_id=str(user_id))
        return session

    async def find_by_token(self, token: SessionToken) -> Session | None:
        """Look up a session by token, expired or not."""
        return Session.from_mongo(await self._collection.find_one({"token": token}))

    async def find_active_by_token(self, token: SessionToken, at: datetime) -> Session | None:
        """Look up a session by token, ignoring those expired at ``at``."""
        return Session.from_mongo(await self._collection.find_one({"token": token, "expires_at": {"$gt": at}}))

    async def renew(self, session: Session, at: datetime) -> Session:
        """Extend the session to a full lifetime from ``at``.

        Concurrent renewals of the same session are last-writer-wins.
        """
        document = await self._collection.find_one_and_update(
            {"_id": session.id},
            {"$set": {"expires_at": self.policy.renewed_expiry(at), "updated_at": at}},
            return_document=ReturnDocument.AFTER,
        )
        renewed = Session.from_mongo(document)
        if renewed is None:
            raise NotFoundError(f"Session '{session.id}' not found")
        logger.info("session_renewed", session_id=str(renewed.id), expires_at=renewed.expires_at.isoformat())
        return renewed

    async def expire(self, session: Session, at: datetime) -> Session:
        """Mark the session as expired at ``at`` (logout)."""
        document = await self._collection.find_one_and_update(
            {"_id": session.id},
            {"$set": {"expires_at": at, "updated_at": at}},
            return_document=ReturnDocument.AFTER,
        )
        expired = Session.from_mongo(document)
        if expired is None:
            raise NotFoundError(f"Session '{session.id}' not found")
        logger.info("session_logged_out", session_id=str(expired.id))
        return expired

    async def delete_expired(self, at: datetime) -> int:
        """Delete sessions expired at ``at`` and return how many were removed."""
        result = await self._collection.delete_many({"expires_at": {"$lte": at}})
        logger.info("expired_sessions_deleted", count=result.deleted_count)
        return result.deleted_count
