"""Session management models."""

import secrets
from datetime import datetime, timedelta
from typing import NewType
from uuid import UUID

from pydantic import BaseModel, Field

from tabsession.core.db import MongoModel

SessionToken = NewType("SessionToken", str)

SESSION_COOKIE_NAME = "session_id"
SESSION_TOKEN_LENGTH = 96
CLEARED_COOKIE_VALUE = "invalid"


def generate_session_token() -> SessionToken:
    """Return a fresh token: 48 random bytes as 96 hex characters."""
    return SessionToken(secrets.token_hex(SESSION_TOKEN_LENGTH // 2))


class Session(MongoModel):
    """Server-side record behind the session cookie.

    Indexed on token - unique, user_id. Expired rows stay in the collection
    until purged explicitly.
    """

    token: str
    user_id: UUID
    created_at: datetime
    updated_at: datetime  # last renewal; equals created_at until the first one
    expires_at: datetime

    @classmethod
    def start(cls, user_id: UUID, at: datetime, lifetime: timedelta) -> "Session":
        """Build a new session beginning at ``at``."""
        return cls(
            token=generate_session_token(),
            user_id=user_id,
            created_at=at,
            updated_at=at,
            expires_at=at + lifetime,
        )


class SessionCookie(BaseModel):
    """Instruction for the web layer to write the session cookie."""

    value: str
    max_age: int = Field(..., description="Cookie Max-Age in seconds, -1 clears it")

    @classmethod
    def clearing(cls) -> "SessionCookie":
        return cls(value=CLEARED_COOKIE_VALUE, max_age=-1)


class SessionView(BaseModel):
    """Session information returned on logout (API representation)."""

    id: UUID = Field(..., description="Session ID")
    expires_at: datetime = Field(..., description="Instant after which the session is no longer accepted")
    created_at: datetime = Field(..., description="Session creation time")
    updated_at: datetime = Field(..., description="Last renewal or expiry time")

    @classmethod
    def from_domain(cls, session: Session) -> "SessionView":
        return cls(
            id=session.id,
            expires_at=session.expires_at,
            created_at=session.created_at,
            updated_at=session.updated_at,
        )
