"""Sliding-window expiry and renewal rules for sessions."""

from datetime import datetime, timedelta
from enum import StrEnum

from pydantic import BaseModel

from tabsession.config import Config
from tabsession.core.modules.session.models import Session, SessionCookie


class SessionStatus(StrEnum):
    """Outcome of evaluating a session at a given instant."""

    ACTIVE = "active"
    RENEWAL_DUE = "renewal_due"
    EXPIRED = "expired"


class SessionPolicy(BaseModel):
    """Decides whether a session is expired, fresh, or due for renewal.

    Pure: every decision takes the evaluation instant as an argument, so one
    clock reading drives a whole request.
    """

    lifetime: timedelta
    renewal_threshold: timedelta

    @classmethod
    def from_config(cls, config: Config) -> "SessionPolicy":
        return cls(lifetime=config.session_lifetime, renewal_threshold=config.session_renewal_threshold)

    def evaluate(self, session: Session, at: datetime) -> SessionStatus:
        if session.expires_at <= at:
            return SessionStatus.EXPIRED
        if at - session.updated_at >= self.renewal_threshold:
            return SessionStatus.RENEWAL_DUE
        return SessionStatus.ACTIVE

    def renewed_expiry(self, at: datetime) -> datetime:
        return at + self.lifetime

    @property
    def cookie_max_age(self) -> int:
        return int(self.lifetime.total_seconds())

    def renewal_cookie(self, session: Session) -> SessionCookie:
        """Cookie re-issuing the same token for a full lifetime."""
        return SessionCookie(value=session.token, max_age=self.cookie_max_age)
