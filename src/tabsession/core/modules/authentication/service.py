from datetime import datetime

import structlog
from pydantic import BaseModel

from tabsession.core.core import Service
from tabsession.core.modules.session.models import Session, SessionCookie
from tabsession.core.modules.session.policy import SessionStatus
from tabsession.core.modules.session.validators import validate_session_token
from tabsession.core.modules.user.models import Principal
from tabsession.errors import UnauthorizedError

logger = structlog.get_logger(__name__)


class Authentication(BaseModel):
    """Who is behind a request, and the cookie to send back if any."""

    principal: Principal
    session: Session | None = None
    cookie: SessionCookie | None = None


class AuthenticationService(Service):
    """Resolves the session cookie of a request into a principal."""

    async def authenticate(
        self, raw_token: str | None, at: datetime, feature: str | None = None, renew: bool = True
    ) -> Authentication:
        """Validate, look up and evaluate the session at instant ``at``.

        Requests without a cookie, or with a well-formed token that matches no
        session, resolve to the anonymous principal. An expired session raises
        UnauthorizedError directing the client to drop its cookie; the stored
        row is left as is. When ``feature`` is given the principal must carry it,
        checked on the live user record before anything is written. A session
        due for renewal is then extended when ``renew`` is set.
        """
        authorization = self.core.services.authorization
        if not raw_token:
            return self._anonymous(feature)

        token = validate_session_token(raw_token)
        sessions = self.core.services.session
        session = await sessions.find_by_token(token)
        if session is None:
            return self._anonymous(feature)

        status = sessions.policy.evaluate(session, at)
        if status == SessionStatus.EXPIRED:
            logger.info("session_expired", session_id=str(session.id), expires_at=session.expires_at.isoformat())
            raise UnauthorizedError(
                "Usuário não possui sessão ativa.",
                action="Verifique se este usuário está logado.",
                error_location_code="MODEL:AUTHENTICATION:INJECT_AUTHENTICATED_USER:SESSION_EXPIRED",
                clear_session_cookie=True,
            )

        user = await self.core.services.user.find_user(session.user_id)
        if user is None:
            raise UnauthorizedError(
                "Usuário não possui sessão ativa.",
                action="Verifique se este usuário está logado.",
                error_location_code="MODEL:AUTHENTICATION:INJECT_AUTHENTICATED_USER:USER_NOT_FOUND",
            )

        if feature is not None:
            authorization.ensure_feature(user, feature)

        cookie = None
        if status == SessionStatus.RENEWAL_DUE and renew:
            session = await sessions.renew(session, at)
            cookie = sessions.policy.renewal_cookie(session)

        return Authentication(principal=user, session=session, cookie=cookie)

    def _anonymous(self, feature: str | None) -> Authentication:
        authorization = self.core.services.authorization
        anonymous = authorization.anonymous_user()
        if feature is not None:
            authorization.ensure_feature(anonymous, feature)
        return Authentication(principal=anonymous)
