from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from pymongo.asynchronous.database import AsyncDatabase

from tabsession.config import Config
from tabsession.core.core import Core
from tabsession.core.modules.balance.models import BalanceType
from tabsession.core.modules.session.models import SessionCookie, SessionView
from tabsession.core.modules.user.models import User, UserProfile
from tabsession.errors import UnauthorizedError
from tabsession.utils import Clock, now

READ_SESSION_FEATURE = "read:session"


class App:
    """Facade for all application operations, validates permissions before delegating to Core."""

    def __init__(
        self, config: Config, clock: Clock = now, database: AsyncDatabase[dict[str, Any]] | None = None
    ) -> None:
        self._core = Core(config, clock, database)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    @property
    def core(self) -> Core:
        return self._core

    async def get_current_user(self, session_token: str | None) -> tuple[UserProfile, SessionCookie | None]:
        """Get the profile behind the session cookie, renewing the session when due.

        The read:session check runs before renewal, so a refused request leaves the session untouched.

        Returns the profile and the cookie to set, or None when the session was left unchanged.
        """
        at = self._core.clock()
        authentication = await self._core.services.authentication.authenticate(
            session_token, at, feature=READ_SESSION_FEATURE
        )

        user = authentication.principal
        if not isinstance(user, User):  # anonymous principals never carry read:session
            raise UnauthorizedError
        return await self._build_profile(user), authentication.cookie

    async def logout(self, session_token: str | None) -> tuple[SessionView, SessionCookie]:
        """Expire the current session and return the cookie that clears it."""
        at = self._core.clock()
        authentication = await self._core.services.authentication.authenticate(
            session_token, at, feature=READ_SESSION_FEATURE, renew=False
        )

        if authentication.session is None:
            raise UnauthorizedError
        expired = await self._core.services.session.expire(authentication.session, at)
        return SessionView.from_domain(expired), SessionCookie.clearing()

    async def purge_expired_sessions(self) -> int:
        """Delete sessions that are already expired."""
        return await self._core.services.session.delete_expired(self._core.clock())

    async def _build_profile(self, user: User) -> UserProfile:
        balance = self._core.services.balance
        tabcoins = await balance.get_balance(user.id, BalanceType.TABCOIN)
        tabcash = await balance.get_balance(user.id, BalanceType.TABCASH)
        return UserProfile.from_domain(user, tabcoins, tabcash)
