from fastapi import APIRouter, Response

from tabsession.core.modules.session.models import SessionView
from tabsession.web.cookies import write_session_cookie
from tabsession.web.deps import AppDep, ConfigDep, SessionTokenDep
from tabsession.web.openapi import ErrorResponse

router = APIRouter(tags=["sessions"])


@router.delete(
    "/sessions",
    summary="End session",
    description="Expire the current session and clear the session cookie.",
    operation_id="logout",
    responses={
        200: {"description": "Session expired"},
        400: {"model": ErrorResponse, "description": "Malformed session cookie"},
        401: {"model": ErrorResponse, "description": "Session already expired"},
        403: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def logout(app: AppDep, config: ConfigDep, session_token: SessionTokenDep, response: Response) -> SessionView:
    session, cookie = await app.logout(session_token)
    write_session_cookie(response, cookie, secure=config.session_cookie_secure)
    return session
