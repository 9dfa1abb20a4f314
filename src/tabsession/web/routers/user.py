from fastapi import APIRouter, Response

from tabsession.core.modules.user.models import UserProfile
from tabsession.web.cookies import write_session_cookie
from tabsession.web.deps import AppDep, ConfigDep, SessionTokenDep
from tabsession.web.openapi import ErrorResponse

router = APIRouter(tags=["user"])


@router.get(
    "/user",
    summary="Get current user",
    description=(
        "Get the profile of the user behind the session cookie. "
        "Sessions past the renewal threshold are extended and the cookie is re-issued."
    ),
    operation_id="getCurrentUser",
    responses={
        200: {"description": "Current user profile"},
        400: {"model": ErrorResponse, "description": "Malformed session cookie"},
        401: {"model": ErrorResponse, "description": "Session expired"},
        403: {"model": ErrorResponse, "description": "Missing read:session feature"},
    },
)
async def get_current_user(app: AppDep, config: ConfigDep, session_token: SessionTokenDep, response: Response) -> UserProfile:
    profile, cookie = await app.get_current_user(session_token)

    if cookie is not None:
        write_session_cookie(response, cookie, secure=config.session_cookie_secure)

    return profile
