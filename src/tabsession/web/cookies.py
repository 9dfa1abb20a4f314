from fastapi import Response

from tabsession.core.modules.session.models import SESSION_COOKIE_NAME, SessionCookie


def write_session_cookie(response: Response, cookie: SessionCookie, secure: bool) -> None:
    """Apply a session cookie directive to the response."""
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=cookie.value,
        max_age=cookie.max_age,
        path="/",
        httponly=True,
        samesite="lax",
        secure=secure,
    )
