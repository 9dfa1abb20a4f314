from typing import Annotated, cast
from urllib.parse import unquote

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie

from tabsession.app import App
from tabsession.config import Config
from tabsession.core.modules.session.models import SESSION_COOKIE_NAME

# Security schemes
cookie_scheme = APIKeyCookie(name=SESSION_COOKIE_NAME, auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_config(request: Request) -> Config:
    return cast(Config, request.app.state.config)


async def get_session_token(token_cookie: Annotated[str | None, Depends(cookie_scheme)] = None) -> str | None:
    """Get the raw session cookie, percent-decoded the way browsers encode cookie values.

    Validation is left to the application so malformed tokens produce a proper ValidationError.
    """
    if token_cookie is None:
        return None
    return unquote(token_cookie)


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
ConfigDep = Annotated[Config, Depends(get_config)]
SessionTokenDep = Annotated[str | None, Depends(get_session_token)]
