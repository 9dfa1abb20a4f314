from typing import cast
from uuid import UUID, uuid4

import structlog
from fastapi import Request
from fastapi.responses import JSONResponse, Response

from tabsession.config import Config
from tabsession.core.modules.session.models import SessionCookie
from tabsession.errors import UnauthorizedError, UserError
from tabsession.web.cookies import write_session_cookie

logger = structlog.get_logger(__name__)


def get_request_id(request: Request) -> UUID:
    return cast(UUID, getattr(request.state, "request_id", None) or uuid4())


async def user_error_handler(request: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with their own status codes."""
    error = cast(UserError, exc)
    response = JSONResponse(status_code=error.status_code, content=error.to_dict(get_request_id(request)))

    # Expired sessions make the client drop its cookie
    if isinstance(error, UnauthorizedError) and error.clear_session_cookie:
        config = cast(Config, request.app.state.config)
        write_session_cookie(response, SessionCookie.clearing(), secure=config.session_cookie_secure)

    return response


async def general_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    request_id = get_request_id(request)
    error_id = uuid4()
    logger.exception("unexpected_error", error_id=str(error_id), error=str(exc))
    return JSONResponse(
        status_code=500,
        content={
            "status_code": 500,
            "name": "InternalServerError",
            "message": "Um erro interno não esperado aconteceu.",
            "action": "Informe ao suporte o valor encontrado no campo 'error_id'.",
            "error_id": str(error_id),
            "request_id": str(request_id),
            "error_location_code": "WEB:UNEXPECTED_ERROR",
        },
    )
