import re

from tabsession.core.modules.session.models import SESSION_COOKIE_NAME, SESSION_TOKEN_LENGTH, SessionToken
from tabsession.errors import ValidationError

ALPHANUMERIC_RE = re.compile(r"[A-Za-z0-9]+")


def validate_session_token(raw_token: str) -> SessionToken:
    """Validate the raw value of the session cookie.

    Requirements:
    - Exactly 96 characters
    - Only ASCII letters and digits

    Raises:
        ValidationError: If the token doesn't meet requirements
    """
    if len(raw_token) != SESSION_TOKEN_LENGTH:
        raise ValidationError(
            f'"{SESSION_COOKIE_NAME}" deve possuir {SESSION_TOKEN_LENGTH} caracteres.', key=SESSION_COOKIE_NAME
        )

    if not ALPHANUMERIC_RE.fullmatch(raw_token):
        raise ValidationError(
            f'"{SESSION_COOKIE_NAME}" deve conter apenas caracteres alfanuméricos.', key=SESSION_COOKIE_NAME
        )

    return SessionToken(raw_token)
