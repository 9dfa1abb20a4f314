import re

from tabsession.errors import ValidationError

USERNAME_RE = re.compile(r"[a-zA-Z0-9]{3,30}")
EMAIL_RE = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")


def validate_username(username: str) -> None:
    """Validate username meets requirements.

    Requirements:
    - 3 to 30 characters
    - Only ASCII letters and digits

    Raises:
        ValidationError: If username doesn't meet requirements
    """
    if not USERNAME_RE.fullmatch(username):
        raise ValidationError('"username" deve conter entre 3 e 30 caracteres alfanuméricos.', key="username")


def validate_email(email: str) -> None:
    if not EMAIL_RE.fullmatch(email):
        raise ValidationError('"email" deve conter um email válido.', key="email")
