from abc import ABC
from enum import StrEnum
from typing import Any, ClassVar
from uuid import UUID, uuid4


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """

    status_code: ClassVar[int] = 400
    default_message: ClassVar[str] = "Não foi possível processar a requisição."
    default_action: ClassVar[str] = "Ajuste os dados enviados e tente novamente."
    default_location_code: ClassVar[str] = "MODEL:UNKNOWN"

    def __init__(
        self, message: str | None = None, *, action: str | None = None, error_location_code: str | None = None
    ) -> None:
        self.message = message or self.default_message
        self.action = action or self.default_action
        self.error_location_code = error_location_code or self.default_location_code
        self.error_id: UUID = uuid4()
        super().__init__(self.message)

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_dict(self, request_id: UUID) -> dict[str, Any]:
        """Render the public error body."""
        return {
            "status_code": self.status_code,
            "name": self.name,
            "message": self.message,
            "action": self.action,
            "error_id": str(self.error_id),
            "request_id": str(request_id),
            "error_location_code": self.error_location_code,
        }


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    status_code = 404
    default_message = "Não foi possível encontrar este recurso no sistema."
    default_action = "Verifique se o caminho (PATH) e o método (GET, POST, PUT, DELETE) estão corretos."
    default_location_code = "MODEL:NOT_FOUND"


class UnauthorizedError(UserError):
    """Raised when the request carries no usable session.

    When ``clear_session_cookie`` is set the error response also overwrites
    the client's session cookie.
    """

    status_code = 401
    default_message = "Usuário não autenticado."
    default_action = "Verifique se você está autenticado com uma sessão ativa e tente novamente."
    default_location_code = "MODEL:AUTHENTICATION"

    def __init__(
        self,
        message: str | None = None,
        *,
        action: str | None = None,
        error_location_code: str | None = None,
        clear_session_cookie: bool = False,
    ) -> None:
        super().__init__(message, action=action, error_location_code=error_location_code)
        self.clear_session_cookie = clear_session_cookie


class ForbiddenCause(StrEnum):
    """Why a principal was refused a feature."""

    FEATURE_NOT_FOUND = "feature_not_found"  # anonymous principal, feature not derivable
    USER_LACKS_FEATURE = "user_lacks_feature"  # identified user without the feature


class ForbiddenError(UserError):
    """Raised when a principal lacks the feature required by an operation."""

    status_code = 403
    default_message = "Você não possui permissão para executar esta ação."
    default_action = "Verifique se este usuário possui a feature necessária."
    default_location_code = "MODEL:AUTHORIZATION"

    def __init__(
        self,
        message: str | None = None,
        *,
        cause: ForbiddenCause,
        feature: str,
        action: str | None = None,
        error_location_code: str | None = None,
    ) -> None:
        super().__init__(message, action=action, error_location_code=error_location_code)
        self.cause = cause
        self.feature = feature


class ValidationError(UserError):
    """Raised when user input fails validation."""

    default_location_code = "MODEL:VALIDATOR:FINAL_SCHEMA"

    def __init__(
        self,
        message: str | None = None,
        *,
        key: str | None = None,
        action: str | None = None,
        error_location_code: str | None = None,
    ) -> None:
        super().__init__(message, action=action, error_location_code=error_location_code)
        self.key = key

    def to_dict(self, request_id: UUID) -> dict[str, Any]:
        body = super().to_dict(request_id)
        if self.key is not None:
            body["key"] = self.key
        return body
