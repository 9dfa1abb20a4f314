import structlog

from tabsession.core.core import Service
from tabsession.core.modules.user.models import AnonymousUser, Principal
from tabsession.errors import ForbiddenCause, ForbiddenError

logger = structlog.get_logger(__name__)


def feature_location_code(feature: str) -> str:
    """Location code for an identified user missing ``feature``, e.g. ``...:USER_CANT_READ_SESSION``."""
    suffix = feature.replace(":", "_").upper()
    return f"MODEL:AUTHENTICATION:INJECT_AUTHENTICATED_USER:USER_CANT_{suffix}"


class AuthorizationService(Service):
    """Single decision point for feature checks."""

    def anonymous_user(self) -> AnonymousUser:
        return AnonymousUser(features=list(self.core.config.anonymous_features))

    def can_request(self, principal: Principal, feature: str) -> bool:
        return feature in principal.features

    def ensure_feature(self, principal: Principal, feature: str) -> None:
        """Raise ForbiddenError unless the principal carries ``feature``."""
        if self.can_request(principal, feature):
            return

        if isinstance(principal, AnonymousUser):
            raise ForbiddenError(
                "Usuário não pode executar esta operação.",
                cause=ForbiddenCause.FEATURE_NOT_FOUND,
                feature=feature,
                action=f'Verifique se este usuário possui a feature "{feature}".',
                error_location_code="MODEL:AUTHORIZATION:CAN_REQUEST:FEATURE_NOT_FOUND",
            )

        logger.info("feature_missing", user_id=str(principal.id), feature=feature)
        raise ForbiddenError(
            "Você não possui permissão para executar esta ação.",
            cause=ForbiddenCause.USER_LACKS_FEATURE,
            feature=feature,
            action=f'Verifique se este usuário já ativou a sua conta e recebeu a feature "{feature}".',
            error_location_code=feature_location_code(feature),
        )
