from datetime import timedelta

from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str
    host: str
    port: int
    debug: bool
    cors_origins: list[str] = []
    session_lifetime_days: int = 30  # Absolute lifetime granted on creation and on every renewal
    session_renewal_threshold_days: int = 9  # Days since last renewal after which the next request renews
    session_cookie_secure: bool = False  # Set to True in production with HTTPS
    # Features granted to requests without a session
    anonymous_features: list[str] = ["read:activation_token", "create:session", "create:user"]

    model_config = {
        "env_file": [".env"],
        "env_prefix": "TABSESSION_",
        "extra": "ignore",
    }

    @property
    def session_lifetime(self) -> timedelta:
        return timedelta(days=self.session_lifetime_days)

    @property
    def session_renewal_threshold(self) -> timedelta:
        return timedelta(days=self.session_renewal_threshold_days)
