from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from tabsession.core.db import MongoModel
from tabsession.utils import now

# Features of an activated account
DEFAULT_USER_FEATURES = [
    "create:session",
    "read:session",
    "create:content",
    "create:content:text_root",
    "create:content:text_child",
    "update:content",
    "update:user",
]


class User(MongoModel):
    """User domain model."""

    username: str
    email: str
    features: list[str] = Field(default_factory=list)
    notifications: bool = True
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)


class AnonymousUser(BaseModel):
    """Principal for requests that carry no session."""

    features: list[str]


Principal = User | AnonymousUser


class UserProfile(BaseModel):
    """Profile of the authenticated user (API representation)."""

    id: UUID = Field(..., description="User ID")
    username: str = Field(..., description="Username")
    email: str = Field(..., description="Email address")
    notifications: bool = Field(..., description="Whether the user receives notifications")
    features: list[str] = Field(..., description="Features granted to the user")
    tabcoins: int = Field(..., description="TabCoins balance")
    tabcash: int = Field(..., description="TabCash balance")
    created_at: datetime = Field(..., description="Account creation time")
    updated_at: datetime = Field(..., description="Last account update time")

    @classmethod
    def from_domain(cls, user: User, tabcoins: int, tabcash: int) -> "UserProfile":
        """Create view model from domain model and balances."""
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            notifications=user.notifications,
            features=user.features,
            tabcoins=tabcoins,
            tabcash=tabcash,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
