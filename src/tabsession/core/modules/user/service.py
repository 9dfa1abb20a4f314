from typing import Any
from uuid import UUID

import structlog
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from tabsession.core.core import Service
from tabsession.core.modules.user.models import DEFAULT_USER_FEATURES, User
from tabsession.core.modules.user.validators import validate_email, validate_username
from tabsession.errors import NotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class UserService(Service):
    """Reads user records straight from the database so feature changes apply immediately."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("users")

    async def on_start(self) -> None:
        """Create unique indexes for username and email."""
        await self._collection.create_index([("username", 1)], unique=True)
        await self._collection.create_index([("email", 1)], unique=True)

    async def find_user(self, user_id: UUID) -> User | None:
        return User.from_mongo(await self._collection.find_one({"_id": user_id}))

    async def get_user(self, user_id: UUID) -> User:
        """Get user by ID."""
        user = await self.find_user(user_id)
        if user is None:
            raise NotFoundError(f"User '{user_id}' not found")
        return user

    async def create_user(self, username: str, email: str, features: list[str] | None = None) -> User:
        """Create an activated user with the default feature set unless told otherwise."""
        validate_username(username)
        validate_email(email)
        if await self._collection.find_one({"username": username}) is not None:
            raise ValidationError(f"User '{username}' already exists", key="username")

        timestamp = self.core.clock()
        user = User(
            username=username,
            email=email,
            features=list(DEFAULT_USER_FEATURES if features is None else features),
            created_at=timestamp,
            updated_at=timestamp,
        )
        await self._collection.insert_one(user.to_mongo())
        logger.debug("user_created", user_id=str(user.id), username=username)
        return user

    async def add_features(self, user_id: UUID, features: list[str]) -> User:
        """Grant features to a user."""
        return await self._update_features(user_id, {"$addToSet": {"features": {"$each": features}}})

    async def remove_features(self, user_id: UUID, features: list[str]) -> User:
        """Revoke features from a user; open sessions lose access on their next request."""
        return await self._update_features(user_id, {"$pull": {"features": {"$in": features}}})

    async def _update_features(self, user_id: UUID, update: dict[str, Any]) -> User:
        document = await self._collection.find_one_and_update(
            {"_id": user_id},
            {**update, "$set": {"updated_at": self.core.clock()}},
            return_document=ReturnDocument.AFTER,
        )
        user = User.from_mongo(document)
        if user is None:
            raise NotFoundError(f"User '{user_id}' not found")
        return user
