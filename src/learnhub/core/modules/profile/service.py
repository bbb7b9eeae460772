from typing import Any
from uuid import UUID

import structlog
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from learnhub.core.core import Service
from learnhub.core.modules.profile.models import UserProfile
from learnhub.core.modules.profile.validators import normalize_profile_fields
from learnhub.errors import ConflictError, NotFoundError
from learnhub.utils import now

logger = structlog.get_logger(__name__)


class ProfileService(Service):
    """Manages one profile document per user."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("profiles")

    async def on_start(self) -> None:
        await self._collection.create_index([("user_id", 1)], unique=True)

    async def get_profile(self, user_id: UUID) -> UserProfile:
        doc = await self._collection.find_one({"user_id": user_id})
        if doc is None:
            raise NotFoundError("No linked user profile found")
        return UserProfile.model_validate(doc)

    async def create_profile(self, user_id: UUID, first_name: str, last_name: str, email: str, bio: str = "") -> UserProfile:
        fields = normalize_profile_fields({"first_name": first_name, "last_name": last_name, "email": email, "bio": bio})
        profile = UserProfile(user_id=user_id, **fields)
        try:
            await self._collection.insert_one(profile.to_mongo())
        except DuplicateKeyError as e:
            raise ConflictError("Profile already exists. Use PATCH to update") from e
        logger.info("profile_created", user_id=str(user_id))
        return profile

    async def update_profile(self, user_id: UUID, changes: dict[str, Any]) -> UserProfile:
        update = normalize_profile_fields(changes)
        update["updated_at"] = now()
        doc = await self._collection.find_one_and_update(
            {"user_id": user_id}, {"$set": update}, return_document=ReturnDocument.AFTER
        )
        if doc is None:
            raise NotFoundError("No linked user profile found")
        return UserProfile.model_validate(doc)

    async def delete_profile(self, user_id: UUID) -> bool:
        """Delete the user's profile, returning False if there was none."""
        result = await self._collection.delete_one({"user_id": user_id})
        return result.deleted_count > 0
