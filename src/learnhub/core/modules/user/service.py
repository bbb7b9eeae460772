from typing import Any
from uuid import UUID

import bcrypt
import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from learnhub.core.core import Service
from learnhub.core.modules.user.models import User
from learnhub.core.modules.user.validators import validate_email, validate_name, validate_password
from learnhub.errors import ConflictError, NotFoundError, ValidationError
from learnhub.utils import now

logger = structlog.get_logger(__name__)

# Fields that only change through enrollment or course creation
NON_UPDATABLE_FIELDS = frozenset({"learner_courses", "instructor_courses"})


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


class UserService(Service):
    """Manages user accounts stored in MongoDB."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("users")

    async def on_start(self) -> None:
        await self._collection.create_index([("email", 1)], unique=True)

    async def get_user(self, user_id: UUID) -> User:
        doc = await self._collection.find_one({"_id": user_id})
        if doc is None:
            raise NotFoundError(f"User '{user_id}' not found")
        return User.model_validate(doc)

    async def get_user_by_email(self, email: str) -> User:
        doc = await self._collection.find_one({"email": email})
        if doc is None:
            raise NotFoundError(f"User '{email}' not found")
        return User.model_validate(doc)

    async def create_user(self, email: str, password: str, name: str, is_instructor: bool) -> User:
        """Create user with hashed password."""
        email = validate_email(email)
        validate_password(password)
        name = validate_name(name)

        user = User(name=name, email=email, password_hash=hash_password(password), is_instructor=is_instructor)
        try:
            await self._collection.insert_one(user.to_mongo())
        except DuplicateKeyError as e:
            raise ConflictError(f"User '{email}' already exists") from e
        logger.info("user_registered", user_id=str(user.id), is_instructor=is_instructor)
        return user

    async def authenticate(self, email: str, password: str) -> User | None:
        """Return the user if the password matches, None if it does not.

        Raises NotFoundError for an unknown email.
        """
        email = validate_email(email)
        user = await self.get_user_by_email(email)
        if not check_password(password, user.password_hash):
            return None
        return user

    async def update_user(self, user_id: UUID, changes: dict[str, Any]) -> User:
        """Apply a partial update to the user's editable fields."""
        forbidden = NON_UPDATABLE_FIELDS & changes.keys()
        if forbidden:
            raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(forbidden))}")

        update: dict[str, Any] = {}
        if changes.get("name") is not None:
            update["name"] = validate_name(changes["name"])
        if not update:
            return await self.get_user(user_id)

        update["updated_at"] = now()
        result = await self._collection.update_one({"_id": user_id}, {"$set": update})
        if result.matched_count == 0:
            raise NotFoundError(f"User '{user_id}' not found")
        return await self.get_user(user_id)

    async def change_password(self, user_id: UUID, old_password: str, new_password: str) -> None:
        """Change user password after verifying current password."""
        user = await self.get_user(user_id)
        if not check_password(old_password, user.password_hash):
            raise ValidationError("Invalid current password")

        validate_password(new_password)
        await self._collection.update_one(
            {"_id": user_id}, {"$set": {"password_hash": hash_password(new_password), "updated_at": now()}}
        )

    async def add_course(self, user_id: UUID, course_id: UUID, *, as_instructor: bool) -> User:
        """Link a course to the user as learner or instructor."""
        field = "instructor_courses" if as_instructor else "learner_courses"
        result = await self._collection.update_one(
            {"_id": user_id}, {"$addToSet": {field: course_id}, "$set": {"updated_at": now()}}
        )
        if result.matched_count == 0:
            raise NotFoundError(f"User '{user_id}' not found")
        return await self.get_user(user_id)

    async def remove_course_everywhere(self, course_id: UUID) -> None:
        """Unlink a deleted course from all users."""
        await self._collection.update_many(
            {"$or": [{"learner_courses": course_id}, {"instructor_courses": course_id}]},
            {"$pull": {"learner_courses": course_id, "instructor_courses": course_id}},
        )

    async def delete_user(self, user_id: UUID) -> None:
        result = await self._collection.delete_one({"_id": user_id})
        if result.deleted_count == 0:
            raise NotFoundError(f"User '{user_id}' not found")
        logger.info("user_deleted", user_id=str(user_id))
