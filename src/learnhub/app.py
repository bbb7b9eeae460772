from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any
from uuid import UUID

import structlog

from learnhub.config import Config
from learnhub.core.core import Core
from learnhub.core.modules.course.models import Course, CourseContent
from learnhub.core.modules.profile.models import ProfileView
from learnhub.core.modules.session.models import AuthToken
from learnhub.core.modules.user.models import UserView
from learnhub.core.pagination import PaginationResult
from learnhub.errors import AuthenticationError, NotFoundError

logger = structlog.get_logger(__name__)


class App:
    """Facade for all application operations, checks identity before delegating to Core."""

    def __init__(self, config: Config) -> None:
        self._core = Core(config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    # === Tokens ===
    def resolve_token(self, auth_token: str) -> UUID | None:
        """Resolve a bearer token to a user ID, None if it is not valid."""
        return self._core.services.session.get_user_id(auth_token)

    # === Authentication ===
    async def register(self, email: str, password: str, name: str, is_instructor: bool) -> tuple[AuthToken, UserView]:
        """Create an account and log it in."""
        user = await self._core.services.user.create_user(email, password, name, is_instructor)
        token = self._core.services.session.create_session(user.id)
        return token, UserView.from_domain(user)

    async def login(self, email: str, password: str) -> tuple[AuthToken, UserView]:
        """Check credentials and create a session."""
        user = await self._core.services.user.authenticate(email, password)
        if user is None:
            raise AuthenticationError("Invalid credentials", scheme="Basic")
        token = self._core.services.session.create_session(user.id)
        logger.info("user_logged_in", user_id=str(user.id))
        return token, UserView.from_domain(user)

    async def logout(self, auth_token: str) -> None:
        """Invalidate the session behind auth_token."""
        if not self._core.services.session.invalidate_session(auth_token):
            raise AuthenticationError("Invalid or expired session")

    # === Users ===
    async def get_current_user(self, user_id: UUID) -> UserView:
        user = await self._core.services.user.get_user(user_id)
        return UserView.from_domain(user)

    async def update_current_user(self, user_id: UUID, changes: dict[str, Any]) -> UserView:
        user = await self._core.services.user.update_user(user_id, changes)
        return UserView.from_domain(user)

    async def change_password(self, user_id: UUID, old_password: str, new_password: str) -> None:
        """Change password and end every session of the user."""
        await self._core.services.user.change_password(user_id, old_password, new_password)
        self._core.services.session.invalidate_user_sessions(user_id)

    async def delete_current_user(self, user_id: UUID) -> None:
        """Delete the account together with its profile and sessions."""
        await self._core.services.user.delete_user(user_id)
        await self._core.services.profile.delete_profile(user_id)
        self._core.services.session.invalidate_user_sessions(user_id)

    # === Profiles ===
    async def get_profile(self, user_id: UUID) -> ProfileView:
        profile = await self._core.services.profile.get_profile(user_id)
        return ProfileView.from_domain(profile)

    async def create_profile(
        self, user_id: UUID, first_name: str, last_name: str, email: str | None, bio: str
    ) -> ProfileView:
        """Create a profile, defaulting the contact email to the login email."""
        if email is None:
            email = (await self._core.services.user.get_user(user_id)).email
        profile = await self._core.services.profile.create_profile(user_id, first_name, last_name, email, bio)
        return ProfileView.from_domain(profile)

    async def update_profile(self, user_id: UUID, changes: dict[str, Any]) -> ProfileView:
        profile = await self._core.services.profile.update_profile(user_id, changes)
        return ProfileView.from_domain(profile)

    async def delete_profile(self, user_id: UUID) -> None:
        if not await self._core.services.profile.delete_profile(user_id):
            raise NotFoundError("No linked user profile found")

    # === Courses ===
    async def get_courses(self, limit: int = 50, offset: int = 0) -> PaginationResult[Course]:
        return await self._core.services.course.list_courses(limit, offset)

    async def get_course(self, course_id: UUID) -> Course:
        return await self._core.services.course.get_course(course_id)

    async def create_course(self, user_id: UUID, content: CourseContent) -> Course:
        """Create a course (instructors only)."""
        return await self._core.services.course.create_course(user_id, content)

    async def delete_course(self, user_id: UUID, course_id: UUID) -> None:
        """Delete a course (owning instructor only)."""
        await self._core.services.course.delete_course(user_id, course_id)

    async def enroll(self, user_id: UUID, course_id: UUID) -> UserView:
        await self._core.services.course.enroll(user_id, course_id)
        return await self.get_current_user(user_id)
