from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from learnhub.core.core import Service
from learnhub.core.modules.course.models import Course, CourseContent
from learnhub.core.pagination import PaginationResult
from learnhub.errors import AccessDeniedError, NotFoundError

logger = structlog.get_logger(__name__)


class CourseService(Service):
    """Manages courses and their embedded components."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("courses")

    async def on_start(self) -> None:
        await self._collection.create_index([("instructor_id", 1)])
        await self._collection.create_index([("created_at", -1)])

    async def get_course(self, course_id: UUID) -> Course:
        doc = await self._collection.find_one({"_id": course_id})
        if doc is None:
            raise NotFoundError(f"Course '{course_id}' not found")
        return Course.model_validate(doc)

    async def list_courses(self, limit: int = 50, offset: int = 0) -> PaginationResult[Course]:
        """Get paginated courses, newest first."""
        total = await self._collection.count_documents({})
        cursor = self._collection.find({}).sort("created_at", -1).skip(offset).limit(limit)
        items = await Course.list_cursor(cursor)
        return PaginationResult(items=items, total=total, limit=limit, offset=offset)

    async def create_course(self, instructor_id: UUID, content: CourseContent) -> Course:
        """Create a course owned by an instructor and link it to them."""
        instructor = await self.core.services.user.get_user(instructor_id)
        if not instructor.is_instructor:
            raise AccessDeniedError("Only instructors can create courses")

        course = Course(instructor_id=instructor_id, **content.model_dump())
        await self._collection.insert_one(course.to_mongo())
        await self.core.services.user.add_course(instructor_id, course.id, as_instructor=True)
        logger.info("course_created", course_id=str(course.id), instructor_id=str(instructor_id))
        return course

    async def delete_course(self, user_id: UUID, course_id: UUID) -> None:
        """Delete a course (owning instructor only) and unlink it from all users."""
        course = await self.get_course(course_id)
        if course.instructor_id != user_id:
            raise AccessDeniedError("Only the course instructor can delete this course")

        await self._collection.delete_one({"_id": course_id})
        await self.core.services.user.remove_course_everywhere(course_id)
        logger.info("course_deleted", course_id=str(course_id))

    async def enroll(self, user_id: UUID, course_id: UUID) -> None:
        """Enroll a user in a course as a learner."""
        await self.get_course(course_id)
        await self.core.services.user.add_course(user_id, course_id, as_instructor=False)
