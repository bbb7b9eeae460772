"""Course-related API endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query

from learnhub.core.modules.course.models import Course, CourseContent
from learnhub.core.modules.user.models import UserView
from learnhub.core.pagination import PaginationResult
from learnhub.web.deps import AppDep, CurrentUserIdDep
from learnhub.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["courses"])


@router.get(
    "/courses",
    summary="List courses",
    description="Get paginated courses, newest first.",
    operation_id="listCourses",
    responses={
        200: {"description": "Paginated list of courses"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def list_courses(
    app: AppDep,
    _: CurrentUserIdDep,
    limit: Annotated[int, Query(ge=1, le=100, description="Maximum items to return")] = 50,
    offset: Annotated[int, Query(ge=0, description="Number of items to skip")] = 0,
) -> PaginationResult[Course]:
    return await app.get_courses(limit, offset)


@router.post(
    "/courses",
    summary="Create course",
    description="Create a course with its modules and assessments. Only instructors can create courses.",
    operation_id="createCourse",
    status_code=201,
    responses={
        201: {"description": "Course created"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Not an instructor"},
    },
)
async def create_course(content: CourseContent, app: AppDep, user_id: CurrentUserIdDep) -> Course:
    return await app.create_course(user_id, content)


@router.get(
    "/courses/{course_id}",
    summary="Get course",
    operation_id="getCourse",
    responses={
        200: {"description": "Course"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Course not found"},
    },
)
async def get_course(course_id: UUID, app: AppDep, _: CurrentUserIdDep) -> Course:
    return await app.get_course(course_id)


@router.delete(
    "/courses/{course_id}",
    summary="Delete course",
    description="Delete a course. Only the instructor who created it can delete it.",
    operation_id="deleteCourse",
    status_code=204,
    responses={
        204: {"description": "Course deleted"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Not the course instructor"},
        404: {"model": ErrorResponse, "description": "Course not found"},
    },
)
async def delete_course(course_id: UUID, app: AppDep, user_id: CurrentUserIdDep) -> None:
    await app.delete_course(user_id, course_id)


@router.post(
    "/courses/{course_id}/enroll",
    summary="Enroll in course",
    description="Enroll the authenticated user in a course as a learner.",
    operation_id="enrollInCourse",
    responses={
        200: {"description": "Updated user with the course in learner_courses"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Course not found"},
    },
)
async def enroll(course_id: UUID, app: AppDep, user_id: CurrentUserIdDep) -> UserView:
    return await app.enroll(user_id, course_id)
