from fastapi import APIRouter
from pydantic import BaseModel, Field

from learnhub.core.modules.user.models import UserView
from learnhub.web.deps import AppDep, CurrentUserIdDep
from learnhub.web.openapi import ErrorResponse

router = APIRouter(tags=["users"])


class UpdateUserRequest(BaseModel):
    """Partial update of the current user. Course lists are rejected."""

    name: str | None = Field(None, min_length=1, description="New display name")
    learner_courses: list[str] | None = Field(None, description="Not updatable, use enrollment instead")
    instructor_courses: list[str] | None = Field(None, description="Not updatable, use course creation instead")


class ChangePasswordRequest(BaseModel):
    """Request to change user password."""

    old_password: str = Field(..., min_length=1, description="Current password")
    new_password: str = Field(..., min_length=1, description="New password")


@router.get(
    "/users/me",
    summary="Get current user",
    description="Get the account of the authenticated user.",
    operation_id="getCurrentUser",
    responses={
        200: {"description": "Current user"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_current_user(app: AppDep, user_id: CurrentUserIdDep) -> UserView:
    return await app.get_current_user(user_id)


@router.patch(
    "/users/me",
    summary="Update current user",
    description="Update editable fields of the authenticated user.",
    operation_id="updateCurrentUser",
    responses={
        200: {"description": "Updated user"},
        400: {"model": ErrorResponse, "description": "Field cannot be updated"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def update_current_user(request: UpdateUserRequest, app: AppDep, user_id: CurrentUserIdDep) -> UserView:
    return await app.update_current_user(user_id, request.model_dump(exclude_unset=True))


@router.post(
    "/users/me/change-password",
    summary="Change password",
    description="Change the password of the authenticated user. All sessions of the user are ended.",
    operation_id="changePassword",
    status_code=204,
    responses={
        204: {"description": "Password changed successfully"},
        400: {"model": ErrorResponse, "description": "Invalid current or new password"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def change_password(request: ChangePasswordRequest, app: AppDep, user_id: CurrentUserIdDep) -> None:
    await app.change_password(user_id, request.old_password, request.new_password)


@router.delete(
    "/users/me",
    summary="Delete account",
    description="Delete the authenticated user together with their profile and sessions.",
    operation_id="deleteCurrentUser",
    status_code=204,
    responses={
        204: {"description": "Account deleted"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def delete_current_user(app: AppDep, user_id: CurrentUserIdDep) -> None:
    await app.delete_current_user(user_id)
