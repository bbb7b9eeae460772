from fastapi import APIRouter
from pydantic import BaseModel, EmailStr, Field

from learnhub.core.modules.profile.models import ProfileView
from learnhub.web.deps import AppDep, CurrentUserIdDep
from learnhub.web.openapi import ErrorResponse

router = APIRouter(tags=["profile"])


class CreateProfileRequest(BaseModel):
    first_name: str = Field(..., min_length=1, description="First name")
    last_name: str = Field(..., min_length=1, description="Last name")
    email: EmailStr | None = Field(None, description="Contact email, defaults to the login email")
    bio: str = Field("", description="Short biography")


class UpdateProfileRequest(BaseModel):
    first_name: str | None = Field(None, min_length=1, description="First name")
    last_name: str | None = Field(None, min_length=1, description="Last name")
    email: EmailStr | None = Field(None, description="Contact email")
    bio: str | None = Field(None, description="Short biography")


@router.get(
    "/profile",
    summary="Get profile",
    description="Get the profile of the authenticated user.",
    operation_id="getProfile",
    responses={
        200: {"description": "Profile"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "No profile yet"},
    },
)
async def get_profile(app: AppDep, user_id: CurrentUserIdDep) -> ProfileView:
    return await app.get_profile(user_id)


@router.post(
    "/profile",
    summary="Create profile",
    description="Create the profile of the authenticated user.",
    operation_id="createProfile",
    status_code=201,
    responses={
        201: {"description": "Profile created"},
        400: {"model": ErrorResponse, "description": "Invalid profile data"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        409: {"model": ErrorResponse, "description": "Profile already exists"},
    },
)
async def create_profile(request: CreateProfileRequest, app: AppDep, user_id: CurrentUserIdDep) -> ProfileView:
    return await app.create_profile(user_id, request.first_name, request.last_name, request.email, request.bio)


@router.patch(
    "/profile",
    summary="Update profile",
    description="Partially update the profile of the authenticated user.",
    operation_id="updateProfile",
    responses={
        200: {"description": "Updated profile"},
        400: {"model": ErrorResponse, "description": "Invalid profile data"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "No profile yet"},
    },
)
async def update_profile(request: UpdateProfileRequest, app: AppDep, user_id: CurrentUserIdDep) -> ProfileView:
    return await app.update_profile(user_id, request.model_dump(exclude_unset=True))


@router.delete(
    "/profile",
    summary="Delete profile",
    description="Delete the profile of the authenticated user.",
    operation_id="deleteProfile",
    status_code=204,
    responses={
        204: {"description": "Profile deleted"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "No profile yet"},
    },
)
async def delete_profile(app: AppDep, user_id: CurrentUserIdDep) -> None:
    await app.delete_profile(user_id)
