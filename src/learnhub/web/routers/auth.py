from uuid import UUID

from fastapi import APIRouter
from pydantic import BaseModel, Field

from learnhub.core.modules.user.models import UserView
from learnhub.web.deps import AppDep, BasicCredentialsDep, BearerTokenDep, CurrentUserIdDep
from learnhub.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


class RegisterRequest(BaseModel):
    """Account details; email and password come from the Basic Authorization header."""

    name: str = Field(..., min_length=1, description="Display name")
    is_instructor: bool = Field(..., description="Whether the account can create courses")


class TokenResponse(BaseModel):
    """Authentication response."""

    access_token: str = Field(..., description="Bearer token for subsequent requests")
    token_type: str = Field("Bearer", description="Authorization scheme to use with the token")
    user: UserView = Field(..., description="Authenticated user")


class TokenValidationResponse(BaseModel):
    message: str = Field(..., description="Validation result")
    user_id: UUID = Field(..., description="User the token belongs to")


@router.post(
    "/auth/register",
    summary="Register account",
    description="Create an account using Basic credentials (email:password) and receive a bearer token.",
    operation_id="register",
    status_code=201,
    responses={
        201: {"description": "Account created"},
        400: {"model": ErrorResponse, "description": "Invalid email, password or name"},
        401: {"model": ErrorResponse, "description": "Missing Basic credentials"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
    },
)
async def register(request: RegisterRequest, credentials: BasicCredentialsDep, app: AppDep) -> TokenResponse:
    token, user = await app.register(credentials.email, credentials.password, request.name, request.is_instructor)
    return TokenResponse(access_token=token, user=user)


@router.post(
    "/auth/login",
    summary="Authenticate user",
    description="Authenticate with Basic credentials (email:password) to receive a bearer token.",
    operation_id="login",
    responses={
        200: {"description": "Successfully authenticated"},
        401: {"model": ErrorResponse, "description": "Missing or invalid credentials"},
        404: {"model": ErrorResponse, "description": "Unknown email"},
    },
)
async def login(credentials: BasicCredentialsDep, app: AppDep) -> TokenResponse:
    token, user = await app.login(credentials.email, credentials.password)
    return TokenResponse(access_token=token, user=user)


@router.post(
    "/auth/logout",
    summary="End session",
    description="Revoke the bearer token used for this request.",
    operation_id="logout",
    status_code=204,
    responses={
        204: {"description": "Successfully logged out"},
        401: {"model": ErrorResponse, "description": "Token missing, invalid or already revoked"},
    },
)
async def logout(app: AppDep, auth_token: BearerTokenDep) -> None:
    await app.logout(auth_token)


@router.get(
    "/auth/validate-token",
    summary="Validate token",
    description="Check that the bearer token belongs to an active session.",
    operation_id="validateToken",
    responses={
        200: {"description": "Token is valid"},
        401: {"model": ErrorResponse, "description": "Token missing, invalid or expired"},
    },
)
async def validate_token(user_id: CurrentUserIdDep) -> TokenValidationResponse:
    return TokenValidationResponse(message="Valid token", user_id=user_id)
