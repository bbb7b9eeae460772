from typing import Annotated, cast
from uuid import UUID

from fastapi import Depends, Request
from pydantic import BaseModel

from learnhub.app import App
from learnhub.core.modules.session.models import AuthToken
from learnhub.errors import AuthenticationError
from learnhub.web.auth import AuthContext, AuthScheme


class BasicCredentials(BaseModel):
    email: str
    password: str


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_auth_context(request: Request) -> AuthContext:
    """Credentials stored by the auth middleware, empty if it did not run."""
    return cast(AuthContext, getattr(request.state, "auth", AuthContext()))


async def get_basic_credentials(auth: Annotated[AuthContext, Depends(get_auth_context)]) -> BasicCredentials:
    if auth.scheme != AuthScheme.BASIC or not auth.user_id:
        raise AuthenticationError("Basic credentials required", scheme="Basic")
    return BasicCredentials(email=auth.user_id, password=auth.password or "")


async def get_bearer_token(auth: Annotated[AuthContext, Depends(get_auth_context)]) -> AuthToken:
    """Get the raw bearer token, whether or not it is still valid."""
    if auth.scheme != AuthScheme.BEARER or auth.bearer_token is None:
        raise AuthenticationError("Bearer token required")
    return AuthToken(auth.bearer_token)


async def get_current_user_id(auth: Annotated[AuthContext, Depends(get_auth_context)]) -> UUID:
    if not auth.is_authenticated:
        raise AuthenticationError("Invalid or expired session")
    return cast(UUID, auth.user_id)


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
BasicCredentialsDep = Annotated[BasicCredentials, Depends(get_basic_credentials)]
BearerTokenDep = Annotated[AuthToken, Depends(get_bearer_token)]
CurrentUserIdDep = Annotated[UUID, Depends(get_current_user_id)]
