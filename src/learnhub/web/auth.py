"""Authorization header parsing (RFC 7617 Basic, RFC 6750 Bearer).

The middleware runs on every request and never rejects anything: it only
records what the client presented on ``request.state.auth``. Endpoints that
need an identity enforce it through the dependencies in ``learnhub.web.deps``.
"""

import base64
import binascii
import re
from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import Any

from fastapi import Request, Response
from pydantic import BaseModel, ConfigDict

# "<scheme> <parameters>", see RFC 9110 section 11.4
AUTHORIZATION_RE = re.compile(r"^(?P<scheme>\S+) +(?P<parameters>\S+)$")


class AuthScheme(StrEnum):
    BASIC = "Basic"
    BEARER = "Bearer"


class AuthContext(BaseModel):
    """Credentials extracted from the Authorization header.

    Basic sets user_id to the login string and password verbatim.
    Bearer sets bearer_token and user_id to the resolved user, or None
    if the token is not valid. An empty context means no usable credentials.
    """

    scheme: AuthScheme | None = None
    user_id: Any = None
    password: str | None = None
    bearer_token: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_authenticated(self) -> bool:
        """Whether a bearer token resolved to a user."""
        return self.scheme == AuthScheme.BEARER and self.user_id is not None


def parse_authorization(header: str | None, resolve_token: Callable[[str], Any]) -> AuthContext:
    """Parse an Authorization header value. Never raises for malformed input."""
    if not header:
        return AuthContext()

    match = AUTHORIZATION_RE.fullmatch(header)
    if match is None:
        return AuthContext()

    scheme = match["scheme"].lower()
    parameters = match["parameters"]

    if scheme == "basic":
        try:
            decoded = base64.b64decode(parameters, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError):
            return AuthContext()
        user_id, separator, password = decoded.partition(":")
        if not separator:
            return AuthContext()
        return AuthContext(scheme=AuthScheme.BASIC, user_id=user_id, password=password)

    if scheme == "bearer":
        return AuthContext(scheme=AuthScheme.BEARER, user_id=resolve_token(parameters), bearer_token=parameters)

    return AuthContext()


def create_auth_middleware(
    resolve_token: Callable[[str], Any],
) -> Callable[[Request, Callable[[Request], Awaitable[Response]]], Awaitable[Response]]:
    """Build an HTTP middleware that stores an AuthContext on request.state.auth."""

    async def auth_middleware(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        request.state.auth = parse_authorization(request.headers.get("Authorization"), resolve_token)
        return await call_next(request)

    return auth_middleware
