"""Session management models."""

from datetime import datetime, timedelta
from typing import Any, NewType

from pydantic import BaseModel

AuthToken = NewType("AuthToken", str)


class Session(BaseModel):
    """In-memory authentication session.

    Binds a random token to a user and tracks idle expiry. Sessions live only
    in the process that issued them; a restart invalidates all of them.
    """

    token: str
    user_id: Any
    idle_timeout: timedelta
    last_accessed: datetime
    expires_at: datetime | None = None  # Mirrors the signed token's exp claim

    def is_expired(self, at: datetime) -> bool:
        if self.expires_at is not None and at >= self.expires_at:
            return True
        return at - self.last_accessed >= self.idle_timeout

    def touch(self, at: datetime) -> None:
        """Refresh last access time, never moving it backwards."""
        self.last_accessed = max(self.last_accessed, at)
