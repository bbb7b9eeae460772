from __future__ import annotations

import asyncio
import contextlib
from datetime import timedelta
from typing import TYPE_CHECKING, Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from learnhub.core.core import Service
from learnhub.core.modules.session.manager import TokenManager
from learnhub.core.modules.session.models import AuthToken

if TYPE_CHECKING:
    from learnhub.core.core import Core

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Issues and resolves bearer tokens backed by the in-memory session table."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._manager: TokenManager | None = None
        self._sweep_task: asyncio.Task[None] | None = None

    def set_core(self, core: Core) -> None:
        """Set core and build the token manager from its config."""
        super().set_core(core)
        lifetime_hours = core.config.token_lifetime_hours
        self._manager = TokenManager(
            core.config.secret_key,
            token_lifetime=timedelta(hours=lifetime_hours) if lifetime_hours else None,
        )

    @property
    def manager(self) -> TokenManager:
        if self._manager is None:
            raise RuntimeError("Token manager not initialized")
        return self._manager

    async def on_start(self) -> None:
        """Start periodic cleanup of idle sessions."""
        interval = self.core.config.session_sweep_interval_seconds
        if interval > 0:
            self._sweep_task = asyncio.create_task(self._sweep_periodically(interval))

    async def on_stop(self) -> None:
        if self._sweep_task is not None:
            self._sweep_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._sweep_task
            self._sweep_task = None

    def create_session(self, user_id: UUID) -> AuthToken:
        return self.manager.issue_token(user_id, self.core.config.session_idle_minutes)

    def get_user_id(self, auth_token: str) -> UUID | None:
        """Resolve a bearer token to the user it was issued for."""
        return self.manager.resolve_token(auth_token)

    def invalidate_session(self, auth_token: str) -> bool:
        return self.manager.revoke_token(auth_token)

    def invalidate_user_sessions(self, user_id: UUID) -> int:
        return self.manager.revoke_user_sessions(user_id)

    async def _sweep_periodically(self, interval: int) -> None:
        while True:
            await asyncio.sleep(interval)
            removed = self.manager.sweep()
            if removed:
                logger.debug("idle_sessions_swept", removed=removed, active=self.manager.active_sessions())
