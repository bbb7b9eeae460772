"""Shared pytest fixtures."""

from datetime import UTC, datetime, timedelta
from uuid import UUID

import pytest

from learnhub.core.modules.session.manager import TokenManager
from learnhub.core.modules.user.models import User

SECRET_KEY = "test-secret-key-0123456789abcdefghij"


class FakeClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 1, 9, 0, tzinfo=UTC))


@pytest.fixture
def token_manager(clock):
    return TokenManager(SECRET_KEY, token_lifetime=timedelta(hours=24), clock=clock)


@pytest.fixture
def mock_user():
    """Create a mock user for testing."""
    return User(
        id=UUID("87654321-4321-8765-4321-876543218765"),
        name="Alice",
        email="alice@example.com",
        password_hash="$2b$12$hashed_password_here",
        is_instructor=True,
    )
